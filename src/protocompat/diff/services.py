"""Service and method comparison."""

from __future__ import annotations

from protocompat.diff.changes import (
    Report,
    ServiceMethodRemoved,
    ServiceRemoved,
    ServiceStreamingChanged,
    ServiceTypeChanged,
)
from protocompat.diff.models import MethodDecl, ServiceDecl


def diff_services(
    report: Report,
    previous: dict[str, ServiceDecl],
    current: dict[str, ServiceDecl],
) -> None:
    for name, prev in previous.items():
        curr = current.get(name)
        if curr is None:
            report.add(ServiceRemoved(service=name))
            continue
        diff_service(report, prev, curr)


def diff_service(report: Report, previous: ServiceDecl, current: ServiceDecl) -> None:
    by_name: dict[str, MethodDecl] = {m.name: m for m in current.methods}

    for prev in previous.methods:
        nxt = by_name.get(prev.name)
        if nxt is None:
            report.add(ServiceMethodRemoved(service=previous.name, method=prev.name))
            continue
        _diff_method(report, current.name, prev, nxt)


def _diff_method(report: Report, service: str, old: MethodDecl, new: MethodDecl) -> None:
    if old.input_type != new.input_type:
        report.add(
            ServiceTypeChanged(
                service=service,
                method=old.name,
                side="input",
                old_type=old.input_type,
                new_type=new.input_type,
            )
        )
    if old.output_type != new.output_type:
        report.add(
            ServiceTypeChanged(
                service=service,
                method=old.name,
                side="output",
                old_type=old.output_type,
                new_type=new.output_type,
            )
        )
    if old.client_streaming != new.client_streaming:
        report.add(
            ServiceStreamingChanged(
                service=service,
                method=old.name,
                side="client",
                old_streaming=old.client_streaming,
                new_streaming=new.client_streaming,
            )
        )
    if old.server_streaming != new.server_streaming:
        report.add(
            ServiceStreamingChanged(
                service=service,
                method=old.name,
                side="server",
                old_streaming=old.server_streaming,
                new_streaming=new.server_streaming,
            )
        )
