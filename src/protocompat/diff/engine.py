"""Top-level schema diff.

Groups both snapshots by package, then for every previous package runs the
enum, service and message differs in that order against one shared report.
Only removals and changes are detected; anything added in the current
snapshot is compatible and never reported.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog
from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from protocompat.core.logging import clear_request_id, get_request_id, set_request_id
from protocompat.diff.changes import DiffResult, PackageRemoved, Report
from protocompat.diff.enums import diff_enums
from protocompat.diff.messages import diff_messages
from protocompat.diff.models import FileUnit, Namespace, SchemaSnapshot
from protocompat.diff.services import diff_services
from protocompat.diff.snapshot import (
    SnapshotInput,
    snapshot_from_descriptor_set,
    snapshot_from_request,
    to_snapshot,
)

log = structlog.get_logger(__name__)


def group_by_package(snapshot: SchemaSnapshot) -> dict[str, list[FileUnit]]:
    """Bucket files by package, preserving file order within each bucket."""
    by_package: dict[str, list[FileUnit]] = {}
    for unit in snapshot.files:
        by_package.setdefault(unit.package, []).append(unit)
    return by_package


def build_namespace(package: str, files: Iterable[FileUnit]) -> Namespace:
    """Flatten a package's files into one name-keyed view per kind."""
    namespace = Namespace(package=package)
    for unit in files:
        namespace.messages.update((m.name, m) for m in unit.messages)
        namespace.enums.update((e.name, e) for e in unit.enums)
        namespace.services.update((s.name, s) for s in unit.services)
    return namespace


def diff_namespace(report: Report, previous: Namespace, current: Namespace) -> None:
    diff_enums(report, previous.enums, current.enums)
    diff_services(report, previous.services, current.services)
    diff_messages(report, previous.messages, current.messages)


def diff_snapshots(previous: SchemaSnapshot, current: SchemaSnapshot) -> DiffResult:
    """Compare two snapshots and collect every incompatible change."""
    owns_request_id = get_request_id() is None
    if owns_request_id:
        set_request_id()

    try:
        report = Report()
        prev_by_package = group_by_package(previous)
        curr_by_package = group_by_package(current)

        log.info(
            "diff_started",
            previous_packages=len(prev_by_package),
            current_packages=len(curr_by_package),
        )

        # Sorted so the report does not depend on snapshot file order.
        for package in sorted(prev_by_package):
            curr_files = curr_by_package.get(package)
            if curr_files is None:
                report.add(PackageRemoved(package=package))
                log.debug("package_removed", package=package)
                continue

            before = len(report)
            diff_namespace(
                report,
                build_namespace(package, prev_by_package[package]),
                build_namespace(package, curr_files),
            )
            log.debug("package_diffed", package=package, problems=len(report) - before)

        log.info("diff_finished", problems=len(report))
        return DiffResult(report=report)
    finally:
        if owns_request_id:
            clear_request_id()


def diff(
    previous: plugin_pb2.CodeGeneratorRequest,
    current: plugin_pb2.CodeGeneratorRequest,
) -> DiffResult:
    """Diff two ``CodeGeneratorRequest`` messages."""
    return diff_snapshots(snapshot_from_request(previous), snapshot_from_request(current))


def diff_set(
    previous: descriptor_pb2.FileDescriptorSet,
    current: descriptor_pb2.FileDescriptorSet,
) -> DiffResult:
    """Diff two ``FileDescriptorSet`` messages."""
    return diff_snapshots(
        snapshot_from_descriptor_set(previous),
        snapshot_from_descriptor_set(current),
    )


def diff_files(previous: SnapshotInput, current: SnapshotInput) -> DiffResult:
    """Diff any pair of accepted inputs (see ``to_snapshot``)."""
    return diff_snapshots(to_snapshot(previous), to_snapshot(current))
