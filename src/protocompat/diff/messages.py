"""Message and field comparison.

Messages are matched by name, fields by number (the wire identity).  A
removed field is tolerated only when both its name and number are now
reserved.  Every reservation in the previous message must survive.
"""

from __future__ import annotations

from protocompat.diff.changes import (
    FieldLabelChanged,
    FieldReferenceTypeChanged,
    FieldRemoved,
    FieldRenamed,
    FieldTypeChanged,
    MessageRemoved,
    Report,
    ReservedNameRemoved,
    ReservedRangeRemoved,
)
from protocompat.diff.models import FieldDecl, MessageDecl
from protocompat.diff.reserved import is_field_reserved, range_is_covered


def diff_messages(
    report: Report,
    previous: dict[str, MessageDecl],
    current: dict[str, MessageDecl],
) -> None:
    for name, prev in previous.items():
        curr = current.get(name)
        if curr is None:
            report.add(MessageRemoved(message=name))
            continue
        diff_message(report, prev, curr)


def diff_message(report: Report, previous: MessageDecl, current: MessageDecl) -> None:
    diff_fields(report, previous, current)
    diff_reserved_names(report, previous, current)
    diff_reserved_ranges(report, previous, current)


def diff_fields(report: Report, previous: MessageDecl, current: MessageDecl) -> None:
    by_number: dict[int, FieldDecl] = {f.number: f for f in current.fields}

    for field in previous.fields:
        nxt = by_number.get(field.number)
        if nxt is None:
            if not is_field_reserved(current, field):
                report.add(FieldRemoved(message=current.name, field=field.name))
            continue
        _diff_field(report, current.name, field, nxt)


def _diff_field(report: Report, message: str, old: FieldDecl, new: FieldDecl) -> None:
    if old.name != new.name:
        report.add(
            FieldRenamed(
                message=message,
                number=old.number,
                old_name=old.name,
                new_name=new.name,
            )
        )
    if old.type != new.type:
        report.add(
            FieldTypeChanged(
                message=message,
                field=old.name,
                old_type=old.type,
                new_type=new.type,
            )
        )
    elif (
        old.type_name is not None
        and new.type_name is not None
        and old.type_name != new.type_name
    ):
        # protoc only emits fully-qualified names, so string equality suffices.
        report.add(
            FieldReferenceTypeChanged(
                message=message,
                field=old.name,
                old_type=old.type_name,
                new_type=new.type_name,
            )
        )
    if old.label != new.label:
        report.add(
            FieldLabelChanged(
                message=message,
                field=old.name,
                old_label=old.label,
                new_label=new.label,
            )
        )


def diff_reserved_names(report: Report, previous: MessageDecl, current: MessageDecl) -> None:
    still_reserved = set(current.reserved_names)
    for name in previous.reserved_names:
        if name not in still_reserved:
            report.add(ReservedNameRemoved(message=current.name, name=name))


def diff_reserved_ranges(report: Report, previous: MessageDecl, current: MessageDecl) -> None:
    for reserved in previous.reserved_ranges:
        if not range_is_covered(current, reserved):
            report.add(
                ReservedRangeRemoved(
                    message=current.name,
                    start=reserved.start,
                    end=reserved.end,
                )
            )
