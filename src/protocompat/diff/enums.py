"""Enum comparison.

Values are looked up in the current enum both by number and by name, in two
independent passes:

1. previous number gone: same name elsewhere -> renumbered, else removed
2. previous name gone: same number elsewhere -> renamed

A value whose name and number both changed is only reported as removed.
"""

from __future__ import annotations

from protocompat.diff.changes import (
    EnumNameChanged,
    EnumRemoved,
    EnumValueChanged,
    EnumValueRemoved,
    Report,
)
from protocompat.diff.models import EnumDecl, EnumValueDecl


def diff_enums(
    report: Report,
    previous: dict[str, EnumDecl],
    current: dict[str, EnumDecl],
) -> None:
    for name, prev in previous.items():
        curr = current.get(name)
        if curr is None:
            report.add(EnumRemoved(enum=name))
            continue
        diff_enum(report, prev, curr)


def diff_enum(report: Report, previous: EnumDecl, current: EnumDecl) -> None:
    # Aliases: the last value declared for a number/name wins the index slot.
    by_number: dict[int, EnumValueDecl] = {v.number: v for v in current.values}
    by_name: dict[str, EnumValueDecl] = {v.name: v for v in current.values}

    for value in previous.values:
        if value.number in by_number:
            continue
        renumbered = by_name.get(value.name)
        if renumbered is not None:
            report.add(
                EnumValueChanged(
                    enum=previous.name,
                    name=value.name,
                    old_number=value.number,
                    new_number=renumbered.number,
                )
            )
        else:
            report.add(EnumValueRemoved(enum=previous.name, name=value.name))

    for value in previous.values:
        if value.name in by_name:
            continue
        renamed = by_number.get(value.number)
        if renamed is not None:
            report.add(
                EnumNameChanged(
                    enum=previous.name,
                    number=value.number,
                    old_name=value.name,
                    new_name=renamed.name,
                )
            )
