"""Reserved name / number checks shared by the message differ."""

from __future__ import annotations

from protocompat.diff.models import FieldDecl, MessageDecl, ReservedRange


def is_name_reserved(message: MessageDecl, name: str) -> bool:
    return name in message.reserved_names


def is_number_reserved(message: MessageDecl, number: int) -> bool:
    return any(number in r for r in message.reserved_ranges)


def is_field_reserved(message: MessageDecl, field: FieldDecl) -> bool:
    """True only when both the field's name and its number are reserved."""
    return is_name_reserved(message, field.name) and is_number_reserved(message, field.number)


def range_is_covered(message: MessageDecl, reserved: ReservedRange) -> bool:
    """True if a single reserved range of ``message`` contains ``reserved``.

    Coverage assembled from several adjacent ranges does not count.  That
    gives false positives for a split range, which are always fixable by
    re-declaring the original range.
    """
    return any(
        reserved.start >= r.start and reserved.end <= r.end for r in message.reserved_ranges
    )
