"""Change vocabulary and report for schema diffs.

Each problem kind is its own frozen dataclass carrying the context needed to
describe it.  ``render_change`` is the single place that turns a change into
text; the templates are consumed verbatim by downstream tooling and must not
drift.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, ClassVar, Literal, Union

from protocompat.core.errors import IncompatibleChangesError, InternalError


class ChangeKind(str, Enum):
    PACKAGE_REMOVED = "package_removed"
    MESSAGE_REMOVED = "message_removed"
    FIELD_REMOVED = "field_removed"
    FIELD_RENAMED = "field_renamed"
    FIELD_TYPE_CHANGED = "field_type_changed"
    FIELD_REFERENCE_TYPE_CHANGED = "field_reference_type_changed"
    FIELD_LABEL_CHANGED = "field_label_changed"
    RESERVED_NAME_REMOVED = "reserved_name_removed"
    RESERVED_RANGE_REMOVED = "reserved_range_removed"
    ENUM_REMOVED = "enum_removed"
    ENUM_VALUE_REMOVED = "enum_value_removed"
    ENUM_VALUE_CHANGED = "enum_value_changed"
    ENUM_NAME_CHANGED = "enum_name_changed"
    SERVICE_REMOVED = "service_removed"
    SERVICE_METHOD_REMOVED = "service_method_removed"
    SERVICE_TYPE_CHANGED = "service_type_changed"
    SERVICE_STREAMING_CHANGED = "service_streaming_changed"


class _ChangeBase:
    """Common behavior of every change variant."""

    __slots__ = ()

    kind: ClassVar[ChangeKind]

    def __str__(self) -> str:
        return render_change(self)  # type: ignore[arg-type]


# =============================================================================
# Package / message / field
# =============================================================================


@dataclass(frozen=True, slots=True)
class PackageRemoved(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.PACKAGE_REMOVED
    package: str


@dataclass(frozen=True, slots=True)
class MessageRemoved(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.MESSAGE_REMOVED
    message: str


@dataclass(frozen=True, slots=True)
class FieldRemoved(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.FIELD_REMOVED
    message: str
    field: str


@dataclass(frozen=True, slots=True)
class FieldRenamed(_ChangeBase):
    """Identified by number since the name itself changed."""

    kind: ClassVar[ChangeKind] = ChangeKind.FIELD_RENAMED
    message: str
    number: int
    old_name: str
    new_name: str


@dataclass(frozen=True, slots=True)
class FieldTypeChanged(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.FIELD_TYPE_CHANGED
    message: str
    field: str
    old_type: str
    new_type: str


@dataclass(frozen=True, slots=True)
class FieldReferenceTypeChanged(_ChangeBase):
    """Same scalar kind, different fully-qualified message/enum reference."""

    kind: ClassVar[ChangeKind] = ChangeKind.FIELD_REFERENCE_TYPE_CHANGED
    message: str
    field: str
    old_type: str
    new_type: str


@dataclass(frozen=True, slots=True)
class FieldLabelChanged(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.FIELD_LABEL_CHANGED
    message: str
    field: str
    old_label: str
    new_label: str


@dataclass(frozen=True, slots=True)
class ReservedNameRemoved(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.RESERVED_NAME_REMOVED
    message: str
    name: str


@dataclass(frozen=True, slots=True)
class ReservedRangeRemoved(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.RESERVED_RANGE_REMOVED
    message: str
    start: int
    end: int  # exclusive


# =============================================================================
# Enums
# =============================================================================


@dataclass(frozen=True, slots=True)
class EnumRemoved(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.ENUM_REMOVED
    enum: str


@dataclass(frozen=True, slots=True)
class EnumValueRemoved(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.ENUM_VALUE_REMOVED
    enum: str
    name: str


@dataclass(frozen=True, slots=True)
class EnumValueChanged(_ChangeBase):
    """Same value name, different number."""

    kind: ClassVar[ChangeKind] = ChangeKind.ENUM_VALUE_CHANGED
    enum: str
    name: str
    old_number: int
    new_number: int


@dataclass(frozen=True, slots=True)
class EnumNameChanged(_ChangeBase):
    """Same number, different value name."""

    kind: ClassVar[ChangeKind] = ChangeKind.ENUM_NAME_CHANGED
    enum: str
    number: int
    old_name: str
    new_name: str


# =============================================================================
# Services
# =============================================================================


@dataclass(frozen=True, slots=True)
class ServiceRemoved(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.SERVICE_REMOVED
    service: str


@dataclass(frozen=True, slots=True)
class ServiceMethodRemoved(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.SERVICE_METHOD_REMOVED
    service: str
    method: str


@dataclass(frozen=True, slots=True)
class ServiceTypeChanged(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.SERVICE_TYPE_CHANGED
    service: str
    method: str
    side: Literal["input", "output"]
    old_type: str
    new_type: str


@dataclass(frozen=True, slots=True)
class ServiceStreamingChanged(_ChangeBase):
    kind: ClassVar[ChangeKind] = ChangeKind.SERVICE_STREAMING_CHANGED
    service: str
    method: str
    side: Literal["client", "server"]
    old_streaming: bool
    new_streaming: bool


Change = Union[
    PackageRemoved,
    MessageRemoved,
    FieldRemoved,
    FieldRenamed,
    FieldTypeChanged,
    FieldReferenceTypeChanged,
    FieldLabelChanged,
    ReservedNameRemoved,
    ReservedRangeRemoved,
    EnumRemoved,
    EnumValueRemoved,
    EnumValueChanged,
    EnumNameChanged,
    ServiceRemoved,
    ServiceMethodRemoved,
    ServiceTypeChanged,
    ServiceStreamingChanged,
]


# =============================================================================
# Rendering
# =============================================================================


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _render_reserved_range(c: ReservedRangeRemoved) -> str:
    if c.end - c.start > 1:
        return (
            f"un-reserved field number(s) in range {c.start} to {c.end - 1} "
            f"from message '{c.message}'"
        )
    return f"un-reserved field number {c.start} from message '{c.message}'"


_RENDERERS: dict[ChangeKind, Callable[[Any], str]] = {
    ChangeKind.PACKAGE_REMOVED: lambda c: f"removed package '{c.package}'",
    ChangeKind.MESSAGE_REMOVED: lambda c: f"removed message '{c.message}'",
    ChangeKind.FIELD_REMOVED: lambda c: f"removed field '{c.field}' from message '{c.message}'",
    ChangeKind.FIELD_RENAMED: lambda c: (
        f"changed name for field #{c.number} on message '{c.message}': "
        f"{c.old_name} -> {c.new_name}"
    ),
    ChangeKind.FIELD_TYPE_CHANGED: lambda c: (
        f"changed types for field '{c.field}' on message '{c.message}': "
        f"{c.old_type} -> {c.new_type}"
    ),
    ChangeKind.FIELD_REFERENCE_TYPE_CHANGED: lambda c: (
        f"changed types for field '{c.field}' on message '{c.message}': "
        f"{c.old_type} -> {c.new_type}"
    ),
    ChangeKind.FIELD_LABEL_CHANGED: lambda c: (
        f"changed label for field '{c.field}' on message '{c.message}': "
        f"{c.old_label} -> {c.new_label}"
    ),
    ChangeKind.RESERVED_NAME_REMOVED: lambda c: (
        f"un-reserved field name '{c.name}' from message '{c.message}'"
    ),
    ChangeKind.RESERVED_RANGE_REMOVED: _render_reserved_range,
    ChangeKind.ENUM_REMOVED: lambda c: f"removed enum '{c.enum}'",
    ChangeKind.ENUM_VALUE_REMOVED: lambda c: f"removed value '{c.name}' from enum '{c.enum}'",
    ChangeKind.ENUM_VALUE_CHANGED: lambda c: (
        f"changed value '{c.name}' on enum '{c.enum}': {c.old_number} -> {c.new_number}"
    ),
    ChangeKind.ENUM_NAME_CHANGED: lambda c: (
        f"changed name of field #{c.number} on enum '{c.enum}': {c.old_name} -> {c.new_name}"
    ),
    ChangeKind.SERVICE_REMOVED: lambda c: f"removed service '{c.service}'",
    ChangeKind.SERVICE_METHOD_REMOVED: lambda c: (
        f"removed method '{c.method}' from service '{c.service}'"
    ),
    ChangeKind.SERVICE_TYPE_CHANGED: lambda c: (
        f"changed {c.side} type for method '{c.method}' on service '{c.service}': "
        f"{c.old_type} -> {c.new_type}"
    ),
    ChangeKind.SERVICE_STREAMING_CHANGED: lambda c: (
        f"changed {c.side} streaming for method '{c.method}' on service '{c.service}': "
        f"{_bool(c.old_streaming)} -> {_bool(c.new_streaming)}"
    ),
}


def render_change(change: Change) -> str:
    """Human-readable, stable description of one change."""
    renderer = _RENDERERS.get(change.kind)
    if renderer is None:
        raise InternalError.unexpected("no renderer for change kind", kind=str(change.kind))
    return renderer(change)


def change_to_dict(change: Change) -> dict[str, Any]:
    """Serialize for JSON consumers: kind, description, then the payload."""
    return {
        "kind": change.kind.value,
        "description": render_change(change),
        **asdict(change),
    }


# =============================================================================
# Report
# =============================================================================


class Report:
    """Ordered, append-only sequence of changes found by one diff call.

    Once sealed (``DiffResult`` seals the report it wraps) no further changes
    can be added.
    """

    __slots__ = ("_changes", "_sealed")

    def __init__(self) -> None:
        self._changes: list[Change] = []
        self._sealed = False

    @property
    def changes(self) -> tuple[Change, ...]:
        return tuple(self._changes)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def add(self, change: Change) -> None:
        if self._sealed:
            raise InternalError.unexpected(
                "change added to a sealed report", kind=change.kind.value
            )
        self._changes.append(change)

    def seal(self) -> None:
        self._sealed = True

    def __len__(self) -> int:
        return len(self._changes)

    def __iter__(self) -> Iterator[Change]:
        return iter(self._changes)

    def __bool__(self) -> bool:
        return bool(self._changes)

    def __repr__(self) -> str:
        return f"Report(changes={self._changes!r}, sealed={self._sealed})"

    def render(self) -> list[str]:
        return [render_change(c) for c in self._changes]

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": len(self._changes),
            "changes": [change_to_dict(c) for c in self._changes],
        }


@dataclass(frozen=True)
class DiffResult:
    """A completed report plus the pass/fail signal derived from it.

    The report is the only source of truth: ``ok`` and ``error`` are
    recomputed from it on access.
    """

    report: Report

    def __post_init__(self) -> None:
        self.report.seal()

    @property
    def ok(self) -> bool:
        return not self.report

    @property
    def error(self) -> IncompatibleChangesError | None:
        if self.ok:
            return None
        return IncompatibleChangesError.from_report(self.report)

    def raise_for_problems(self) -> None:
        """Raise ``IncompatibleChangesError`` if any change was found."""
        error = self.error
        if error is not None:
            raise error
