"""Data models for schema snapshots.

All models are frozen dataclasses built once from descriptor input and
never mutated by the diff engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ReservedRange:
    """Reserved field numbers, half-open ``[start, end)``."""

    start: int
    end: int

    def __contains__(self, number: object) -> bool:
        return isinstance(number, int) and self.start <= number < self.end


@dataclass(frozen=True, slots=True)
class FieldDecl:
    """A message field.  ``number`` is the identity key for matching."""

    number: int
    name: str
    type: str  # e.g. "TYPE_STRING"
    label: str  # e.g. "LABEL_OPTIONAL"
    type_name: str | None = None  # fully-qualified, set for message/enum kinds


@dataclass(frozen=True, slots=True)
class MessageDecl:
    name: str
    fields: tuple[FieldDecl, ...] = ()
    reserved_names: tuple[str, ...] = ()
    reserved_ranges: tuple[ReservedRange, ...] = ()


@dataclass(frozen=True, slots=True)
class EnumValueDecl:
    name: str
    number: int


@dataclass(frozen=True, slots=True)
class EnumDecl:
    """An enum.  Several values may alias the same number."""

    name: str
    values: tuple[EnumValueDecl, ...] = ()


@dataclass(frozen=True, slots=True)
class MethodDecl:
    name: str
    input_type: str
    output_type: str
    client_streaming: bool = False
    server_streaming: bool = False


@dataclass(frozen=True, slots=True)
class ServiceDecl:
    name: str
    methods: tuple[MethodDecl, ...] = ()


@dataclass(frozen=True, slots=True)
class FileUnit:
    """Top-level declarations of one compiled schema file."""

    name: str
    package: str
    messages: tuple[MessageDecl, ...] = ()
    enums: tuple[EnumDecl, ...] = ()
    services: tuple[ServiceDecl, ...] = ()


@dataclass(frozen=True, slots=True)
class SchemaSnapshot:
    """One full version of a schema.  File order carries no meaning."""

    files: tuple[FileUnit, ...] = ()


@dataclass(frozen=True)
class Namespace:
    """All top-level declarations sharing one package, flattened per kind.

    Derived per diff call.  Names are assumed unique within a package; when
    they are not, the declaration from the later file wins.
    """

    package: str
    messages: dict[str, MessageDecl] = field(default_factory=dict)
    enums: dict[str, EnumDecl] = field(default_factory=dict)
    services: dict[str, ServiceDecl] = field(default_factory=dict)
