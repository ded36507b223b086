"""Snapshot construction from compiled protobuf descriptors.

This is the only place that touches ``descriptor_pb2`` messages.  Every
field the comparison depends on is checked for presence here, so the diff
engine can treat its input as fully populated.  A missing field raises
``MalformedSchemaError`` naming the offending declaration.

Accepted inputs:
- ``FileDescriptorSet`` (``protoc -o``)
- ``CodeGeneratorRequest`` (protoc plugin input)
- any iterable of ``FileDescriptorProto`` or ``FileUnit``
- an existing ``SchemaSnapshot``
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Union

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from protocompat.core.errors import MalformedSchemaError
from protocompat.diff.models import (
    EnumDecl,
    EnumValueDecl,
    FieldDecl,
    FileUnit,
    MessageDecl,
    MethodDecl,
    ReservedRange,
    SchemaSnapshot,
    ServiceDecl,
)

SnapshotInput = Union[
    SchemaSnapshot,
    descriptor_pb2.FileDescriptorSet,
    plugin_pb2.CodeGeneratorRequest,
    Iterable[Any],
]

_FieldType = descriptor_pb2.FieldDescriptorProto.Type
_FieldLabel = descriptor_pb2.FieldDescriptorProto.Label


def _require(proto: Any, field: str, location: str) -> Any:
    if not proto.HasField(field):
        raise MalformedSchemaError.missing_field(location, field)
    return getattr(proto, field)


def _field_from_proto(proto: descriptor_pb2.FieldDescriptorProto, location: str) -> FieldDecl:
    return FieldDecl(
        number=_require(proto, "number", location),
        name=_require(proto, "name", location),
        type=_FieldType.Name(_require(proto, "type", location)),
        label=_FieldLabel.Name(_require(proto, "label", location)),
        type_name=proto.type_name if proto.HasField("type_name") else None,
    )


def _message_from_proto(proto: descriptor_pb2.DescriptorProto, location: str) -> MessageDecl:
    name = _require(proto, "name", location)
    location = f"{location}: message '{name}'"

    fields = tuple(
        _field_from_proto(f, f"{location} field[{i}]") for i, f in enumerate(proto.field)
    )
    ranges = tuple(
        ReservedRange(
            start=_require(r, "start", f"{location} reserved_range[{i}]"),
            end=_require(r, "end", f"{location} reserved_range[{i}]"),
        )
        for i, r in enumerate(proto.reserved_range)
    )
    return MessageDecl(
        name=name,
        fields=fields,
        reserved_names=tuple(proto.reserved_name),
        reserved_ranges=ranges,
    )


def _enum_from_proto(proto: descriptor_pb2.EnumDescriptorProto, location: str) -> EnumDecl:
    name = _require(proto, "name", location)
    location = f"{location}: enum '{name}'"

    values = []
    for i, value in enumerate(proto.value):
        value_location = f"{location} value[{i}]"
        values.append(
            EnumValueDecl(
                name=_require(value, "name", value_location),
                number=_require(value, "number", value_location),
            )
        )
    return EnumDecl(name=name, values=tuple(values))


def _service_from_proto(proto: descriptor_pb2.ServiceDescriptorProto, location: str) -> ServiceDecl:
    name = _require(proto, "name", location)
    location = f"{location}: service '{name}'"

    methods = []
    for i, method in enumerate(proto.method):
        method_location = f"{location} method[{i}]"
        methods.append(
            MethodDecl(
                name=_require(method, "name", method_location),
                input_type=_require(method, "input_type", method_location),
                output_type=_require(method, "output_type", method_location),
                # Presence, not value: an explicit ``false`` still counts.
                client_streaming=method.HasField("client_streaming"),
                server_streaming=method.HasField("server_streaming"),
            )
        )
    return ServiceDecl(name=name, methods=tuple(methods))


def file_unit_from_proto(proto: descriptor_pb2.FileDescriptorProto, index: int = 0) -> FileUnit:
    """Convert one ``FileDescriptorProto``.  Nested types are not converted."""
    file_name = proto.name if proto.HasField("name") else f"<file #{index}>"
    package = _require(proto, "package", file_name)

    return FileUnit(
        name=file_name,
        package=package,
        messages=tuple(_message_from_proto(m, file_name) for m in proto.message_type),
        enums=tuple(_enum_from_proto(e, file_name) for e in proto.enum_type),
        services=tuple(_service_from_proto(s, file_name) for s in proto.service),
    )


def snapshot_from_files(files: Iterable[Any]) -> SchemaSnapshot:
    """Build a snapshot from ``FileDescriptorProto`` messages or ``FileUnit`` records."""
    units: list[FileUnit] = []
    for index, item in enumerate(files):
        if isinstance(item, FileUnit):
            units.append(item)
        elif isinstance(item, descriptor_pb2.FileDescriptorProto):
            units.append(file_unit_from_proto(item, index))
        else:
            raise MalformedSchemaError.unsupported_input(item)
    return SchemaSnapshot(files=tuple(units))


def snapshot_from_descriptor_set(fds: descriptor_pb2.FileDescriptorSet) -> SchemaSnapshot:
    return snapshot_from_files(fds.file)


def snapshot_from_request(request: plugin_pb2.CodeGeneratorRequest) -> SchemaSnapshot:
    return snapshot_from_files(request.proto_file)


def to_snapshot(value: SnapshotInput) -> SchemaSnapshot:
    """Reduce any accepted input form to a ``SchemaSnapshot``."""
    if isinstance(value, SchemaSnapshot):
        return value
    if isinstance(value, descriptor_pb2.FileDescriptorSet):
        return snapshot_from_descriptor_set(value)
    if isinstance(value, plugin_pb2.CodeGeneratorRequest):
        return snapshot_from_request(value)
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise MalformedSchemaError.unsupported_input(value)
    return snapshot_from_files(value)
