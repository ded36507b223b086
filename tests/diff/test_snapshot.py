"""Unit tests for snapshot construction (snapshot.py).

Tests cover:
- Conversion of every declaration kind
- Accepted input forms
- Required-field validation with located error messages
"""

from __future__ import annotations

import pytest
from google.protobuf import descriptor_pb2

from protocompat.core.errors import ErrorCode, MalformedSchemaError
from protocompat.diff.models import (
    EnumValueDecl,
    FieldDecl,
    FileUnit,
    MethodDecl,
    ReservedRange,
    SchemaSnapshot,
)
from protocompat.diff.snapshot import (
    file_unit_from_proto,
    snapshot_from_descriptor_set,
    snapshot_from_files,
    snapshot_from_request,
    to_snapshot,
)
from tests.diff.proto_builders import (
    descriptor_set,
    enum,
    field,
    hello_request,
    method,
    proto_file,
    request,
    service,
)

# ============================================================================
# Tests: Conversion
# ============================================================================


class TestFileUnitConversion:
    """Tests for file_unit_from_proto."""

    def test_converts_messages_fields_and_reservations(self) -> None:
        proto = proto_file(
            messages=[
                hello_request(
                    field("name", 1),
                    field("wrapped", 2, "TYPE_MESSAGE", "LABEL_REPEATED", ".google.protobuf.Int64Value"),
                    reserved_names=["old"],
                    reserved_ranges=[(5, 8)],
                )
            ]
        )

        unit = file_unit_from_proto(proto)

        assert unit.name == "helloworld.proto"
        assert unit.package == "helloworld"
        (msg,) = unit.messages
        assert msg.name == "HelloRequest"
        assert msg.fields == (
            FieldDecl(number=1, name="name", type="TYPE_STRING", label="LABEL_OPTIONAL"),
            FieldDecl(
                number=2,
                name="wrapped",
                type="TYPE_MESSAGE",
                label="LABEL_REPEATED",
                type_name=".google.protobuf.Int64Value",
            ),
        )
        assert msg.reserved_names == ("old",)
        assert msg.reserved_ranges == (ReservedRange(start=5, end=8),)

    def test_converts_enums(self) -> None:
        unit = file_unit_from_proto(proto_file(enums=[enum("FOO", [("foo", 0), ("bar", 1)])]))

        (decl,) = unit.enums
        assert decl.name == "FOO"
        assert decl.values == (EnumValueDecl("foo", 0), EnumValueDecl("bar", 1))

    def test_streaming_is_presence(self) -> None:
        unit = file_unit_from_proto(
            proto_file(
                services=[
                    service(
                        "Foo",
                        [
                            method("Plain", ".a.In", ".a.Out"),
                            method("Up", ".a.In", ".a.Out", client_streaming=True),
                            method("Down", ".a.In", ".a.Out", server_streaming=True),
                        ],
                    )
                ]
            )
        )

        (svc,) = unit.services
        assert svc.methods == (
            MethodDecl("Plain", ".a.In", ".a.Out", False, False),
            MethodDecl("Up", ".a.In", ".a.Out", True, False),
            MethodDecl("Down", ".a.In", ".a.Out", False, True),
        )

    def test_explicit_false_streaming_counts_as_present(self) -> None:
        proto = proto_file(services=[service("Foo", [method("Invoke", ".a.In", ".a.Out")])])
        proto.service[0].method[0].client_streaming = False

        (svc,) = file_unit_from_proto(proto).services
        assert svc.methods[0].client_streaming is True

    def test_nested_types_ignored(self) -> None:
        outer = hello_request(field("name", 1))
        outer.nested_type.add(name="Inner").field.add(
            name="x", number=1, type=descriptor_pb2.FieldDescriptorProto.TYPE_INT32
        )

        (msg,) = file_unit_from_proto(proto_file(messages=[outer])).messages
        assert [f.name for f in msg.fields] == ["name"]

    def test_unnamed_file_uses_index(self) -> None:
        proto = descriptor_pb2.FileDescriptorProto(package="pkg")
        assert file_unit_from_proto(proto, index=3).name == "<file #3>"


# ============================================================================
# Tests: Input forms
# ============================================================================


class TestInputForms:
    """All accepted inputs reduce to the same snapshot."""

    def test_descriptor_set_and_request_agree(self) -> None:
        files = [proto_file(messages=[hello_request(field("name", 1))])]

        from_set = snapshot_from_descriptor_set(descriptor_set(*files))
        from_request = snapshot_from_request(request(*files))
        from_list = snapshot_from_files(files)

        assert from_set == from_request == from_list

    def test_to_snapshot_dispatches(self) -> None:
        proto = proto_file()
        expected = SchemaSnapshot(files=(file_unit_from_proto(proto),))

        assert to_snapshot(descriptor_set(proto)) == expected
        assert to_snapshot(request(proto)) == expected
        assert to_snapshot([proto]) == expected
        assert to_snapshot(expected) is expected

    def test_file_units_pass_through(self) -> None:
        unit = FileUnit(name="a.proto", package="a")
        assert snapshot_from_files([unit]).files == (unit,)

    @pytest.mark.parametrize("value", [42, "helloworld.proto", b"\x00", None])
    def test_unsupported_input(self, value: object) -> None:
        with pytest.raises(MalformedSchemaError) as exc_info:
            to_snapshot(value)  # type: ignore[arg-type]
        assert exc_info.value.code == ErrorCode.SCHEMA_UNSUPPORTED_INPUT

    def test_unsupported_item_in_collection(self) -> None:
        with pytest.raises(MalformedSchemaError):
            snapshot_from_files([proto_file(), "not a file"])


# ============================================================================
# Tests: Validation
# ============================================================================


class TestValidation:
    """Missing required fields raise MalformedSchemaError naming the location."""

    def _assert_missing(self, proto: descriptor_pb2.FileDescriptorProto, message: str) -> None:
        with pytest.raises(MalformedSchemaError) as exc_info:
            file_unit_from_proto(proto)
        assert exc_info.value.code == ErrorCode.SCHEMA_MISSING_FIELD
        assert exc_info.value.message == message

    def test_missing_package(self) -> None:
        proto = descriptor_pb2.FileDescriptorProto(name="a.proto")
        self._assert_missing(proto, "a.proto: missing required 'package'")

    def test_missing_message_name(self) -> None:
        proto = proto_file()
        proto.message_type.add()
        self._assert_missing(proto, "helloworld.proto: missing required 'name'")

    def test_missing_field_number(self) -> None:
        msg = hello_request(field("name", 1))
        msg.field.add(name="broken", type=descriptor_pb2.FieldDescriptorProto.TYPE_STRING)
        self._assert_missing(
            proto_file(messages=[msg]),
            "helloworld.proto: message 'HelloRequest' field[1]: missing required 'number'",
        )

    def test_missing_field_label(self) -> None:
        msg = hello_request()
        msg.field.add(name="x", number=1, type=descriptor_pb2.FieldDescriptorProto.TYPE_STRING)
        self._assert_missing(
            proto_file(messages=[msg]),
            "helloworld.proto: message 'HelloRequest' field[0]: missing required 'label'",
        )

    def test_missing_reserved_range_end(self) -> None:
        msg = hello_request()
        msg.reserved_range.add(start=1)
        self._assert_missing(
            proto_file(messages=[msg]),
            "helloworld.proto: message 'HelloRequest' reserved_range[0]: missing required 'end'",
        )

    def test_missing_enum_value_number(self) -> None:
        decl = enum("FOO", [("foo", 0)])
        decl.value.add(name="bar")
        self._assert_missing(
            proto_file(enums=[decl]),
            "helloworld.proto: enum 'FOO' value[1]: missing required 'number'",
        )

    def test_missing_method_output_type(self) -> None:
        svc = service("Foo")
        svc.method.add(name="Invoke", input_type=".a.In")
        self._assert_missing(
            proto_file(services=[svc]),
            "helloworld.proto: service 'Foo' method[0]: missing required 'output_type'",
        )
