"""Tests for error types and codes."""

import pytest

from protocompat.core.errors import (
    ConfigError,
    ErrorCode,
    IncompatibleChangesError,
    InternalError,
    MalformedSchemaError,
    ProtoCompatError,
)
from protocompat.diff.changes import EnumRemoved, PackageRemoved, Report


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.SCHEMA_MISSING_FIELD, 3000),
            (ErrorCode.SCHEMA_UNSUPPORTED_INPUT, 3000),
            (ErrorCode.INCOMPATIBLE_CHANGES, 4000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestProtoCompatError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = ProtoCompatError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        error = ProtoCompatError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")
        assert str(error) == "[9001] INTERNAL_ERROR: Something broke"

    def test_is_raisable(self) -> None:
        with pytest.raises(ProtoCompatError) as exc_info:
            raise InternalError.unexpected("boom", where="test")
        assert exc_info.value.details == {"where": "test"}


class TestConfigError:
    """ConfigError factory method tests."""

    def test_parse_error(self) -> None:
        error = ConfigError.parse_error("/tmp/config.yaml", "bad indent")
        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "/tmp/config.yaml" in error.message
        assert error.details == {"path": "/tmp/config.yaml", "reason": "bad indent"}

    def test_invalid_value(self) -> None:
        error = ConfigError.invalid_value("logging.level", "LOUD", "not a level")
        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert error.details["field"] == "logging.level"
        assert error.details["value"] == "LOUD"


class TestMalformedSchemaError:
    """MalformedSchemaError factory method tests."""

    def test_missing_field_names_location(self) -> None:
        error = MalformedSchemaError.missing_field("a.proto: message 'Foo' field[0]", "number")
        assert error.code == ErrorCode.SCHEMA_MISSING_FIELD
        assert error.message == "a.proto: message 'Foo' field[0]: missing required 'number'"

    def test_unsupported_input_names_type(self) -> None:
        error = MalformedSchemaError.unsupported_input(42)
        assert error.code == ErrorCode.SCHEMA_UNSUPPORTED_INPUT
        assert error.details == {"type": "int"}


class TestIncompatibleChangesError:
    """Aggregate diff failure."""

    def test_from_report_counts_and_renders(self) -> None:
        report = Report()
        report.add(PackageRemoved(package="foo"))
        report.add(EnumRemoved(enum="FOO"))

        error = IncompatibleChangesError.from_report(report)

        assert error.code == ErrorCode.INCOMPATIBLE_CHANGES
        assert error.message == "found 2 problems: [removed package 'foo' removed enum 'FOO']"
        assert error.details["count"] == 2
        assert error.details["problems"] == ["removed package 'foo'", "removed enum 'FOO'"]
