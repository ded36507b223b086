"""ProtoCompat error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Schema (malformed descriptor input)
- 4xxx: Compatibility (aggregate diff failure)
- 9xxx: Internal
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from protocompat.diff.changes import Report


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Schema (3xxx)
    SCHEMA_MISSING_FIELD = 3001
    SCHEMA_UNSUPPORTED_INPUT = 3002

    # Compatibility (4xxx)
    INCOMPATIBLE_CHANGES = 4001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class ProtoCompatError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SCHEMA_MISSING_FIELD')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ProtoCompatError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> ConfigError:
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> ConfigError:
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class MalformedSchemaError(ProtoCompatError):
    """A descriptor tree is missing data the comparison depends on."""

    @classmethod
    def missing_field(cls, location: str, field: str) -> MalformedSchemaError:
        return cls(
            code=ErrorCode.SCHEMA_MISSING_FIELD,
            message=f"{location}: missing required '{field}'",
            details={"location": location, "field": field},
        )

    @classmethod
    def unsupported_input(cls, value: Any) -> MalformedSchemaError:
        type_name = type(value).__name__
        return cls(
            code=ErrorCode.SCHEMA_UNSUPPORTED_INPUT,
            message=f"Cannot build a schema snapshot from {type_name}",
            details={"type": type_name},
        )


class IncompatibleChangesError(ProtoCompatError):
    """Aggregate failure derived from a non-empty report.

    Never raised by the diff traversal itself; see ``DiffResult.error``.
    """

    @classmethod
    def from_report(cls, report: Report) -> IncompatibleChangesError:
        rendered = report.render()
        return cls(
            code=ErrorCode.INCOMPATIBLE_CHANGES,
            message=f"found {len(report)} problems: [{' '.join(rendered)}]",
            details={"count": len(report), "problems": rendered},
        )


class InternalError(ProtoCompatError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> InternalError:
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
