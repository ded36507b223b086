"""Core module exports."""

from protocompat.core.errors import (
    ConfigError,
    ErrorCode,
    IncompatibleChangesError,
    InternalError,
    MalformedSchemaError,
    ProtoCompatError,
)
from protocompat.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "IncompatibleChangesError",
    "InternalError",
    "MalformedSchemaError",
    "ProtoCompatError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
