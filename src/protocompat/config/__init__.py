"""Config module exports."""

from protocompat.config.loader import load_config
from protocompat.config.models import (
    LoggingConfig,
    LogOutputConfig,
    ProtoCompatConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "LogOutputConfig",
    "ProtoCompatConfig",
]
