"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (PROTOCOMPAT__SECTION__KEY)
3. Project YAML (.protocompat/config.yaml)
4. Global YAML (~/.config/protocompat/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    PROTOCOMPAT__<SECTION>__<KEY>=<VALUE>

Examples:
    PROTOCOMPAT__LOGGING__LEVEL=DEBUG
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LEVEL_ALIASES = {"WARN": "WARNING"}


def _normalize_level(v: object) -> object:
    if not isinstance(v, str):
        return v
    level = v.upper()
    return _LEVEL_ALIASES.get(level, level)


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        return _normalize_level(v)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        PROTOCOMPAT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs one event per compared package.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        return _normalize_level(v)


class ProtoCompatConfig(BaseModel):
    """Root configuration for ProtoCompat.

    All settings can be configured via:
    1. Environment variables: PROTOCOMPAT__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
