"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- ProtoCompatConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from protocompat.config.models import LoggingConfig, LogOutputConfig, ProtoCompatConfig


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        """Default values."""
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    @pytest.mark.parametrize("destination", ["stderr", "stdout"])
    def test_stream_destinations(self, destination: str) -> None:
        assert LogOutputConfig(destination=destination).destination == destination

    def test_absolute_file_destination(self) -> None:
        assert LogOutputConfig(destination="/var/log/protocompat.log").destination == (
            "/var/log/protocompat.log"
        )

    def test_relative_file_destination_rejected(self) -> None:
        with pytest.raises(ValidationError, match="absolute path"):
            LogOutputConfig(destination="logs/protocompat.log")

    def test_invalid_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(format="xml")  # type: ignore[arg-type]


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert len(config.outputs) == 1
        assert config.outputs[0].destination == "stderr"

    def test_level_is_case_insensitive(self) -> None:
        assert LoggingConfig(level="debug").level == "DEBUG"  # type: ignore[arg-type]

    def test_warn_alias_maps_to_warning(self) -> None:
        assert LoggingConfig(level="warn").level == "WARNING"  # type: ignore[arg-type]
        assert LogOutputConfig(level="WARN").level == "WARNING"  # type: ignore[arg-type]

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")  # type: ignore[arg-type]


class TestProtoCompatConfig:
    """Tests for the root model."""

    def test_defaults(self) -> None:
        assert ProtoCompatConfig().logging.level == "INFO"

    def test_nested_dict(self) -> None:
        config = ProtoCompatConfig.model_validate({"logging": {"level": "ERROR"}})
        assert config.logging.level == "ERROR"
