"""Tests for structlog configuration."""

from __future__ import annotations

import json

import pytest
import structlog

from icc.log_config import configure_logging


class TestConfigureLogging:
    """Renderer and level selection."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="INFO", log_format="json")
        structlog.get_logger().info("config_compared", compliant=3)
        record = json.loads(capsys.readouterr().out.strip())
        assert record["event"] == "config_compared"
        assert record["compliant"] == 3
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="DEBUG", log_format="console")
        structlog.get_logger().debug("configuration_processed", sections=2)
        out = capsys.readouterr().out
        assert "configuration_processed" in out
        assert "sections" in out

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="WARNING", log_format="json")
        logger = structlog.get_logger()
        logger.info("dropped")
        logger.warning("input_rejected", size=10, limit=5)
        lines = [line for line in capsys.readouterr().out.splitlines() if line]
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "input_rejected"

    def test_context_vars_merged(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="INFO", log_format="json")
        structlog.contextvars.bind_contextvars(device="core-r1")
        try:
            structlog.get_logger().info("config_compared")
        finally:
            structlog.contextvars.clear_contextvars()
        assert json.loads(capsys.readouterr().out.strip())["device"] == "core-r1"

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging(log_level="LOUD")
