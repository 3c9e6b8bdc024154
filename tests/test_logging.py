"""Tests for structured logging."""

from __future__ import annotations

import json
from io import StringIO

import structlog

from nunit_results.config import Settings
from nunit_results.logging import configure_from_settings, configure_logging, get_logger


class TestLoggingConfig:
    """Test suite for logging configuration."""

    def test_logger_outputs_json_format(self):
        """Logger should output JSON with event, level, timestamp and logger name."""
        # Given
        output = StringIO()
        configure_logging(log_level="INFO", json_format=True, stream=output)
        logger = get_logger("test")

        # When
        logger.info("test message", key="value")

        # Then
        parsed = json.loads(output.getvalue().strip())
        assert parsed["event"] == "test message"
        assert parsed["key"] == "value"
        assert parsed["level"] == "info"
        assert parsed["logger"] == "test"
        assert "timestamp" in parsed

    def test_level_filtering(self):
        """Messages below the configured level are dropped."""
        output = StringIO()
        configure_logging(log_level="WARNING", json_format=True, stream=output)
        logger = get_logger("test")

        logger.debug("hidden")
        logger.info("hidden too")
        logger.warning("shown")

        lines = output.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "shown"

    def test_console_format(self):
        """Console format is human readable, not JSON."""
        output = StringIO()
        configure_logging(log_level="INFO", json_format=False, stream=output)

        get_logger("test").info("console message")

        assert "console message" in output.getvalue()

    def test_logger_created_before_configuration(self):
        """Loggers pick up configuration applied after they were created."""
        logger = get_logger("early")
        output = StringIO()
        configure_logging(log_level="INFO", json_format=True, stream=output)

        logger.info("late config")

        assert json.loads(output.getvalue().strip())["event"] == "late config"

    def test_unconfigured_structlog_gets_default(self):
        """get_logger configures structlog when nobody has."""
        structlog.reset_defaults()

        get_logger("test")

        assert structlog.is_configured()

    def test_context_key_is_renamed(self):
        """The bound name is rendered as ``logger`` and not leaked as ``logger_name``."""
        output = StringIO()
        configure_logging(log_level="INFO", json_format=True, stream=output)

        get_logger("nunit_results.parsers.nunit").info("named")

        parsed = json.loads(output.getvalue().strip())
        assert parsed["logger"] == "nunit_results.parsers.nunit"
        assert "logger_name" not in parsed


class TestLoggingFromSettings:
    """Tests for logging configured from NUNIT_RESULTS_* settings."""

    def test_default_uses_log_level_setting(self, monkeypatch, capsys):
        """NUNIT_RESULTS_LOG_LEVEL=DEBUG makes debug events visible by default."""
        # Given
        monkeypatch.setenv("NUNIT_RESULTS_LOG_LEVEL", "DEBUG")
        structlog.reset_defaults()

        # When
        get_logger("env").debug("debug from env")

        # Then
        parsed = json.loads(capsys.readouterr().err.strip())
        assert parsed["event"] == "debug from env"
        assert parsed["level"] == "debug"

    def test_default_hides_debug(self, monkeypatch, capsys):
        """Without overrides debug events are filtered out."""
        monkeypatch.delenv("NUNIT_RESULTS_LOG_LEVEL", raising=False)
        structlog.reset_defaults()

        get_logger("env").debug("hidden")

        assert capsys.readouterr().err == ""

    def test_configure_from_settings_console_format(self, capsys):
        """log_json_format=False selects the console renderer."""
        configure_from_settings(Settings(_env_file=None, log_level="INFO", log_json_format=False))

        get_logger("env").info("console from settings")

        err = capsys.readouterr().err
        assert "console from settings" in err
        assert not err.lstrip().startswith("{")
