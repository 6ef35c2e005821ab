"""Tests for logging setup."""

from __future__ import annotations

import io
import logging
import sys
from unittest.mock import patch

import structlog

from sonicscout.config.settings import ObservabilitySettings
from sonicscout.observability.logging import _add_app_name, setup_logging


class TestSetupLogging:
    def test_console_renderer(self) -> None:
        with patch("sonicscout.observability.logging.logging.basicConfig") as basic:
            setup_logging(ObservabilitySettings(log_level="debug", log_format="console"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert basic.call_args.kwargs["level"] == logging.DEBUG
        assert logging.getLogger("asonic").level == logging.DEBUG

    def test_defaults_to_json_on_stderr(self) -> None:
        with patch("sonicscout.observability.logging.logging.basicConfig") as basic:
            setup_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert basic.call_args.kwargs["level"] == logging.INFO
        assert basic.call_args.kwargs["stream"] is sys.stderr

    def test_client_logger_quiet_at_info(self) -> None:
        with patch("sonicscout.observability.logging.logging.basicConfig"):
            setup_logging(ObservabilitySettings(log_level="info"))

        assert logging.getLogger("asonic").level == logging.WARNING

    def test_custom_stream(self) -> None:
        buffer = io.StringIO()
        with patch("sonicscout.observability.logging.logging.basicConfig") as basic:
            setup_logging(stream=buffer)

        assert basic.call_args.kwargs["stream"] is buffer

    def test_app_name_added(self) -> None:
        assert _add_app_name(None, "info", {"event": "x"}) == {"event": "x", "app": "sonicscout"}
        assert _add_app_name(None, "info", {"app": "host"})["app"] == "host"
