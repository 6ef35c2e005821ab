"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog

if TYPE_CHECKING:
    from sonicscout.config.settings import ObservabilitySettings

# asonic logs every pooled connection at INFO
CLIENT_LOGGERS = ("asonic",)


def _add_app_name(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("app", "sonicscout")
    return event_dict


def setup_logging(settings: ObservabilitySettings | None = None, stream: TextIO | None = None) -> None:
    """Configure structured logging for SonicScout.

    Args:
        settings: Observability settings. Uses defaults if None.
        stream: Log destination. Defaults to stderr, leaving stdout to
            command output such as ranked identifiers.
    """
    log_level = settings.log_level.upper() if settings else "INFO"
    log_format = settings.log_format if settings else "json"
    level = getattr(logging, log_level, logging.INFO)

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        _add_app_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=level,
    )

    # Sonic client chatter only surfaces when debugging
    for name in CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else max(level, logging.WARNING))
