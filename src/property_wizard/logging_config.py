"""Structured logging configuration using structlog.

Provides JSON-structured logging in production and human-readable colored
output in development. Every entry written while a wizard session handles
an event or a submission carries that session's ``flow`` and ``session_id``,
including entries from the reducer and the invalidator, which only know the
state they are given.

Usage:
    from property_wizard.logging_config import setup_logging, get_logger, wizard_context
    setup_logging()
    logger = get_logger(__name__)
    with wizard_context("brief", session_id):
        logger.info("wizard.step.advanced", step=1)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from property_wizard.config import get_settings


def setup_logging(log_level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure structlog with shared processors.

    Args:
        log_level: Standard Python log level string. Defaults to APP_LOG_LEVEL.
        json_logs: JSON output when True, colored console when False.
            Defaults to APP_JSON_LOGS.
    """
    settings = get_settings()
    log_level = log_level or settings.app_log_level
    if json_logs is None:
        json_logs = settings.app_json_logs

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


@contextmanager
def wizard_context(flow: str, session_id: str) -> Iterator[None]:
    """Bind a wizard session to every log entry written inside the block.

    The binding lives in a context variable, so it follows the code across
    ``await`` and two sessions running in separate tasks keep their own ids.
    Whatever was bound before the block is restored on exit.
    """
    with structlog.contextvars.bound_contextvars(flow=flow, session_id=session_id):
        yield


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. If None, uses the calling module's name.

    Returns:
        A bound structlog logger with context variable support.
    """
    return structlog.get_logger(name)
