"""Structured logging for settingsform.

Logging goes through structlog:
- pretty console output by default
- JSON lines when SETTINGSFORM_LOG_FORMAT=json
- per-request context (group_id, request_id) bound through contextvars

Usage:
    from settingsform.logging import configure_logging, get_logger, request_context

    configure_logging()
    log = get_logger(__name__)

    with request_context(group_id="my_plugin"):
        log.info("settings_persisted", keys=12)
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "get_logger",
    "configure_logging",
    "bind_context",
    "clear_context",
    "request_context",
]

LOG_FORMAT_ENV_VAR = "SETTINGSFORM_LOG_FORMAT"

LOG_LEVEL_ENV_VAR = "SETTINGSFORM_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"


def _level_from_env() -> int:
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.WARNING)


def _wants_json() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _shared_processors() -> list[Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(use_json: bool) -> Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    force_json: bool = False,
    level: int | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Safe to call more than once; each call replaces the root handlers so
    tests and the CLI can reconfigure freely.

    Args:
        force_json: Emit JSON lines regardless of SETTINGSFORM_LOG_FORMAT.
        level: Explicit log level. Defaults to SETTINGSFORM_LOG_LEVEL or WARNING.
    """
    use_json = force_json or _wants_json()
    log_level = level if level is not None else _level_from_env()

    tail: list[Processor] = (
        [structlog.processors.dict_tracebacks]
        if use_json
        else [structlog.processors.format_exc_info]
    )
    structlog.configure(
        processors=[
            *_shared_processors(),
            *tail,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(use_json),
            ],
            foreign_pre_chain=_shared_processors(),
        )
    )

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, usually called with ``__name__``."""
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


def bind_context(**context: Any) -> None:
    """Bind key-value pairs that every subsequent log event will carry."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Drop all context bound with :func:`bind_context`."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def request_context(group_id: str, **extra: Any) -> Iterator[str]:
    """Bind a group id and a fresh request id for the duration of a request.

    Settings operations run inside one synchronous request; everything logged
    inside the block carries ``group_id`` and ``request_id``.

    Yields:
        The generated request id.
    """
    request_id = uuid.uuid4().hex[:12]
    tokens = structlog.contextvars.bind_contextvars(
        group_id=group_id, request_id=request_id, **extra
    )
    try:
        yield request_id
    finally:
        structlog.contextvars.reset_contextvars(**tokens)
