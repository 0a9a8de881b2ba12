"""Structured logging for textnum.

structlog on top of stdlib logging. Every event carries ``service`` and the
``component`` the logger was created for (``render``, ``filter.executor``,
or a diagnostic channel such as ``filter``), plus any context bound by the
caller. Output is either a console rendering for development or one JSON
object per line, chosen by ``TEXTNUM_LOG_FORMAT``.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import structlog

SERVICE_NAME = "textnum"
LOG_FORMATS = ("console", "json")

_configured = False


def _add_service(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format not in LOG_FORMATS:
        msg = f"TEXTNUM_LOG_FORMAT must be one of {LOG_FORMATS}, got {log_format!r}"
        raise ValueError(msg)
    if log_format == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    log_format: str | None = None,
    level: str | None = None,
) -> None:
    """Install the textnum processors and a stderr handler on the root logger.

    Only the first call has an effect.

    Args:
        log_format: "console" or "json". Default via TEXTNUM_LOG_FORMAT or "console".
        level: Log level name. Default via TEXTNUM_LOG_LEVEL or "INFO".

    Raises:
        ValueError: If the log format is unknown.
    """
    global _configured
    if _configured:
        return

    renderer = _renderer(log_format or os.environ.get("TEXTNUM_LOG_FORMAT", "console"))
    level_name = (level or os.environ.get("TEXTNUM_LOG_LEVEL", "INFO")).upper()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            _add_service,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    _configured = True


def get_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """Return a logger bound to a component and optional extra context.

    Args:
        component: Component or diagnostic channel name.
        **context: Extra key/value pairs attached to every event.
    """
    configure_logging()
    return structlog.get_logger().bind(component=component, **context)  # type: ignore[no-any-return]
