"""
Logging configuration using structlog.

Human-readable colored logs at DEBUG, JSON lines otherwise. Modules keep using
``logging.getLogger(__name__)``; records are rendered through structlog's
stdlib formatter.
"""

import logging
import sys
from typing import Optional

import structlog


def setup_logging(log_level: Optional[str] = None, stream=None) -> None:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: level name, e.g. ``"DEBUG"`` (default: ``INFO``)
        stream: output stream (default: stderr, so CLI output on stdout stays clean)
    """
    level = getattr(logging, (log_level or "INFO").upper(), logging.INFO)
    is_dev = level == logging.DEBUG

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if is_dev:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()

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
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in ("uvicorn.access", "httpcore", "httpx", "telegram"):
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging"]
