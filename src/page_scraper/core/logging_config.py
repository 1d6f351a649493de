"""Structured logging for the service.

Both ``logging.getLogger(__name__)`` and ``structlog.get_logger(__name__)``
loggers end up on a single stdout handler.  Outside of DEBUG every record is
one JSON object per line, for example::

    {"event": "scrape_retry", "url": "https://example.com", "attempt": 1,
     "kind": "navigation", "level": "warning", "logger": "page_scraper...",
     "request_id": "6f1c...", "timestamp": "2024-05-01T10:00:00.000000Z"}

The HTTP middleware stores the request ID in :data:`request_id_var`, so the
session manager's retry events can be tied back to the request that caused
them.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
"""ID of the HTTP request being served, or ``None`` outside a request."""

# Quieted to WARNING unless running at DEBUG.
_NOISY_LOGGERS: tuple[str, ...] = ("uvicorn.access", "httpx", "httpcore", "asyncio")


def _inject_request_id(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Add ``request_id`` from :data:`request_id_var` unless already bound."""
    request_id = request_id_var.get()
    if request_id is not None:
        event_dict.setdefault("request_id", request_id)
    return event_dict


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        _inject_request_id,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(console: bool) -> Processor:
    if console:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def configure_logging(log_level: str = "INFO") -> None:
    """Install the stdout handler and configure structlog.

    Safe to call repeatedly: ``api/main.py`` calls it at import time and
    again from ``create_app()`` once the settings are known.  Each call
    replaces the root handler rather than adding another one.

    Args:
        log_level: Standard level name, case-insensitive.  Unknown names
            are treated as ``"INFO"``.  ``"DEBUG"`` switches from JSON to
            the coloured console renderer.
    """
    level_name = log_level.upper()
    level = getattr(logging, level_name, logging.INFO)
    console = level_name == "DEBUG"
    pre_chain = _pre_chain()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[*pre_chain, structlog.stdlib.ExtraAdder()],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(console),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    noisy_level = logging.NOTSET if console else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
