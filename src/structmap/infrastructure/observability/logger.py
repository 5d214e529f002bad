"""
Structured Logging
structlog setup for the ``structmap`` logger tree, driven by MapperSettings
"""
from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog

from structmap.config import MapperSettings, get_settings

ROOT_LOGGER = "structmap"
_HANDLER_NAME = "structmap-stdout"


def _renderer(json_logs: bool) -> Any:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(
    log_level: Optional[str] = None,
    json_logs: Optional[bool] = None,
    *,
    settings: Optional[MapperSettings] = None,
) -> None:
    """
    Configure structured logging for the library's diagnostics.

    Only the ``structmap`` stdlib logger is touched: it gets the level and a
    single stdout handler. Records still propagate, so an application's own
    handlers see them too.

    Args:
        log_level: Overrides ``settings.log_level``
        json_logs: Overrides ``settings.json_logs``
        settings: Defaults to ``get_settings()`` (``STRUCTMAP_*`` env vars)
    """
    settings = settings or get_settings()
    level = (log_level or settings.log_level).upper()
    use_json = settings.json_logs if json_logs is None else json_logs

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level))
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _renderer(use_json),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.debug("field_mapped", field="first_name")
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Replace the bound context with ``kwargs`` for subsequent log entries."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


@contextmanager
def mapping_context(destination: Any, source: Any) -> Iterator[None]:
    """Bind the destination and source type names for one merge pass."""
    with structlog.contextvars.bound_contextvars(
        destination=type(destination).__name__,
        source=type(source).__name__,
    ):
        yield
