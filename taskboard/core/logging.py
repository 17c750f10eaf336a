"""Logging setup with per-request correlation ids.

Usage:
    from taskboard.core.logging import bind_correlation_id

    token = bind_correlation_id("3f9a1c2b7d4e")
    try:
        logger.info("handled")  # record.correlation_id == "3f9a1c2b7d4e"
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import logging
from contextvars import ContextVar, Token

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(correlation_id)s] %(name)s - %(message)s"

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def bind_correlation_id(correlation_id: str) -> Token[str | None]:
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token[str | None]) -> None:
    _correlation_id.reset(token)


def current_correlation_id() -> str | None:
    return _correlation_id.get()


class CorrelationIdFilter(logging.Filter):
    """Attach the active correlation id (or ``-``) to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get() or "-"
        return True


def resolve_level(level: str) -> int:
    """Map a uvicorn-style level name to a stdlib level; ``trace`` becomes DEBUG."""
    name = level.strip().lower()
    if name == "trace":
        return logging.DEBUG
    resolved = logging.getLevelName(name.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: str = "info") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, CorrelationIdFilter) for f in handler.filters):
            handler.addFilter(CorrelationIdFilter())
