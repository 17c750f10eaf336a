"""Per-request context threaded into handlers and rendering."""

from __future__ import annotations

import re
import uuid

from fastapi import Request
from pydantic import BaseModel, ConfigDict

_CORRELATION_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")


class RequestContext(BaseModel):
    """Session and correlation data for one request."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    correlation_id: str
    is_fragment: bool = False
    new_session: bool = False


def new_correlation_id() -> str:
    return uuid.uuid4().hex[:12]


def correlation_id_from_header(value: str | None) -> str:
    """Reuse a sane inbound correlation id, otherwise generate one."""
    if value and _CORRELATION_ID_RE.fullmatch(value):
        return value
    return new_correlation_id()


def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency returning the context built by the middleware."""
    context = getattr(request.state, "context", None)
    if context is None:
        raise RuntimeError("Request context middleware is not installed")
    return context
