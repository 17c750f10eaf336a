"""Request context middleware.

Runs before every route:
- resolves (or creates) the anonymous session
- picks up or generates the correlation id and binds it for logging
- flags htmx fragment requests
- turns unexpected exceptions into a generic 500 page
- writes one access log line: ``METHOD /path - status (duration ms)``
"""

from __future__ import annotations

import logging
import time

from fastapi import Request, status
from fastapi.responses import HTMLResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from taskboard.api.errors import ERROR_500_HTML
from taskboard.core.context import (
    RequestContext,
    correlation_id_from_header,
    new_correlation_id,
)
from taskboard.core.logging import bind_correlation_id, reset_correlation_id
from taskboard.core.session import SessionAssigner, new_session_id

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("taskboard.access")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a ``RequestContext`` to ``request.state.context``."""

    def __init__(
        self,
        app: ASGIApp,
        sessions: SessionAssigner,
        request_id_header: str = "X-Request-ID",
        fragment_header: str = "HX-Request",
    ):
        super().__init__(app)
        self.sessions = sessions
        self.request_id_header = request_id_header
        self.fragment_header = fragment_header

    def build_context(self, request: Request) -> RequestContext:
        """Build the context; never raises."""
        try:
            session_id, created = self.sessions.resolve(request)
            return RequestContext(
                session_id=session_id,
                correlation_id=correlation_id_from_header(
                    request.headers.get(self.request_id_header)
                ),
                is_fragment=request.headers.get(self.fragment_header, "").lower() == "true",
                new_session=created,
            )
        except Exception as exc:  # noqa: BLE001 - degrade to a fresh context
            logger.warning("Could not build request context: %s", exc)
            return RequestContext(
                session_id=new_session_id(),
                correlation_id=new_correlation_id(),
                new_session=True,
            )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        context = self.build_context(request)
        request.state.context = context
        token = bind_correlation_id(context.correlation_id)
        try:
            try:
                response = await call_next(request)
            except Exception:  # noqa: BLE001 - never leak internals to the client
                logger.exception(
                    "Unhandled error while serving %s %s", request.method, request.url.path
                )
                response = HTMLResponse(
                    ERROR_500_HTML, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
                )

            if context.new_session:
                self.sessions.attach(response, context.session_id)
            response.headers[self.request_id_header] = context.correlation_id

            duration_ms = (time.perf_counter() - started) * 1000
            access_logger.info(
                "%s %s - %d (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
            )
            return response
        finally:
            reset_correlation_id(token)
