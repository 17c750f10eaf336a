"""Anonymous session cookies.

Session ids are random tokens with no personal data in them. There is no
server-side session storage; the cookie value is the whole session. The
cookie is HttpOnly, SameSite=Strict and carries no Max-Age, so the browser
drops it when it closes.
"""

from __future__ import annotations

import re
import secrets

from fastapi import Request, Response

_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]{16,64}")


def new_session_id() -> str:
    return secrets.token_urlsafe(16)


def is_valid_session_id(value: str) -> bool:
    return _TOKEN_RE.fullmatch(value) is not None


class SessionAssigner:
    """Read or create the anonymous session for a request."""

    def __init__(self, cookie_name: str):
        self.cookie_name = cookie_name

    def resolve(self, request: Request) -> tuple[str, bool]:
        """Return ``(session_id, created)`` for the request.

        A missing or malformed cookie yields a fresh id. Two first requests from
        the same client racing each other get different ids; whichever
        Set-Cookie the browser stores last wins.
        """
        existing = request.cookies.get(self.cookie_name)
        if existing is not None and is_valid_session_id(existing):
            return existing, False
        return new_session_id(), True

    def attach(self, response: Response, session_id: str) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=session_id,
            path="/",
            httponly=True,
            samesite="strict",
        )
