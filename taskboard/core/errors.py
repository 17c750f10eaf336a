"""Error types raised by the task board.

Expected absence (blank title, unknown or malformed task id) is normal control
flow: handlers catch ``InvalidInputError`` and carry on with the redirect.
Anything else is unexpected and is turned into a generic error page by the
request context middleware.
"""

from __future__ import annotations

from typing import Any


class TaskboardError(Exception):
    """Base class for task board errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputError(TaskboardError):
    """Raised when user input cannot be used for the requested operation."""

    def __init__(self, field: str, value: Any, message: str | None = None):
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid value for '{field}': {value!r}")
