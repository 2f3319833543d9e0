"""The single error type raised by the client, and the functions that classify failures.

Callers branch on `ReviewsError.code`. Codes are plain strings so they can be compared
against the constants below or against literals ("NOT_FOUND").
"""

from __future__ import annotations

from typing import Any, NoReturn, Optional

import requests
from urllib3.exceptions import ReadTimeoutError


CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
VALIDATION_ERROR = "VALIDATION_ERROR"
AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
PERMISSION_ERROR = "PERMISSION_ERROR"
NOT_FOUND = "NOT_FOUND"
CONFLICT_ERROR = "CONFLICT_ERROR"
RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
SERVER_ERROR = "SERVER_ERROR"
HTTP_ERROR = "HTTP_ERROR"
NETWORK_ERROR = "NETWORK_ERROR"
TIMEOUT_ERROR = "TIMEOUT_ERROR"
UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ReviewsError(RuntimeError):
    """Raised when a call to the reviews API cannot produce data."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[str] = None,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.status = status
        self.cause = cause

    def __str__(self) -> str:
        text = f"{self.code}: {self.message}"
        if self.details:
            text += f" ({self.details})"
        return text

    def __repr__(self) -> str:
        return f"ReviewsError(code={self.code!r}, message={self.message!r}, status={self.status!r})"


def _body_message(data: Any) -> Optional[str]:
    """Pull `error.message` out of a server error envelope, if there is one."""

    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    return message if isinstance(message, str) and message else None


# Checked in order, first exact match wins.
_STATUS_TABLE = (
    (404, NOT_FOUND, "Resource not found", "The requested resource was not found"),
    (400, VALIDATION_ERROR, "Bad request", "Invalid request data"),
    (403, PERMISSION_ERROR, "Forbidden", "Insufficient permissions for this operation"),
    (409, CONFLICT_ERROR, "Conflict", "Resource conflict occurred"),
    (429, RATE_LIMIT_ERROR, "Rate limit exceeded", "Too many requests. Please try again later."),
)


def raise_for_status(status: int, data: Any, reason: str = "") -> NoReturn:
    """Turn a non-2xx response into a ReviewsError. Never returns."""

    message = _body_message(data)
    if status == 401:
        raise ReviewsError(
            "Invalid or missing API key",
            AUTHENTICATION_ERROR,
            message or "Check your API key configuration",
            401,
        )

    for code_status, code, text, default_detail in _STATUS_TABLE:
        if status == code_status:
            raise ReviewsError(text, code, message or default_detail, status)

    if status >= 500:
        raise ReviewsError(
            "Internal server error",
            SERVER_ERROR,
            message or "Reviews service is temporarily unavailable",
            status,
        )

    text = f"HTTP {status}: {reason}" if reason else f"HTTP {status}"
    raise ReviewsError(text, HTTP_ERROR, message or "Unknown API error", status)


def _is_timeout(exc: BaseException) -> bool:
    # ConnectTimeout is both a Timeout and a ConnectionError; the deadline wins.
    if isinstance(exc, requests.Timeout):
        return True
    # A read timeout while requests downloads the body surfaces as
    # ConnectionError(ReadTimeoutError(...)).
    return isinstance(exc, requests.ConnectionError) and any(
        isinstance(arg, ReadTimeoutError) for arg in exc.args
    )


def raise_for_transport(exc: BaseException, *, deadline_passed: bool = False) -> NoReturn:
    """Turn a failure that left no usable HTTP response into a ReviewsError. Never returns.

    `deadline_passed` marks failures caused by the call running out of time (the
    client aborts the socket), which are timeouts whatever the exception says.
    """

    if isinstance(exc, ReviewsError):
        raise exc

    if deadline_passed or _is_timeout(exc):
        raise ReviewsError(
            "Request timed out",
            TIMEOUT_ERROR,
            "The request took too long to complete. Please try again.",
            cause=exc,
        ) from exc

    if isinstance(exc, requests.ConnectionError):
        raise ReviewsError(
            "Failed to connect to reviews service",
            NETWORK_ERROR,
            "Check your internet connection and try again",
            cause=exc,
        ) from exc

    raise ReviewsError("Unknown error occurred", UNKNOWN_ERROR, str(exc), cause=exc) from exc
