from typing import Any

import httpx


class ApiServiceError(Exception):
    """Base class for every failure surfaced by a pending request."""


class BaseUrlMissingError(ApiServiceError):
    def __init__(
        self,
        message="API origin is not configured. Pass base_url explicitly or set the APISERVICE_URL environment variable.",
    ):
        self.message = message
        super().__init__(self.message)


class ResponseParseError(ApiServiceError):
    """Raised when a response body is not valid JSON.

    Attributes:
        raw_text: The response text exactly as received.
        message: The JSON parser's failure message.
    """

    def __init__(self, raw_text: str, message: str):
        self.raw_text = raw_text
        self.message = message
        super().__init__(f"{raw_text} [{message}]")


class ApplicationError(ApiServiceError):
    """Raised when a parsed response carries a truthy ``error`` field.

    The server-supplied value is kept untouched on ``error``.
    """

    def __init__(self, error: Any):
        self.error = error
        super().__init__(error)

    def __str__(self) -> str:
        return str(self.error)


class TransportError(ApiServiceError):
    """Raised when the exchange never produced a response."""

    def __init__(self, cause: httpx.RequestError):
        self.cause = cause
        self.request = cause.request if _has_request(cause) else None
        super().__init__(f"{type(cause).__name__}: {cause}")


def _has_request(error: httpx.RequestError) -> bool:
    try:
        error.request
    except RuntimeError:
        return False
    return True
