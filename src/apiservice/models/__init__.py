from .errors import (
    ApiServiceError,
    ApplicationError,
    BaseUrlMissingError,
    ResponseParseError,
    TransportError,
)

__all__ = [
    "ApiServiceError",
    "ApplicationError",
    "BaseUrlMissingError",
    "ResponseParseError",
    "TransportError",
]
