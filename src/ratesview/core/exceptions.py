"""Custom exceptions for ratesview."""

from typing import Any


class RatesViewError(Exception):
    """Base exception for all ratesview errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(RatesViewError):
    """Raised when configuration is invalid."""

    pass


class NetworkError(RatesViewError):
    """Raised when the request never produced an HTTP response."""

    pass


class ProtocolError(RatesViewError):
    """Raised on a non-2xx status or a body that is not a JSON object."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code


class GraphQLResponseError(RatesViewError):
    """Raised when the response carries a non-empty ``errors`` array."""

    def __init__(
        self,
        errors: list[dict[str, Any]],
        details: dict | None = None,
    ) -> None:
        messages = [str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors]
        super().__init__("; ".join(messages) or "GraphQL error", details)
        self.errors = errors
