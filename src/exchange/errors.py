"""
Error taxonomy for the exchange adapter layer.

Every failure an adapter surfaces is one of these types, so calling code can
tell a flaky network apart from an exchange rejecting a request or a
response that no longer matches the documented shape.
"""

from typing import Any


class ExchangeError(Exception):
    """Base class for all adapter errors."""


class TransportError(ExchangeError):
    """
    Network or HTTP level failure raised by the transport.

    Args:
        message: Human-readable description
        status_code: HTTP status code when a response was received

    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class APIError(ExchangeError):
    """
    Structured error reported by the exchange itself.

    Args:
        message: The exchange's own error message
        payload: The decoded response that carried the error

    """

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class ParseError(ExchangeError):
    """Response is missing a field or carries a malformed value."""


class SigningError(ExchangeError):
    """A private request could not be signed."""


class NotSupportedError(ExchangeError, NotImplementedError):
    """The exchange does not offer (or does not document) this capability."""


class SymbolError(ExchangeError, ValueError):
    """A market symbol could not be split into base and quote."""


class ConfigurationError(ValueError):
    """Raised when required runtime configuration is missing or invalid."""
