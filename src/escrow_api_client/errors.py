from __future__ import annotations

from typing import Any, Optional


class EscrowError(Exception):
    """Base error for everything raised by the Escrow client."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response


class EscrowApiError(EscrowError):
    """Raised for non-2xx responses. `status_code` is always set."""


class EscrowTransportError(EscrowError):
    """Raised when the request never produced a response (DNS, connection, timeout)."""


class ConfigurationError(EscrowError):
    """Raised when credentials are missing."""


class EscrowDecodeError(EscrowError):
    """Raised when a 2xx response declares JSON but the body does not parse.

    Carries no status code; `response` holds the raw response.
    """
