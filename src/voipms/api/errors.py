"""
Exceptions raised by the VoIP.ms API layer.
"""

from typing import Any


class VoipMsError(Exception):
    """Base exception for VoIP.ms client errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        provider_response: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.provider_response = provider_response or {}


class DecodeError(VoipMsError, ValueError):
    """Payload could not be decoded into the expected shape.

    Also a ValueError so wire adapters can raise it from inside pydantic
    validators. ``raw_text`` holds the offending text as received.
    """

    def __init__(self, message: str, raw_text: str = "", error_code: str | None = "DECODE_ERROR") -> None:
        super().__init__(message, error_code=error_code)
        self.raw_text = raw_text


class TransportError(VoipMsError):
    """Network level failure: timeout, DNS, refused connection, TLS."""


class LogicalError(VoipMsError):
    """The call went through but the result violates the operation's contract."""


class NotFoundError(LogicalError):
    """A client-side lookup found no matching record."""

    def __init__(self, message: str, identifier: str) -> None:
        super().__init__(message, error_code="NOT_FOUND")
        self.identifier = identifier


class UnexpectedResultCountError(LogicalError):
    """A lookup required exactly one record and got another count."""

    def __init__(self, message: str, count: int) -> None:
        super().__init__(message, error_code="UNEXPECTED_COUNT")
        self.count = count


class ProviderError(LogicalError):
    """The provider reported a failure inside an HTTP 200 body."""

    def __init__(self, message: str, status: str, provider_response: dict[str, Any] | None = None) -> None:
        super().__init__(message, error_code=status or "PROVIDER_ERROR", provider_response=provider_response)
        self.status = status
