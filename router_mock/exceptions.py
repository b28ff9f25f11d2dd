"""Exceptions for the router mock server and its reference client.

These exceptions are independent of the HTTP listener and can be
raised from any context (encoder, config loader, client).
"""

from __future__ import annotations


class RouterMockError(Exception):
    """Base class for all router mock errors."""


class SerializationError(RouterMockError):
    """Error to indicate a response payload could not be encoded.

    Raised by the response encoder before any status or header is
    produced, so the server can still answer with a 500.
    """


class ConfigError(RouterMockError):
    """Error to indicate the server configuration is missing or invalid."""


class CannotConnectError(RouterMockError):
    """Error to indicate we cannot connect to the router.

    Raised for network connectivity issues, timeouts, or connection refused.
    """

    def __init__(self, message: str | None = None):
        """Initialize error with optional message."""
        super().__init__(message or "Cannot connect to router")
        self.user_message = message


class InvalidAuthError(RouterMockError):
    """Error to indicate authentication failed.

    Raised when the router answers the login with the all-zero session id,
    or when a data page is requested without a session.
    """


class ParsingError(RouterMockError):
    """Error wrapping parsing failures with field context.

    Raised when an XML or JSON response cannot be parsed. Provides context
    about what field or data was being parsed when the error occurred.

    Attributes:
        field: Name of the field being parsed (e.g., "SID")
        raw_value: The raw value that failed to parse
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        raw_value: str | None = None,
    ):
        """Initialize parsing error with context.

        Args:
            message: Human-readable error description
            field: Name of the field being parsed
            raw_value: The raw value that failed to parse
        """
        super().__init__(message)
        self.field = field
        self.raw_value = raw_value

    def __str__(self) -> str:
        """Format error with context."""
        parts = [super().__str__()]
        if self.field:
            parts.append(f"field={self.field}")
        if self.raw_value is not None:
            # Truncate long values
            display_value = self.raw_value[:50] + "..." if len(self.raw_value) > 50 else self.raw_value
            parts.append(f"raw_value={display_value!r}")
        return " | ".join(parts)
