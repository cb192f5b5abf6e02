"""Domain-specific exceptions."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional


class ErrorCode(IntEnum):
    """Machine-checkable error codes carried by library exceptions."""

    MISSING = 1
    MAXLEN = 2
    REGEXP = 3
    INVALID = 4


class WebToPayError(Exception):
    """Base class for every error raised by the library."""

    def __init__(self, message: str, code: Optional[ErrorCode] = None) -> None:
        super().__init__(message)
        self.code = code


class ConfigError(WebToPayError):
    """Raised when the client is constructed without required settings."""


class RequestValidationError(WebToPayError):
    """Raised when an outbound request field violates its validation rule."""

    def __init__(self, message: str, code: ErrorCode, field: str) -> None:
        super().__init__(message, code)
        self.field = field


class MissingFieldError(RequestValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field: {field}", ErrorCode.MISSING, field)


class MaxLengthExceededError(RequestValidationError):
    def __init__(self, field: str, maxlen: int) -> None:
        super().__init__(
            f"Field {field} exceeds maximum length of {maxlen}",
            ErrorCode.MAXLEN,
            field,
        )
        self.maxlen = maxlen


class PatternMismatchError(RequestValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(
            f"Field {field} does not match expected format", ErrorCode.REGEXP, field
        )


class CallbackError(WebToPayError):
    """Raised when an inbound callback cannot be verified or parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID)


class InvalidSignatureError(CallbackError):
    def __init__(self) -> None:
        super().__init__("Invalid callback signature")


class DecryptionFailedError(CallbackError):
    def __init__(self) -> None:
        super().__init__("Failed to decrypt callback data")


class TenantMismatchError(CallbackError):
    """The callback payload belongs to a different project."""

    def __init__(self, expected: int, actual: str) -> None:
        super().__init__(f"Project ID mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class FieldMismatchError(CallbackError):
    """A parsed callback field differs from the value the caller expected."""

    def __init__(self, field: str, expected: Any, actual: Any) -> None:
        super().__init__(f"Field {field} mismatch: expected {expected}, got {actual}")
        self.field = field
        self.expected = expected
        self.actual = actual


class PublicKeyFetchError(CallbackError):
    """Raised when the RSA public key needed for SS2/SS3 cannot be retrieved."""


class CatalogParseError(WebToPayError):
    """Raised when the payment methods XML document is malformed."""
