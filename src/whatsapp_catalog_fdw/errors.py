"""
Structured error types raised by the catalog foreign data wrapper.

Every failure carries an :class:`ErrorKind` so callers and tests can branch on
the classification. The host only ever sees the rendered message, produced by
:func:`render_error` at the boundary.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Classification of adapter failures."""

    MISSING_OPTION = "missing_option"
    TRANSPORT = "transport"
    DECODE = "decode"
    API = "api"
    SCHEMA = "schema"
    UNSUPPORTED_COLUMN = "unsupported_column"
    UNSUPPORTED = "unsupported"
    NOT_INITIALIZED = "not_initialized"


class FdwError(RuntimeError):
    """Base class for all adapter errors."""

    kind: ErrorKind = ErrorKind.UNSUPPORTED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingOptionError(FdwError):
    """Raised during initialization when a required server option is empty."""

    kind = ErrorKind.MISSING_OPTION

    def __init__(self, key: str) -> None:
        super().__init__(f"Missing required option: {key}")
        self.key = key


class TransportError(FdwError):
    """Raised when the HTTP request cannot be completed."""

    kind = ErrorKind.TRANSPORT


class DecodeError(FdwError):
    """Raised when the response body is not valid JSON."""

    kind = ErrorKind.DECODE


class ApiError(FdwError):
    """Raised when the remote API does not report success."""

    kind = ErrorKind.API

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SchemaError(FdwError):
    """Raised when an expected field of the response is missing or malformed."""

    kind = ErrorKind.SCHEMA


class UnsupportedColumnError(FdwError):
    """Raised when the host requests a column the adapter cannot produce."""

    kind = ErrorKind.UNSUPPORTED_COLUMN

    def __init__(self, column: str) -> None:
        super().__init__(f"Column '{column}' is not supported by the WhatsApp Catalog FDW")
        self.column = column


class UnsupportedOperationError(FdwError):
    """Raised for lifecycle operations the adapter declines (re-scan, modify)."""

    kind = ErrorKind.UNSUPPORTED


class NotInitializedError(FdwError):
    """Raised when a scan is attempted before the adapter has been initialized."""

    kind = ErrorKind.NOT_INITIALIZED


def render_error(exc: FdwError) -> str:
    return exc.message
