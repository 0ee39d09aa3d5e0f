"""
Custom exceptions for http1_client.

This module defines the exception hierarchy used throughout
the library. Every error raised by a request/response exchange
is an HTTPCoreError, so callers can catch one type per exchange.
"""

from typing import Optional


class HTTPCoreError(Exception):
    """Base exception for all http1_client errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class FormatError(HTTPCoreError):
    """Raised when a request cannot be serialized to the wire."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Format error: {message}", cause)


class ParseError(HTTPCoreError):
    """Raised when a response does not follow the HTTP/1.x grammar."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Parse error: {message}", cause)


class UnsupportedFeature(HTTPCoreError):
    """Raised for protocol features this client deliberately rejects."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Unsupported feature: {message}", cause)


class TransportError(HTTPCoreError):
    """Raised when reading from or writing to the transport fails."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Transport error: {message}", cause)


class ConnectionError(HTTPCoreError):
    """Raised when a connection cannot be established for a request."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Connection error: {message}", cause)
