"""
http1_client - minimal asyncio HTTP/1.x client

Serializes requests, parses responses (status line, headers and
content-length, chunked or close-delimited bodies) over any
NetworkStream, plaintext or TLS.
"""

__version__ = "0.1.0"
__author__ = "Developer"
__email__ = "dev@example.com"

# Import main components for easy access
from .http_primitives import Headers, HTTPVersion, Request, Response, URLComponents
from .http11 import HTTP11Connection, ConnectionState, send_request
from .client import HTTPClient
from .connection_factory import ConnectionFactory
from .diagnostics import DiagnosticHook, DiagnosticRecorder, log_diagnostic
from .exceptions import (
    HTTPCoreError,
    ConnectionError,
    FormatError,
    ParseError,
    TransportError,
    UnsupportedFeature,
)
from .serializer import serialize_request

__all__ = [
    "Headers",
    "HTTPVersion",
    "Request",
    "Response",
    "URLComponents",
    "HTTP11Connection",
    "ConnectionState",
    "send_request",
    "HTTPClient",
    "ConnectionFactory",
    "DiagnosticHook",
    "DiagnosticRecorder",
    "log_diagnostic",
    "HTTPCoreError",
    "ConnectionError",
    "FormatError",
    "ParseError",
    "TransportError",
    "UnsupportedFeature",
    "serialize_request",
]
