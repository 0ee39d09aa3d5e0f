"""
HTTP/1.x request serialization for http1_client.

This module turns a Request into the bytes written to the transport.
It formats whatever it is given: scheme and host are the connection
factory's concern, and no framing headers are added on the caller's
behalf.
"""

import logging
from typing import Dict, Optional

from .diagnostics import DiagnosticHook, log_diagnostic
from .exceptions import FormatError, TransportError
from .http_primitives import HTTPVersion, Request, is_token
from .network.stream import NetworkStream


_VERSION_TOKENS: Dict[HTTPVersion, str] = {
    HTTPVersion.HTTP_10: "HTTP/1.0",
    HTTPVersion.HTTP_11: "HTTP/1.1",
    HTTPVersion.HTTP_2: "HTTP/2.0",
    HTTPVersion.HTTP_3: "HTTP/3.0",
}

FALLBACK_VERSION_TOKEN = "HTTP/1.1"


def version_token(version: object) -> str:
    """Get the request-line token for a version, falling back to HTTP/1.1."""
    if isinstance(version, HTTPVersion):
        return _VERSION_TOKENS[version]
    return FALLBACK_VERSION_TOKEN


def _is_visible_ascii(value: str) -> bool:
    return all(ch == "\t" or " " <= ch <= "~" for ch in value)


def serialize_request(request: Request) -> str:
    """
    Serialize the request line and header block.

    Args:
        request: The request to serialize

    Returns:
        "METHOD path VERSION\\r\\n", one "name: value\\r\\n" line per
        header and the terminating "\\r\\n"

    Raises:
        FormatError: If a header name is not a token, a header value is
            not visible ASCII or the request target is not ASCII
    """
    lines = [
        f"{request.method} {request.url.path_and_query or '/'} "
        f"{version_token(request.version)}\r\n"
    ]

    for name, value in request.headers.items():
        if not is_token(name):
            raise FormatError(f"invalid header name {name!r}")
        if not _is_visible_ascii(value):
            raise FormatError(f"header {name!r} has a value that is not visible ASCII")
        lines.append(f"{name}: {value}\r\n")

    lines.append("\r\n")
    head = "".join(lines)

    try:
        head.encode("ascii")
    except UnicodeEncodeError as e:
        raise FormatError(f"request head is not ASCII: {e}", cause=e) from e
    return head


async def _write_and_flush(stream: NetworkStream, data: bytes, what: str) -> None:
    try:
        await stream.write(data)
        await stream.flush()
    except (OSError, RuntimeError) as e:
        raise TransportError(f"failed to write {what}: {e}", cause=e) from e


async def write_request(
    stream: NetworkStream,
    request: Request,
    diagnostic: Optional[DiagnosticHook] = None,
) -> int:
    """
    Write a request to the stream.

    The header block and the body are each written and flushed
    separately, so a failed header write surfaces before any body
    byte is sent.

    Returns:
        Number of bytes written
    """
    diagnostic = diagnostic or log_diagnostic

    head = serialize_request(request)
    diagnostic(logging.DEBUG, f"serialized request: {head!r}")

    data = head.encode("ascii")
    await _write_and_flush(stream, data, "request head")
    written = len(data)

    if request.body:
        await _write_and_flush(stream, request.body, "request body")
        written += len(request.body)

    return written
