"""
HTTP/1.x response parsing for http1_client.

This module reads a response off a BufferedReader in three strictly
ordered steps: the status line, the header block and the body. The
body framing is chosen once from the completed header block.
"""

import logging
import re
from enum import Enum
from typing import Dict, Optional, Tuple

from typing_extensions import Final

from .diagnostics import DiagnosticHook, log_diagnostic
from .exceptions import ParseError, TransportError, UnsupportedFeature
from .http_primitives import (
    Headers,
    HTTPVersion,
    has_connection_option,
    is_token,
    validate_status_code,
)
from .streams import BufferedReader


# Performance hint for close-delimited bodies, never a limit.
BODY_BUFFER_HINT: Final = 8 * 1024 * 1024

MAX_STATUS_CODE_VALUE: Final = 65535

# HTTP/3 responses are rejected even though HTTP/3.0 requests can be written.
RESPONSE_VERSIONS: Dict[str, HTTPVersion] = {
    "HTTP/1.0": HTTPVersion.HTTP_10,
    "HTTP/1.1": HTTPVersion.HTTP_11,
    "HTTP/2.0": HTTPVersion.HTTP_2,
}

_DIGITS_RE = re.compile(r"^[0-9]+$")
_HEX_RE = re.compile(r"^[0-9A-Fa-f]+$")


class Framing(Enum):
    """How the end of a response body is found."""
    CONTENT_LENGTH = "content-length"
    CHUNKED = "chunked"
    UPGRADE = "upgrade"
    UNTIL_CLOSE = "until-close"


def _decode(line: bytes) -> str:
    # latin-1 maps every byte to one character, so nothing is lost
    return line.decode("latin-1")


def _is_field_value(value: str) -> bool:
    return all(ch == "\t" or (ch >= " " and ch != "\x7f") for ch in value)


async def read_status_line(reader: BufferedReader) -> str:
    """Read the raw status line, terminator included."""
    return _decode(await reader.readline())


def parse_status_line(line: str) -> Tuple[HTTPVersion, int]:
    """
    Parse a status line into its version and status code.

    Args:
        line: e.g. "HTTP/1.1 200 OK\\r\\n"

    Returns:
        (version, status_code)

    Raises:
        ParseError: If the line is malformed, the version unsupported
                    or the status code invalid
    """
    parts = line.split()
    if len(parts) < 2:
        raise ParseError(f"malformed status line: {line!r}")

    version = RESPONSE_VERSIONS.get(parts[0])
    if version is None:
        raise ParseError(f"unsupported version: {parts[0]!r}")

    code = parts[1]
    if not _DIGITS_RE.match(code) or int(code) > MAX_STATUS_CODE_VALUE:
        raise ParseError(f"invalid status code: {code!r}")

    try:
        status_code = validate_status_code(int(code))
    except ValueError as e:
        raise ParseError(f"invalid status code: {code!r}", cause=e) from e

    return version, status_code


async def read_headers(
    reader: BufferedReader,
    diagnostic: Optional[DiagnosticHook] = None,
) -> Headers:
    """
    Read the header block up to the blank line.

    Lines without a ": " separator are skipped with a warning; real
    servers send them and they should not cost the whole response.
    Reading also stops if the stream ends.

    Returns:
        The frozen header collection

    Raises:
        ParseError: If a header name or value contains invalid characters
    """
    diagnostic = diagnostic or log_diagnostic
    headers = Headers()

    while True:
        raw = await reader.readline()
        if not raw or raw == b"\r\n":
            break

        line = _decode(raw)
        name, separator, value = line.partition(": ")
        if not separator:
            diagnostic(logging.WARNING, f"failed to parse header line: {line!r}")
            continue

        name = name.lower()
        value = value.rstrip("\r\n")

        if not is_token(name):
            raise ParseError(f"invalid header name: {name!r}")
        if not _is_field_value(value):
            raise ParseError(f"invalid value for header {name!r}: {value!r}")

        headers[name] = value

    return headers.freeze()


def parse_content_length(value: str) -> int:
    """
    Parse a content-length value.

    Raises:
        ParseError: If the value is not an unsigned decimal
    """
    if not _DIGITS_RE.match(value):
        raise ParseError(f"invalid content-length: {value!r}")
    return int(value)


def parse_chunk_size(line: bytes) -> int:
    """
    Parse a chunk-size line.

    Chunk extensions (";name=value") are accepted and ignored.

    Raises:
        ParseError: If the size is not hexadecimal
    """
    text = _decode(line).strip()
    size, _, _extensions = text.partition(";")
    size = size.strip()
    if not _HEX_RE.match(size):
        raise ParseError(f"invalid chunk size: {text!r}")
    return int(size, 16)


def select_framing(headers: Headers) -> Framing:
    """
    Choose how the body of a response is delimited.

    Priority: content-length, then transfer-encoding, then a
    connection upgrade, otherwise the body runs until the server
    closes the connection.

    Raises:
        UnsupportedFeature: For a transfer-encoding other than "chunked"
    """
    if "content-length" in headers:
        return Framing.CONTENT_LENGTH

    transfer_encoding = headers.get("transfer-encoding")
    if transfer_encoding is not None:
        if transfer_encoding == "chunked":
            return Framing.CHUNKED
        raise UnsupportedFeature(f"transfer-encoding {transfer_encoding!r} is not supported")

    if has_connection_option(headers.get("connection"), "upgrade"):
        return Framing.UPGRADE

    return Framing.UNTIL_CLOSE


async def read_chunked_body(
    reader: BufferedReader,
    diagnostic: Optional[DiagnosticHook] = None,
) -> bytes:
    """
    Decode a chunked transfer-coding body.

    The trailer section after the last chunk is read and discarded so
    that no bytes of this response are left on the stream.

    Raises:
        ParseError: On an invalid chunk size or missing CRLF after a chunk
        TransportError: If the stream ends before the last chunk
    """
    diagnostic = diagnostic or log_diagnostic
    body = bytearray()

    while True:
        line = await reader.readline()
        if not line:
            raise TransportError("connection closed while reading chunk size")

        chunk_size = parse_chunk_size(line)
        if chunk_size == 0:
            break

        body += await reader.readexactly(chunk_size)

        crlf = await reader.readexactly(2)
        if crlf != b"\r\n":
            raise ParseError("invalid chunked encoding: missing CRLF after chunk data")

    trailers = 0
    while True:
        line = await reader.readline()
        if line in (b"", b"\r\n", b"\n"):
            break
        trailers += 1

    if trailers:
        diagnostic(logging.DEBUG, f"discarded {trailers} trailer line(s)")

    return bytes(body)


async def read_body(
    reader: BufferedReader,
    headers: Headers,
    diagnostic: Optional[DiagnosticHook] = None,
    body_buffer_hint: int = BODY_BUFFER_HINT,
    framing: Optional[Framing] = None,
) -> bytes:
    """
    Read the response body using the framing the headers call for.

    A framing already chosen with select_framing can be passed in so
    the caller acts on the same decision.

    Raises:
        ParseError: On an invalid content-length or chunked encoding
        UnsupportedFeature: On an unsupported transfer-encoding
        TransportError: If the stream ends before the body is complete
    """
    diagnostic = diagnostic or log_diagnostic
    if framing is None:
        framing = select_framing(headers)
    diagnostic(logging.DEBUG, f"body framing: {framing.value}")

    if framing is Framing.CONTENT_LENGTH:
        return await reader.readexactly(parse_content_length(headers["content-length"]))

    if framing is Framing.CHUNKED:
        return await read_chunked_body(reader, diagnostic)

    if framing is Framing.UPGRADE:
        return b""

    return await reader.read_to_end(body_buffer_hint)
