"""
HTTP/1.x connection implementation for http1_client.

This module implements the HTTP11Connection class that runs one
request/response exchange over a NetworkStream: write the request,
then read the status line, the headers and the body, in that order.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Any, Dict, Optional

from .diagnostics import DiagnosticHook, log_diagnostic
from .exceptions import ConnectionError
from .http_primitives import Request, Response
from .network.stream import NetworkStream
from .parser import (
    BODY_BUFFER_HINT,
    Framing,
    parse_status_line,
    read_body,
    read_headers,
    read_status_line,
    select_framing,
)
from .serializer import write_request
from .streams import BufferedReader


class ConnectionState(Enum):
    """States of an HTTP/1.x connection."""
    NEW = "new"            # Connection created, not yet used
    ACTIVE = "active"      # Connection handling its exchange
    COMPLETE = "complete"  # Exchange finished, stream left to the caller
    UPGRADED = "upgraded"  # Server switched protocols, stream handed over
    CLOSED = "closed"      # Stream closed, after an error or aclose()


class HTTP11Connection:
    """
    HTTP/1.x exchange over a NetworkStream.

    A connection runs exactly one exchange; connections are never
    reused, so nothing read past the end of one response can leak
    into the next. The stream stays open after a successful exchange
    and is closed when the exchange fails.
    """

    DEFAULT_READ_CHUNK_SIZE = 65536  # 64KB
    DEFAULT_BODY_BUFFER_HINT = BODY_BUFFER_HINT

    def __init__(
        self,
        stream: NetworkStream,
        diagnostic: Optional[DiagnosticHook] = None,
        read_chunk_size: Optional[int] = None,
        body_buffer_hint: Optional[int] = None,
    ):
        """
        Initialize HTTP/1.x connection.

        Args:
            stream: The NetworkStream to use for communication
            diagnostic: Hook receiving (level, message) at each protocol step
            read_chunk_size: Bytes requested per read while parsing the head
            body_buffer_hint: Bytes requested per read for close-delimited bodies
        """
        self._stream = stream
        self._diagnostic = diagnostic or log_diagnostic
        self._state = ConnectionState.NEW
        self._read_chunk_size = read_chunk_size or self.DEFAULT_READ_CHUNK_SIZE
        self._body_buffer_hint = body_buffer_hint or self.DEFAULT_BODY_BUFFER_HINT

        # Metrics
        self._bytes_sent = 0
        self._bytes_received = 0
        self._request_time: Optional[float] = None

    async def handle_request(self, request: Request) -> Response:
        """
        Handle a complete HTTP request/response cycle.

        Args:
            request: The HTTP request to send

        Returns:
            The HTTP response received, body fully read

        Raises:
            ConnectionError: If the connection was already used or closed
            FormatError: If the request cannot be serialized
            ParseError: If the response is malformed
            UnsupportedFeature: If the response uses an unsupported coding
            TransportError: If reading or writing fails
        """
        if self._state is not ConnectionState.NEW:
            raise ConnectionError(f"Connection cannot be used in state {self._state.value!r}")

        self._state = ConnectionState.ACTIVE
        start_time = time.monotonic()

        try:
            self._bytes_sent = await write_request(self._stream, request, self._diagnostic)
            response = await self._receive_response()
        except asyncio.CancelledError:
            await self._abort()
            raise
        except Exception as e:
            self._diagnostic(
                logging.ERROR,
                f"{request.method} {request.path} failed: {e} "
                f"({time.monotonic() - start_time:.3f}s)",
            )
            await self._abort()
            raise

        self._request_time = time.monotonic() - start_time
        self._diagnostic(
            logging.DEBUG,
            f"{request.method} {request.path} -> {response.status_code} "
            f"({self._request_time:.3f}s)",
        )
        return response

    async def _receive_response(self) -> Response:
        """Read status line, headers and body from the stream."""
        reader = BufferedReader(self._stream, read_size=self._read_chunk_size)

        status_line = await read_status_line(reader)
        self._diagnostic(logging.DEBUG, f"response status line: {status_line!r}")
        version, status_code = parse_status_line(status_line)

        headers = await read_headers(reader, self._diagnostic)
        self._diagnostic(logging.DEBUG, f"response headers: {headers.raw()!r}")

        framing = select_framing(headers)
        body = await read_body(
            reader, headers, self._diagnostic, self._body_buffer_hint, framing=framing
        )
        self._diagnostic(logging.DEBUG, f"response body: {len(body)} bytes")

        self._bytes_received = reader.bytes_received

        extensions: Dict[str, Any] = {}
        # Only an upgrade framing leaves the new protocol's bytes unread.
        if framing is Framing.UPGRADE:
            extensions["network_stream"] = self._stream
            extensions["buffered_data"] = reader.take_buffered()
            self._state = ConnectionState.UPGRADED
        else:
            self._state = ConnectionState.COMPLETE

        return Response(
            version=version,
            status_code=status_code,
            headers=headers,
            body=body,
            extensions=extensions,
        )

    async def _abort(self) -> None:
        self._state = ConnectionState.CLOSED
        await self._stream.aclose()

    async def aclose(self) -> None:
        """
        Close the connection and cleanup resources.
        """
        if self._state is not ConnectionState.CLOSED:
            self._state = ConnectionState.CLOSED
            await self._stream.aclose()

    async def __aenter__(self) -> "HTTP11Connection":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        if self._state is not ConnectionState.UPGRADED:
            await self.aclose()

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_closed(self) -> bool:
        """Check if connection is closed."""
        return self._state is ConnectionState.CLOSED

    @property
    def stream(self) -> NetworkStream:
        return self._stream

    @property
    def metrics(self) -> Dict[str, Any]:
        """
        Get connection metrics.

        Returns:
            Dictionary with connection metrics
        """
        return {
            "bytes_sent": self._bytes_sent,
            "bytes_received": self._bytes_received,
            "request_time": self._request_time,
            "state": self._state.value,
            "encrypted": self._stream.is_encrypted,
        }


async def send_request(
    stream: NetworkStream,
    request: Request,
    diagnostic: Optional[DiagnosticHook] = None,
) -> Response:
    """
    Run one request/response exchange over an open stream.

    Args:
        stream: Connected (and, for https/wss, TLS-wrapped) stream
        request: The request to send
        diagnostic: Optional hook receiving (level, message) pairs

    Returns:
        The parsed response
    """
    connection = HTTP11Connection(stream, diagnostic=diagnostic)
    return await connection.handle_request(request)
