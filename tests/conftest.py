"""
Pytest configuration for http1_client tests.

This file contains shared fixtures and configuration
for all tests in the project.
"""

import asyncio
import contextlib
from typing import List, Optional, Tuple

import h11
import pytest

from http1_client.network.mock import MockNetworkStream
from http1_client.streams import BufferedReader


def h11_response_bytes(
    status_code: int,
    headers: List[Tuple[str, str]],
    body: bytes = b"",
    chunks: Optional[List[bytes]] = None,
) -> bytes:
    """
    Produce a response the way a compliant HTTP/1.1 server would.

    Without a content-length header h11 frames the body as chunked.
    """
    conn = h11.Connection(h11.SERVER)
    conn.receive_data(b"GET / HTTP/1.1\r\nHost: example.com\r\n\r\n")
    assert isinstance(conn.next_event(), h11.Request)
    assert isinstance(conn.next_event(), h11.EndOfMessage)

    data = conn.send(h11.Response(status_code=status_code, headers=headers))
    for chunk in chunks if chunks is not None else ([body] if body else []):
        data += conn.send(h11.Data(data=chunk))
    data += conn.send(h11.EndOfMessage())
    return data


def h11_parse_request(data: bytes) -> Tuple[h11.Request, bytes]:
    """Parse raw request bytes with h11, returning the head and the body."""
    conn = h11.Connection(h11.SERVER)
    conn.receive_data(data)
    request = conn.next_event()
    assert isinstance(request, h11.Request)

    body = b""
    while True:
        event = conn.next_event()
        if isinstance(event, h11.Data):
            body += event.data
        elif isinstance(event, h11.EndOfMessage):
            break
        else:
            raise AssertionError(f"unexpected event {event!r}")
    return request, body


@pytest.fixture
def make_reader():
    """Create a BufferedReader over in-memory data."""
    def _create(data: bytes, read_size: Optional[int] = None) -> BufferedReader:
        return BufferedReader(MockNetworkStream(data, read_size=read_size))
    return _create


@pytest.fixture
def sample_headers():
    """Sample headers for testing."""
    return [
        ("Host", "example.com"),
        ("User-Agent", "http1_client/0.1.0"),
        ("Accept", "*/*"),
    ]


@pytest.fixture
def simple_response():
    """A plain content-length response."""
    return (
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: text/plain\r\n"
        b"Content-Length: 11\r\n"
        b"\r\n"
        b"Hello World"
    )


@pytest.fixture
def local_server():
    """
    Start a local TCP server answering every connection with fixed bytes.

    Usage:
        async with local_server(b"HTTP/1.1 200 OK...") as server:
            ... server.port, server.requests ...
    """

    class _Server:
        def __init__(self, response: bytes) -> None:
            self.response = response
            self.requests: List[bytes] = []
            self.host = "127.0.0.1"
            self.port = 0

        async def handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
            try:
                head = await reader.readuntil(b"\r\n\r\n")
            except (asyncio.IncompleteReadError, ConnectionError):
                writer.close()
                return
            body = b""
            for line in head.split(b"\r\n"):
                if line.lower().startswith(b"content-length:"):
                    body = await reader.readexactly(int(line.split(b":", 1)[1]))
            self.requests.append(head + body)
            writer.write(self.response)
            await writer.drain()
            writer.close()

    @contextlib.asynccontextmanager
    async def _serve(response: bytes):
        server = _Server(response)
        tcp_server = await asyncio.start_server(server.handle, server.host, 0)
        server.port = tcp_server.sockets[0].getsockname()[1]
        try:
            yield server
        finally:
            tcp_server.close()
            await tcp_server.wait_closed()

    return _serve
