"""
Mock network implementations for testing.

This module provides mock implementations of NetworkStream and NetworkBackend
that can be used for unit testing without requiring actual network connections.
"""

import ssl
from typing import Any, Dict, List, Optional, Tuple

from .backend import NetworkBackend
from .stream import NetworkStream


class MockNetworkStream(NetworkStream):
    """
    Mock network stream for testing.

    This implementation simulates a network stream in memory,
    allowing tests to verify network behavior without actual I/O.
    """

    def __init__(
        self,
        data: bytes = b"",
        read_size: Optional[int] = None,
        read_error: Optional[Exception] = None,
        write_error: Optional[Exception] = None,
    ):
        """
        Initialize the mock stream.

        Args:
            data: Initial data to be available for reading.
            read_size: If set, no read returns more than this many bytes,
                       simulating data arriving in small segments.
            read_error: Exception raised by read() once the data is exhausted.
            write_error: Exception raised by every write().
        """
        self._data = data
        self._position = 0
        self._closed = False
        self._extra_info: Dict[str, Any] = {}
        self._write_buffer: List[bytes] = []
        self._flush_points: List[int] = []
        self._read_size = read_size
        self._read_error = read_error
        self._write_error = write_error
        self.read_calls = 0

    async def read(self, max_bytes: Optional[int] = None) -> bytes:
        """
        Read data from the mock stream.

        Raises:
            RuntimeError: If the stream is closed.
        """
        if self._closed:
            raise RuntimeError("Stream is closed")

        self.read_calls += 1

        if self._position >= len(self._data):
            if self._read_error is not None:
                raise self._read_error
            return b""

        size = len(self._data) - self._position
        if max_bytes is not None:
            size = min(size, max_bytes)
        if self._read_size is not None:
            size = min(size, self._read_size)

        result = self._data[self._position:self._position + size]
        self._position += size
        return result

    async def write(self, data: bytes) -> None:
        """
        Write data to the mock stream.

        Raises:
            RuntimeError: If the stream is closed.
        """
        if self._closed:
            raise RuntimeError("Stream is closed")

        if self._write_error is not None:
            raise self._write_error

        self._write_buffer.append(data)

    async def flush(self) -> None:
        """Record how much data had been written when flush was called."""
        if self._closed:
            raise RuntimeError("Stream is closed")
        self._flush_points.append(len(self.written_data))

    async def aclose(self) -> None:
        """Close the mock stream."""
        self._closed = True

    def get_extra_info(self, name: str) -> Optional[Any]:
        return self._extra_info.get(name)

    @property
    def is_closed(self) -> bool:
        """Check if the mock stream is closed."""
        return self._closed

    @property
    def written_data(self) -> bytes:
        """Get all data that was written to the stream."""
        return b"".join(self._write_buffer)

    @property
    def writes(self) -> List[bytes]:
        """Get the individual buffers passed to write()."""
        return list(self._write_buffer)

    @property
    def flush_points(self) -> List[int]:
        """Get the written byte count at every flush() call."""
        return list(self._flush_points)

    @property
    def bytes_consumed(self) -> int:
        """Get the number of bytes handed out by read()."""
        return self._position

    @property
    def remaining_data(self) -> bytes:
        """Get the data not yet read."""
        return self._data[self._position:]

    def set_extra_info(self, name: str, value: Any) -> None:
        self._extra_info[name] = value

    def add_data(self, data: bytes) -> None:
        """
        Add data to be available for reading.

        Args:
            data: The data to add.
        """
        self._data += data


class MockNetworkBackend(NetworkBackend):
    """
    Mock network backend for testing.

    Responses are scripted per (host, port); each connect call hands
    out a fresh MockNetworkStream preloaded with that response.
    """

    def __init__(self) -> None:
        self._responses: Dict[Tuple[str, int], bytes] = {}
        self._connect_errors: Dict[Tuple[str, int], Exception] = {}
        self.connections: List[Tuple[str, int, bool, MockNetworkStream]] = []

    def add_response(self, host: str, port: int, data: bytes) -> None:
        """Script the bytes a server at host:port answers with."""
        self._responses[(host, port)] = data

    def add_connect_error(self, host: str, port: int, error: Exception) -> None:
        """Make connecting to host:port raise error."""
        self._connect_errors[(host, port)] = error

    def _connect(self, host: str, port: int, tls: bool) -> MockNetworkStream:
        key = (host, port)
        if key in self._connect_errors:
            raise self._connect_errors[key]

        stream = MockNetworkStream(self._responses.get(key, b""))
        stream.set_extra_info("peername", (host, port))
        stream.set_extra_info("sockname", ("127.0.0.1", 12345))
        if tls:
            stream.set_extra_info("ssl_object", True)
        self.connections.append((host, port, tls, stream))
        return stream

    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
    ) -> MockNetworkStream:
        return self._connect(host, port, tls=False)

    async def connect_tls(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
        ssl_context: Optional[ssl.SSLContext] = None,
    ) -> MockNetworkStream:
        return self._connect(host, port, tls=True)

    @property
    def last_stream(self) -> Optional[MockNetworkStream]:
        """Get the stream handed out by the most recent connect call."""
        if not self.connections:
            return None
        return self.connections[-1][3]

    def reset(self) -> None:
        """Reset all mock connections."""
        self._responses.clear()
        self._connect_errors.clear()
        self.connections.clear()
