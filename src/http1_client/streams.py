"""
Buffered reading for http1_client.

This module provides the BufferedReader that the response parser reads
through. It turns the chunk-oriented NetworkStream.read() into the
line-oriented and exact-size reads the HTTP/1.x grammar needs.
"""

from typing import Optional

from .exceptions import ParseError, TransportError
from .network.stream import NetworkStream


class BufferedReader:
    """
    Line and exact-size reader over a NetworkStream.

    Bytes read from the stream but not yet consumed stay in an internal
    buffer; after an upgrade response they belong to the new protocol
    and can be taken with take_buffered().
    """

    DEFAULT_READ_SIZE = 65536  # 64KB
    DEFAULT_MAX_LINE_SIZE = 65536  # status line, header lines, chunk sizes

    def __init__(
        self,
        stream: NetworkStream,
        read_size: Optional[int] = None,
        max_line_size: Optional[int] = None,
    ) -> None:
        """
        Initialize BufferedReader.

        Args:
            stream: The NetworkStream to read from
            read_size: Bytes requested from the stream per read
            max_line_size: Longest line readline() accepts
        """
        self._stream = stream
        self._buffer = bytearray()
        self._eof = False
        self._read_size = read_size or self.DEFAULT_READ_SIZE
        self._max_line_size = max_line_size or self.DEFAULT_MAX_LINE_SIZE
        self._bytes_received = 0

    async def _fill(self, max_bytes: Optional[int] = None) -> bool:
        """Read once from the stream; return False at end of stream."""
        if self._eof:
            return False

        try:
            data = await self._stream.read(max_bytes or self._read_size)
        except (OSError, RuntimeError) as e:
            raise TransportError(f"read failed: {e}", cause=e) from e

        if not data:
            self._eof = True
            return False

        self._buffer += data
        self._bytes_received += len(data)
        return True

    async def readline(self) -> bytes:
        """
        Read one line, including its terminating b"\\n".

        Returns:
            The line, the unterminated tail of the stream, or b"" once
            the stream is exhausted.

        Raises:
            ParseError: If the line grows past max_line_size
            TransportError: If the stream fails
        """
        start = 0
        while True:
            index = self._buffer.find(b"\n", start)
            if index >= 0:
                line = bytes(self._buffer[:index + 1])
                del self._buffer[:index + 1]
                return line

            if len(self._buffer) > self._max_line_size:
                raise ParseError(f"line exceeds {self._max_line_size} bytes")

            start = len(self._buffer)
            if not await self._fill():
                line = bytes(self._buffer)
                self._buffer.clear()
                return line

    async def readexactly(self, n: int) -> bytes:
        """
        Read exactly n bytes.

        Raises:
            TransportError: If the stream closes before n bytes arrive
        """
        while len(self._buffer) < n:
            if not await self._fill(max(n - len(self._buffer), self._read_size)):
                raise TransportError(
                    f"connection closed after {len(self._buffer)} of {n} expected bytes"
                )

        data = bytes(self._buffer[:n])
        del self._buffer[:n]
        return data

    async def read_to_end(self, size_hint: Optional[int] = None) -> bytes:
        """
        Read until the stream is exhausted.

        Args:
            size_hint: Bytes requested per stream read. Not a limit.
        """
        while await self._fill(size_hint):
            pass

        data = bytes(self._buffer)
        self._buffer.clear()
        return data

    def take_buffered(self) -> bytes:
        """Remove and return the bytes read from the stream but not consumed."""
        data = bytes(self._buffer)
        self._buffer.clear()
        return data

    @property
    def at_eof(self) -> bool:
        return self._eof and not self._buffer

    @property
    def bytes_received(self) -> int:
        """Total bytes received from the stream."""
        return self._bytes_received
