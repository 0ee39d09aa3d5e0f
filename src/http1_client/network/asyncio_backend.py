"""
asyncio network backend for http1_client.

Streams here are thin wrappers around asyncio's StreamReader/StreamWriter
pair; TLS is handled by asyncio's SSL transport, so plaintext and
encrypted streams share one implementation.
"""

import asyncio
import logging
import ssl
from typing import Any, Optional

from .backend import NetworkBackend
from .stream import NetworkStream
from .utils import create_ssl_context

logger = logging.getLogger(__name__)


class AsyncIONetworkStream(NetworkStream):
    """Network stream backed by an asyncio StreamReader/StreamWriter pair."""

    DEFAULT_READ_SIZE = 65536  # 64KB

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._closed = False

    async def read(self, max_bytes: Optional[int] = None) -> bytes:
        if self._closed:
            raise RuntimeError("Stream is closed")
        return await self._reader.read(max_bytes or self.DEFAULT_READ_SIZE)

    async def write(self, data: bytes) -> None:
        if self._closed:
            raise RuntimeError("Stream is closed")
        self._writer.write(data)

    async def flush(self) -> None:
        if self._closed:
            raise RuntimeError("Stream is closed")
        await self._writer.drain()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except (OSError, ssl.SSLError) as e:
            # The peer may already have torn the connection down.
            logger.debug(f"Error while closing stream: {e}")

    def get_extra_info(self, name: str) -> Optional[Any]:
        return self._writer.get_extra_info(name)

    @property
    def is_closed(self) -> bool:
        return self._closed


class AsyncIONetworkBackend(NetworkBackend):
    """Network backend using asyncio.open_connection."""

    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
    ) -> AsyncIONetworkStream:
        logger.debug(f"Connecting to {host}:{port}")
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port),
            timeout=timeout,
        )
        return AsyncIONetworkStream(reader, writer)

    async def connect_tls(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
        ssl_context: Optional[ssl.SSLContext] = None,
    ) -> AsyncIONetworkStream:
        context = ssl_context or create_ssl_context()
        logger.debug(f"Connecting to {host}:{port} over TLS")
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port, ssl=context, server_hostname=host),
            timeout=timeout,
        )
        return AsyncIONetworkStream(reader, writer)
