"""
Network stream interface for http1_client.

This module defines the NetworkStream interface that all network stream
implementations must follow. Plaintext and TLS streams implement the
same contract; the protocol code never needs to know which one it holds.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class NetworkStream(ABC):
    """
    Interface for network streams with async I/O operations.

    The stream is owned by the caller for the duration of one
    request/response exchange; the protocol code only borrows it.
    """

    @abstractmethod
    async def read(self, max_bytes: Optional[int] = None) -> bytes:
        """
        Read data from the stream.

        Args:
            max_bytes: Maximum number of bytes to read. If None, an
                      implementation-defined chunk size is used.

        Returns:
            The data read from the stream, or b"" at end of stream.

        Raises:
            RuntimeError: If the stream is closed.
            OSError: If a network error occurs.
        """
        pass

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """
        Write the full buffer to the stream.

        Raises:
            RuntimeError: If the stream is closed.
            OSError: If a network error occurs.
        """
        pass

    @abstractmethod
    async def flush(self) -> None:
        """
        Wait until all written data has been handed to the transport.

        Raises:
            OSError: If a network error occurs.
        """
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Close the stream and cleanup resources."""
        pass

    @abstractmethod
    def get_extra_info(self, name: str) -> Optional[Any]:
        """
        Get extra information about the stream.

        Args:
            name: The name of the information to retrieve. Common values include:
                 - "socket": The underlying socket object
                 - "peername": The remote endpoint address
                 - "sockname": The local endpoint address
                 - "ssl_object": The SSL object for TLS streams

        Returns:
            The requested information or None if not available.
        """
        pass

    @property
    @abstractmethod
    def is_closed(self) -> bool:
        """Check if the stream is closed."""
        pass

    @property
    def is_encrypted(self) -> bool:
        """Check if the stream is wrapped in TLS."""
        return self.get_extra_info("ssl_object") is not None
