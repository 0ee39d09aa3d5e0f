"""
Network backend interface for http1_client.

This module defines the NetworkBackend interface that provides
abstractions for creating plaintext and TLS connections.
"""

import ssl
from abc import ABC, abstractmethod
from typing import Optional

from .stream import NetworkStream


class NetworkBackend(ABC):
    """
    Interface for network backend implementations.

    Backends resolve the host, open the TCP connection and, for TLS,
    perform the handshake before handing back a ready NetworkStream.
    Connection timeouts are enforced here, never in the protocol code.
    """

    @abstractmethod
    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
    ) -> NetworkStream:
        """
        Connect to a TCP endpoint.

        Args:
            host: The hostname or IP address to connect to.
            port: The port number to connect to.
            timeout: Optional timeout in seconds for the connection.

        Returns:
            A NetworkStream representing the TCP connection.

        Raises:
            OSError: If the connection fails.
            asyncio.TimeoutError: If the connection times out.
        """
        pass

    @abstractmethod
    async def connect_tls(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
        ssl_context: Optional[ssl.SSLContext] = None,
    ) -> NetworkStream:
        """
        Connect to a TCP endpoint and complete a TLS handshake.

        Args:
            host: The hostname, also used for certificate verification.
            port: The port number to connect to.
            timeout: Optional timeout in seconds for connect plus handshake.
            ssl_context: Optional context; a default one is created if None.

        Returns:
            A NetworkStream representing the TLS connection.

        Raises:
            OSError: If the connection or the handshake fails.
            asyncio.TimeoutError: If the connection times out.
        """
        pass
