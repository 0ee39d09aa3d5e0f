"""
Connection establishment for http1_client.

The ConnectionFactory decides where a request goes and whether the
connection needs TLS, then asks a NetworkBackend for the stream.
"""

import asyncio
import logging
import ssl
from typing import Optional, Tuple

from .exceptions import ConnectionError, TransportError
from .http_primitives import Request
from .network.asyncio_backend import AsyncIONetworkBackend
from .network.backend import NetworkBackend
from .network.stream import NetworkStream
from .network.utils import default_port, is_secure_scheme

logger = logging.getLogger(__name__)


class ConnectionFactory:
    """
    Opens the NetworkStream for a request.

    https and wss are connected over TLS, http and ws in plaintext.
    The port defaults to 80 or 443 by scheme when the URL has none.
    """

    DEFAULT_CONNECT_TIMEOUT: Optional[float] = None

    def __init__(
        self,
        backend: Optional[NetworkBackend] = None,
        connect_timeout: Optional[float] = None,
        ssl_context: Optional[ssl.SSLContext] = None,
    ) -> None:
        """
        Initialize the factory.

        Args:
            backend: Network backend; AsyncIONetworkBackend by default
            connect_timeout: Timeout for connect plus TLS handshake
            ssl_context: Context used for TLS connections
        """
        self._backend = backend or AsyncIONetworkBackend()
        self._connect_timeout = connect_timeout or self.DEFAULT_CONNECT_TIMEOUT
        self._ssl_context = ssl_context

    @staticmethod
    def resolve_target(request: Request) -> Tuple[str, str, int]:
        """
        Extract the scheme, host and port a request must be sent to.

        Raises:
            ConnectionError: If the URL has no scheme or host, or no
                             port can be determined for its scheme
        """
        scheme = request.scheme
        if not scheme:
            raise ConnectionError("No scheme found in URI")

        host = request.host
        if not host:
            raise ConnectionError("No authority found in URI")

        port = request.port
        if port is None:
            port = default_port(scheme)
            if port is None:
                raise ConnectionError(f"Unsupported URL scheme: {scheme!r}")

        return scheme, host, port

    async def connect(self, request: Request) -> NetworkStream:
        """
        Connect to the server a request is addressed to.

        Raises:
            ConnectionError: If the target cannot be determined
            TransportError: If connecting or the TLS handshake fails
        """
        scheme, host, port = self.resolve_target(request)
        logger.debug(f"Opening {scheme} connection to {host}:{port}")

        try:
            if is_secure_scheme(scheme):
                return await self._backend.connect_tls(
                    host, port, self._connect_timeout, self._ssl_context
                )
            return await self._backend.connect_tcp(host, port, self._connect_timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"connecting to {host}:{port} timed out after {self._connect_timeout}s",
                cause=e,
            ) from e
        except OSError as e:
            raise TransportError(f"failed to connect to {host}:{port}: {e}", cause=e) from e
