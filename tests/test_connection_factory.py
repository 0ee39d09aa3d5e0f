"""
Tests for connection establishment.
"""

import asyncio

import pytest

from http1_client.connection_factory import ConnectionFactory
from http1_client.exceptions import ConnectionError, TransportError
from http1_client.http_primitives import Request
from http1_client.network.mock import MockNetworkBackend


class TestResolveTarget:
    """Test scheme, host and port resolution."""

    @pytest.mark.parametrize(
        "url, target",
        [
            ("http://example.com/", ("http", "example.com", 80)),
            ("https://example.com/", ("https", "example.com", 443)),
            ("ws://example.com/socket", ("ws", "example.com", 80)),
            ("wss://example.com/socket", ("wss", "example.com", 443)),
            ("http://example.com:8080/", ("http", "example.com", 8080)),
            ("ftp://example.com:2121/", ("ftp", "example.com", 2121)),
        ],
    )
    def test_targets(self, url, target):
        assert ConnectionFactory.resolve_target(Request.create("GET", url)) == target

    def test_missing_scheme(self):
        with pytest.raises(ConnectionError, match="No scheme found"):
            ConnectionFactory.resolve_target(Request.create("GET", "/just/a/path"))

    def test_missing_authority(self):
        with pytest.raises(ConnectionError, match="No authority found"):
            ConnectionFactory.resolve_target(Request.create("GET", "file:///etc/hosts"))

    def test_unsupported_scheme(self):
        with pytest.raises(ConnectionError, match="Unsupported URL scheme"):
            ConnectionFactory.resolve_target(Request.create("GET", "ftp://example.com/"))


class TestConnect:
    """Test choosing plaintext or TLS."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url, port, tls",
        [
            ("http://example.com/", 80, False),
            ("ws://example.com/", 80, False),
            ("https://example.com/", 443, True),
            ("wss://example.com/", 443, True),
        ],
    )
    async def test_encryption_by_scheme(self, url, port, tls):
        backend = MockNetworkBackend()
        factory = ConnectionFactory(backend)

        stream = await factory.connect(Request.create("GET", url))

        assert backend.connections == [("example.com", port, tls, stream)]
        assert stream.is_encrypted is tls

    @pytest.mark.asyncio
    async def test_os_error_becomes_transport_error(self):
        backend = MockNetworkBackend()
        backend.add_connect_error("example.com", 80, ConnectionRefusedError("refused"))

        with pytest.raises(TransportError, match="failed to connect to example.com:80") as exc_info:
            await ConnectionFactory(backend).connect(Request.create("GET", "http://example.com/"))

        assert isinstance(exc_info.value.cause, ConnectionRefusedError)

    @pytest.mark.asyncio
    async def test_timeout_becomes_transport_error(self):
        backend = MockNetworkBackend()
        backend.add_connect_error("example.com", 443, asyncio.TimeoutError())
        factory = ConnectionFactory(backend, connect_timeout=2.5)

        with pytest.raises(TransportError, match="timed out after 2.5s"):
            await factory.connect(Request.create("GET", "https://example.com/"))

    @pytest.mark.asyncio
    async def test_real_backend_by_default(self, local_server):
        async with local_server(b"") as server:
            factory = ConnectionFactory(connect_timeout=5.0)
            request = Request.create("GET", f"http://{server.host}:{server.port}/")
            stream = await factory.connect(request)
            try:
                assert stream.get_extra_info("peername")[1] == server.port
            finally:
                await stream.aclose()
