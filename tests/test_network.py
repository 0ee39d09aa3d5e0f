"""
Tests for network interfaces and their implementations.

This module covers the mock stream and backend, the asyncio backend
against a local server, and the network utilities.
"""

import ssl

import pytest

from http1_client.network import (
    AsyncIONetworkBackend,
    AsyncIONetworkStream,
    MockNetworkBackend,
    MockNetworkStream,
    NetworkBackend,
    NetworkStream,
    create_ssl_context,
    default_port,
    format_host_header,
    is_secure_scheme,
    validate_port,
)


class TestMockNetworkStream:
    """Test cases for MockNetworkStream."""

    @pytest.mark.asyncio
    async def test_read_write_basic(self):
        """Test basic read and write operations."""
        stream = MockNetworkStream()

        await stream.write(b"hello world")
        assert stream.written_data == b"hello world"

        stream.add_data(b"hello world")

        assert await stream.read(5) == b"hello"
        assert await stream.read() == b" world"
        assert await stream.read() == b""

    @pytest.mark.asyncio
    async def test_read_size_limit(self):
        """Test that read_size caps every read."""
        stream = MockNetworkStream(b"abcdef", read_size=2)
        assert await stream.read(100) == b"ab"
        assert await stream.read(1) == b"c"
        assert stream.bytes_consumed == 3
        assert stream.remaining_data == b"def"

    @pytest.mark.asyncio
    async def test_flush_points(self):
        stream = MockNetworkStream()
        await stream.write(b"abc")
        await stream.flush()
        await stream.write(b"de")
        await stream.flush()
        assert stream.writes == [b"abc", b"de"]
        assert stream.flush_points == [3, 5]

    @pytest.mark.asyncio
    async def test_close(self):
        """Test closing the stream."""
        stream = MockNetworkStream(b"data")
        assert not stream.is_closed
        await stream.aclose()
        assert stream.is_closed

        with pytest.raises(RuntimeError, match="Stream is closed"):
            await stream.read()
        with pytest.raises(RuntimeError, match="Stream is closed"):
            await stream.write(b"data")

    @pytest.mark.asyncio
    async def test_injected_errors(self):
        stream = MockNetworkStream(b"x", read_error=OSError("boom"), write_error=OSError("nope"))
        assert await stream.read() == b"x"
        with pytest.raises(OSError, match="boom"):
            await stream.read()
        with pytest.raises(OSError, match="nope"):
            await stream.write(b"y")

    def test_extra_info(self):
        stream = MockNetworkStream()
        assert stream.get_extra_info("peername") is None
        assert not stream.is_encrypted

        stream.set_extra_info("ssl_object", True)
        assert stream.is_encrypted

    def test_interface(self):
        assert isinstance(MockNetworkStream(), NetworkStream)


class TestMockNetworkBackend:
    """Test cases for MockNetworkBackend."""

    @pytest.mark.asyncio
    async def test_connect_tcp(self):
        backend = MockNetworkBackend()
        backend.add_response("example.com", 80, b"HTTP/1.1 200 OK\r\n\r\n")

        stream = await backend.connect_tcp("example.com", 80)

        assert isinstance(backend, NetworkBackend)
        assert await stream.read() == b"HTTP/1.1 200 OK\r\n\r\n"
        assert stream.get_extra_info("peername") == ("example.com", 80)
        assert not stream.is_encrypted
        assert backend.last_stream is stream

    @pytest.mark.asyncio
    async def test_connect_tls(self):
        backend = MockNetworkBackend()
        stream = await backend.connect_tls("example.com", 443)
        assert stream.is_encrypted
        assert backend.connections[0][:3] == ("example.com", 443, True)

    @pytest.mark.asyncio
    async def test_connect_error(self):
        backend = MockNetworkBackend()
        backend.add_connect_error("example.com", 80, ConnectionRefusedError("refused"))
        with pytest.raises(ConnectionRefusedError):
            await backend.connect_tcp("example.com", 80)

    def test_reset(self):
        backend = MockNetworkBackend()
        backend.add_response("a", 1, b"x")
        backend.reset()
        assert backend.connections == []
        assert backend.last_stream is None


class TestAsyncIONetworkBackend:
    """Test the asyncio backend against a local server."""

    @pytest.mark.asyncio
    async def test_round_trip(self, local_server):
        async with local_server(b"HTTP/1.1 204 No Content\r\n\r\n") as server:
            backend = AsyncIONetworkBackend()
            stream = await backend.connect_tcp(server.host, server.port, timeout=5.0)
            assert isinstance(stream, AsyncIONetworkStream)
            assert not stream.is_encrypted
            assert stream.get_extra_info("peername")[1] == server.port

            await stream.write(b"GET / HTTP/1.1\r\nHost: localhost\r\n\r\n")
            await stream.flush()

            data = b""
            while True:
                chunk = await stream.read()
                if not chunk:
                    break
                data += chunk

            await stream.aclose()

        assert data == b"HTTP/1.1 204 No Content\r\n\r\n"
        assert server.requests == [b"GET / HTTP/1.1\r\nHost: localhost\r\n\r\n"]
        assert stream.is_closed

    @pytest.mark.asyncio
    async def test_closed_stream_refuses_io(self, local_server):
        async with local_server(b"") as server:
            stream = await AsyncIONetworkBackend().connect_tcp(server.host, server.port)
            await stream.aclose()
            await stream.aclose()  # closing twice is harmless

            with pytest.raises(RuntimeError, match="Stream is closed"):
                await stream.write(b"x")
            with pytest.raises(RuntimeError, match="Stream is closed"):
                await stream.read()

    @pytest.mark.asyncio
    async def test_connection_refused(self, unused_tcp_port):
        with pytest.raises(OSError):
            await AsyncIONetworkBackend().connect_tcp("127.0.0.1", unused_tcp_port)


class TestUtils:
    """Test network utility functions."""

    @pytest.mark.parametrize(
        "scheme, port",
        [("http", 80), ("https", 443), ("ws", 80), ("wss", 443), ("HTTPS", 443), ("ftp", None)],
    )
    def test_default_port(self, scheme, port):
        assert default_port(scheme) == port

    def test_is_secure_scheme(self):
        assert is_secure_scheme("https")
        assert is_secure_scheme("wss")
        assert not is_secure_scheme("http")
        assert not is_secure_scheme("ws")

    @pytest.mark.parametrize(
        "host, port, scheme, expected",
        [
            ("example.com", None, "http", "example.com"),
            ("example.com", 80, "http", "example.com"),
            ("example.com", 443, "https", "example.com"),
            ("example.com", 8080, "http", "example.com:8080"),
            ("example.com", 80, "https", "example.com:80"),
            ("::1", 8443, "https", "[::1]:8443"),
        ],
    )
    def test_format_host_header(self, host, port, scheme, expected):
        assert format_host_header(host, port, scheme) == expected

    def test_validate_port(self):
        assert validate_port("8080") == 8080
        with pytest.raises(ValueError, match="Invalid port"):
            validate_port("http")
        with pytest.raises(ValueError, match="between 1 and 65535"):
            validate_port(70000)

    def test_create_ssl_context(self):
        context = create_ssl_context(alpn_protocols=["http/1.1"])
        assert context.verify_mode == ssl.CERT_REQUIRED
        assert context.check_hostname
        assert context.minimum_version == ssl.TLSVersion.TLSv1_2

    def test_create_unverified_ssl_context(self):
        context = create_ssl_context(verify_mode=ssl.CERT_NONE, check_hostname=False)
        assert context.verify_mode == ssl.CERT_NONE
        assert not context.check_hostname
