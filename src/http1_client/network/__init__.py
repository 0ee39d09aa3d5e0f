"""
Network backend components for http1_client.

This module provides the low-level networking abstractions:
the stream and backend interfaces, the asyncio implementation
and in-memory mocks for tests.
"""

from .backend import NetworkBackend
from .stream import NetworkStream
from .asyncio_backend import AsyncIONetworkBackend, AsyncIONetworkStream
from .mock import MockNetworkBackend, MockNetworkStream
from .utils import (
    DEFAULT_PORTS,
    create_ssl_context,
    default_port,
    format_host_header,
    is_secure_scheme,
    validate_port,
)

__all__ = [
    "NetworkBackend",
    "NetworkStream",
    "AsyncIONetworkBackend",
    "AsyncIONetworkStream",
    "MockNetworkBackend",
    "MockNetworkStream",
    "DEFAULT_PORTS",
    "create_ssl_context",
    "default_port",
    "format_host_header",
    "is_secure_scheme",
    "validate_port",
]
