"""
Network utilities for http1_client.

This module provides helpers shared by the connection factory and the
network backends: scheme/port policy, SSL context setup and Host
header formatting.
"""

import ssl
from typing import Dict, List, Optional, Union


DEFAULT_PORTS: Dict[str, int] = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
}

SECURE_SCHEMES = frozenset({"https", "wss"})


def default_port(scheme: str) -> Optional[int]:
    """
    Get the default port for a URL scheme.

    Args:
        scheme: URL scheme (http, https, ws, wss)

    Returns:
        The port number, or None for schemes without a known default
    """
    return DEFAULT_PORTS.get(scheme.lower())


def is_secure_scheme(scheme: str) -> bool:
    """Check whether a scheme requires TLS."""
    return scheme.lower() in SECURE_SCHEMES


def create_ssl_context(
    alpn_protocols: Optional[List[str]] = None,
    verify_mode: int = ssl.CERT_REQUIRED,
    check_hostname: bool = True,
    cafile: Optional[str] = None,
) -> ssl.SSLContext:
    """
    Create an SSL context for client connections.

    Args:
        alpn_protocols: Optional list of ALPN protocols to negotiate
        verify_mode: SSL verification mode
        check_hostname: Whether to verify hostname
        cafile: Optional CA bundle used instead of the system store

    Returns:
        Configured SSL context
    """
    context = ssl.create_default_context(cafile=cafile)
    # check_hostname must be cleared before verify_mode can be relaxed
    context.check_hostname = check_hostname
    context.verify_mode = verify_mode

    if alpn_protocols:
        context.set_alpn_protocols(alpn_protocols)

    context.options |= ssl.OP_NO_COMPRESSION
    context.minimum_version = ssl.TLSVersion.TLSv1_2

    return context


def format_host_header(host: str, port: Optional[int], scheme: str) -> str:
    """
    Format host header for HTTP requests.

    The port is omitted when it is the scheme's default.
    """
    if ":" in host:
        host = f"[{host}]"
    if port is None or port == default_port(scheme):
        return host
    return f"{host}:{port}"


def validate_port(port: Union[int, str]) -> int:
    """
    Validate and convert port to integer.

    Raises:
        ValueError: If port is invalid
    """
    try:
        port_int = int(port)
    except (ValueError, TypeError):
        raise ValueError(f"Invalid port: {port}")

    if not (1 <= port_int <= 65535):
        raise ValueError(f"Port must be between 1 and 65535, got {port_int}")

    return port_int
