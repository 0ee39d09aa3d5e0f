"""
High-level client for http1_client.

HTTPClient combines the ConnectionFactory with one HTTP11Connection
per request. It also carries the JSON convenience wrapper.
"""

import json
import logging
from typing import Any, Optional

from .connection_factory import ConnectionFactory
from .diagnostics import DiagnosticHook
from .http11 import ConnectionState, HTTP11Connection
from .http_primitives import HeaderInput, Headers, Request, Response
from .network.backend import NetworkBackend
from .network.utils import format_host_header

logger = logging.getLogger(__name__)


class HTTPClient:
    """
    Client issuing one connection per request.

    Example:
        client = HTTPClient()
        response = await client.get("https://www.example.com/")
    """

    USER_AGENT = "http1_client/0.1.0"

    def __init__(
        self,
        backend: Optional[NetworkBackend] = None,
        diagnostic: Optional[DiagnosticHook] = None,
        connect_timeout: Optional[float] = None,
    ) -> None:
        self._factory = ConnectionFactory(backend, connect_timeout=connect_timeout)
        self._diagnostic = diagnostic

    async def request(self, request: Request) -> Response:
        """
        Send a request on a fresh connection.

        The connection is closed once the response is read, except after
        a protocol upgrade: the stream is then left open and available as
        response.extensions["network_stream"].
        """
        stream = await self._factory.connect(request)
        connection = HTTP11Connection(stream, diagnostic=self._diagnostic)
        try:
            return await connection.handle_request(request)
        finally:
            if connection.state is not ConnectionState.UPGRADED:
                await connection.aclose()

    def _default_headers(self, request_url: str, headers: Optional[HeaderInput]) -> Headers:
        url = Request.create("GET", request_url).url
        merged = Headers(
            [
                ("host", format_host_header(url.host, url.port, url.scheme)),
                ("user-agent", self.USER_AGENT),
            ]
        )
        if headers is not None:
            merged.update(Headers(headers))
        return merged

    async def get(self, url: str, headers: Optional[HeaderInput] = None) -> Response:
        """Send a GET request with Host and User-Agent filled in."""
        request = Request.create("GET", url, headers=self._default_headers(url, headers))
        return await self.request(request)

    async def post_json(
        self,
        url: str,
        payload: Any,
        headers: Optional[HeaderInput] = None,
    ) -> Any:
        """
        POST a JSON payload and decode the JSON response body.

        Raises:
            json.JSONDecodeError: If the response body is not JSON
        """
        body = json.dumps(payload).encode("utf-8")
        request_headers = self._default_headers(url, headers)
        request_headers["content-type"] = "application/json"
        request_headers["content-length"] = str(len(body))

        request = Request.create("POST", url, headers=request_headers, body=body)
        response = await self.request(request)
        logger.debug(f"POST {url} -> {response.status_code}")
        return response.json()
