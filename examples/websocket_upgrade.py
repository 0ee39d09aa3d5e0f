"""
WebSocket handshake example using http1_client.

The client sends the upgrade request; on a 101 response the body is
empty and the still-open stream is returned in the response extensions
for the WebSocket protocol to take over.
"""

import asyncio
import base64
import logging
import os

from http1_client import HTTPClient, Request

# Debug logging shows every step of the exchange
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)


async def main():
    key = base64.b64encode(os.urandom(16)).decode("ascii")
    request = Request.create(
        "GET",
        "wss://ws.postman-echo.com/raw",
        headers=[
            ("Host", "ws.postman-echo.com"),
            ("User-Agent", "http1_client/1.0"),
            ("Connection", "upgrade"),
            ("Upgrade", "websocket"),
            ("Sec-WebSocket-Version", "13"),
            ("Sec-WebSocket-Key", key),
        ],
    )

    response = await HTTPClient(connect_timeout=10.0).request(request)
    logger.info(f"Handshake status: {response.status_code}")

    stream = response.extensions.get("network_stream")
    if stream is None:
        logger.info("Server did not switch protocols")
        return

    logger.info(f"Accept key: {response.get_header('sec-websocket-accept')}")
    logger.info(f"Bytes already received: {len(response.extensions['buffered_data'])}")
    await stream.aclose()


if __name__ == "__main__":
    asyncio.run(main())
