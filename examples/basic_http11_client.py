"""
Basic HTTP/1.1 client example using http1_client.

This example demonstrates a plain GET over TLS, a JSON POST and
the lower-level exchange over an explicitly opened connection.
"""

import asyncio
import logging

from http1_client import ConnectionFactory, HTTPClient, Request, send_request
from http1_client.exceptions import HTTPCoreError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def simple_get_request():
    """Demonstrate a simple GET request."""
    logger.info("Making simple GET request...")

    client = HTTPClient(connect_timeout=10.0)
    response = await client.get("https://www.google.com/")

    logger.info(f"Response status: {response.status_code} ({response.version.value})")
    logger.info(f"Content-Type: {response.get_header('content-type')}")
    logger.info(f"Response body length: {len(response.body)} bytes")


async def post_json_request():
    """Demonstrate a POST request with a JSON body."""
    logger.info("Making POST request with JSON body...")

    client = HTTPClient(connect_timeout=10.0)
    result = await client.post_json("http://httpbin.org/post", {"message": "Hello, World!"})
    logger.info(f"Server saw: {result.get('json')}")


async def explicit_connection():
    """Demonstrate building the request and opening the connection by hand."""
    logger.info("Making request over an explicit connection...")

    request = Request.create(
        "GET",
        "http://httpbin.org/get",
        headers=[
            ("Host", "httpbin.org"),
            ("User-Agent", "http1_client/1.0"),
            ("Connection", "close"),
        ],
    )

    stream = await ConnectionFactory(connect_timeout=10.0).connect(request)
    try:
        response = await send_request(stream, request)
        logger.info(f"Response status: {response.status_code}")
        logger.info(f"Response headers: {response.headers.raw()}")
    finally:
        await stream.aclose()


async def main():
    """Run all examples."""
    for example in (simple_get_request, post_json_request, explicit_connection):
        try:
            await example()
        except HTTPCoreError as e:
            logger.error(f"{example.__name__} failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
