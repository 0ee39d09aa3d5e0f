"""
HTTP primitives for http1_client.

This module defines the core data structures for HTTP requests and responses.
Requests and responses are frozen dataclasses; the header collection attached
to a response is frozen once parsing finishes.
"""

import json
import re
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    Union,
)
from urllib.parse import urlparse

from .exceptions import UnsupportedFeature


HeaderInput = Union[
    "Headers",
    Mapping[Union[str, bytes], Union[str, bytes]],
    Iterable[Tuple[Union[str, bytes], Union[str, bytes]]],
]

_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _to_str(value: Union[str, bytes]) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    if isinstance(value, str):
        return value
    raise ValueError("header names and values must be str or bytes")


def is_token(value: str) -> bool:
    """Check whether value is a valid RFC 7230 token (method, header name)."""
    return bool(_TOKEN_RE.match(value))


def has_connection_option(value: Optional[str], option: str) -> bool:
    """Check whether a comma-separated Connection header value lists option."""
    if value is None:
        return False
    return option.lower() in (part.strip().lower() for part in value.split(","))


def validate_status_code(status_code: int) -> int:
    """
    Validate an HTTP status code.

    Raises:
        ValueError: If the code is outside 100..599
    """
    if not 100 <= status_code <= 599:
        raise ValueError(f"invalid status code: {status_code}")
    return status_code


class HTTPVersion(Enum):
    """HTTP protocol versions known to the client."""

    HTTP_10 = "HTTP/1.0"
    HTTP_11 = "HTTP/1.1"
    HTTP_2 = "HTTP/2.0"
    HTTP_3 = "HTTP/3.0"

    @classmethod
    def from_token(cls, token: str) -> Optional["HTTPVersion"]:
        """Map a version token to a member, or None if it is not recognised."""
        for member in cls:
            if member.value == token:
                return member
        return _VERSION_ALIASES.get(token)


_VERSION_ALIASES = {
    "HTTP/2": HTTPVersion.HTTP_2,
    "HTTP/3": HTTPVersion.HTTP_3,
}


class Headers(MutableMapping):
    """
    Case-insensitive header collection.

    Names are stored lowercased, iteration follows insertion order and
    inserting an existing name overwrites its value. Once frozen the
    collection refuses every mutation.
    """

    def __init__(self, headers: Optional[HeaderInput] = None) -> None:
        self._items: Dict[str, str] = {}
        self._frozen = False
        if headers is not None:
            self.update(headers)

    @classmethod
    def from_list(cls, headers: Optional[HeaderInput]) -> "Headers":
        if isinstance(headers, Headers):
            return headers
        return cls(headers)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise TypeError("headers are frozen")

    def __getitem__(self, name: Union[str, bytes]) -> str:
        return self._items[_to_str(name).lower()]

    def __setitem__(self, name: Union[str, bytes], value: Union[str, bytes]) -> None:
        self._check_mutable()
        self._items[_to_str(name).lower()] = _to_str(value)

    def __delitem__(self, name: Union[str, bytes]) -> None:
        self._check_mutable()
        del self._items[_to_str(name).lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, (str, bytes)):
            return False
        return _to_str(name).lower() in self._items

    def __repr__(self) -> str:
        return f"Headers({self.raw()!r})"

    def freeze(self) -> "Headers":
        """Make the collection read-only and return it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> "Headers":
        """Return a mutable copy."""
        return Headers(self.raw())

    def raw(self) -> List[Tuple[str, str]]:
        """Return the headers as a list of (name, value) pairs."""
        return list(self._items.items())


class URLComponents(NamedTuple):
    """Immutable representation of URL components."""
    scheme: str
    host: str
    port: Optional[int]
    path_and_query: str

    @classmethod
    def from_url(cls, url: str) -> "URLComponents":
        """Create URLComponents from a URL string."""
        parsed = urlparse(url)
        path = parsed.path or "/"
        if parsed.query:
            path += "?" + parsed.query

        return cls(
            scheme=parsed.scheme.lower(),
            host=parsed.hostname or "",
            port=parsed.port,
            path_and_query=path,
        )

    @property
    def authority(self) -> str:
        if self.port is None:
            return self.host
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class Request:
    """
    Immutable HTTP request representation.

    Once created, the request cannot be modified - any changes
    must create a new Request instance. The body is sent as a
    single buffer; None and b"" both mean "nothing to send".
    """

    method: str
    url: URLComponents
    version: Union[HTTPVersion, str] = HTTPVersion.HTTP_11
    headers: Headers = field(default_factory=Headers)
    body: Optional[bytes] = None

    def __post_init__(self) -> None:
        """Validate request data after initialization."""
        if not isinstance(self.method, str) or not is_token(self.method):
            raise ValueError("method must be a non-empty token string")

        if not isinstance(self.url, URLComponents):
            raise ValueError("url must be URLComponents")

        if not isinstance(self.headers, Headers):
            raise ValueError("headers must be Headers")

        if self.body is not None and not isinstance(self.body, bytes):
            raise ValueError("body must be bytes or None")

    @classmethod
    def create(
        cls,
        method: Union[str, bytes],
        url: Union[str, URLComponents, Tuple[str, str, Optional[int], str]],
        headers: Optional[HeaderInput] = None,
        body: Optional[Union[bytes, str]] = None,
        version: Union[HTTPVersion, str] = HTTPVersion.HTTP_11,
    ) -> "Request":
        """
        Create a Request with proper type conversion.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: URL string, URLComponents or equivalent 4-tuple
            headers: Optional header pairs, mapping or Headers
            body: Optional request body; str is encoded as UTF-8
            version: HTTPVersion or version token

        Returns:
            New Request instance
        """
        if isinstance(method, bytes):
            method = method.decode("ascii")

        if isinstance(url, str):
            url = URLComponents.from_url(url)
        elif isinstance(url, tuple) and not isinstance(url, URLComponents):
            url = URLComponents(*url)

        if isinstance(version, str):
            version = HTTPVersion.from_token(version) or version

        if isinstance(body, str):
            body = body.encode("utf-8")

        return cls(
            method=method,
            url=url,
            version=version,
            headers=Headers(headers),
            body=body,
        )

    def with_headers(self, headers: HeaderInput) -> "Request":
        """Create a new request with different headers."""
        return Request(
            method=self.method,
            url=self.url,
            version=self.version,
            headers=Headers(headers),
            body=self.body,
        )

    def with_body(self, body: Optional[bytes]) -> "Request":
        """Create a new request with a different body."""
        return Request(
            method=self.method,
            url=self.url,
            version=self.version,
            headers=self.headers,
            body=body,
        )

    def add_header(self, name: Union[str, bytes], value: Union[str, bytes]) -> "Request":
        """Add (or replace) a header on a copy of the request."""
        headers = self.headers.copy()
        headers[name] = value
        return self.with_headers(headers)

    @property
    def scheme(self) -> str:
        return self.url.scheme

    @property
    def host(self) -> str:
        return self.url.host

    @property
    def port(self) -> Optional[int]:
        return self.url.port

    @property
    def path(self) -> str:
        return self.url.path_and_query


@dataclass(frozen=True)
class Response:
    """
    Immutable HTTP response representation.

    The body has been read in full by the time a Response exists;
    its length was decided once by the body framing rules.
    """

    version: HTTPVersion
    status_code: int
    headers: Headers = field(default_factory=lambda: Headers().freeze())
    body: bytes = b""
    extensions: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate response data after initialization."""
        if not isinstance(self.version, HTTPVersion):
            raise ValueError("version must be HTTPVersion")

        if not isinstance(self.status_code, int):
            raise ValueError("status_code must be int")
        validate_status_code(self.status_code)

        if not isinstance(self.headers, Headers):
            raise ValueError("headers must be Headers")

        if not isinstance(self.body, bytes):
            raise ValueError("body must be bytes")

    def get_header(self, name: Union[str, bytes]) -> Optional[str]:
        """Get a header value by name (case-insensitive)."""
        return self.headers.get(name)

    def has_header(self, name: Union[str, bytes]) -> bool:
        """Check if a header exists (case-insensitive)."""
        return name in self.headers

    @property
    def is_upgrade(self) -> bool:
        return has_connection_option(self.headers.get("connection"), "upgrade")

    def decode_body(self) -> bytes:
        """
        Return the body with its content-coding removed.

        Raises:
            UnsupportedFeature: For any coding other than identity
        """
        encoding = self.headers.get("content-encoding")
        if encoding is None or encoding.strip().lower() in ("", "identity"):
            return self.body
        raise UnsupportedFeature(f"content-encoding {encoding!r} is not supported")

    def text(self, encoding: str = "utf-8") -> str:
        return self.decode_body().decode(encoding)

    def json(self) -> Any:
        return json.loads(self.text())
