r"""Request descriptors.

A request descriptor is any object that has the shape of
``NetworkRequest``. Two ready-made implementations are provided:
``BareRequest`` for a plain GET and ``Request`` for everything else.

Example:
    ```pycon
    >>> from etagnet.method import HttpMethod
    >>> from etagnet.request import BareRequest, NetworkRequest, Request
    >>> isinstance(BareRequest("https://api.example.com/items"), NetworkRequest)
    True
    >>> request = Request(
    ...     "https://api.example.com/items",
    ...     method=HttpMethod.POST,
    ...     body=b'{"name": "x"}',
    ...     extra_headers={"Content-Type": "application/json"},
    ... )
    >>> request.method
    <HttpMethod.POST: 'POST'>

    ```
"""

from __future__ import annotations

__all__ = ["BareRequest", "CacheLookup", "NetworkRequest", "Request"]

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

from etagnet.method import HttpMethod

CacheLookup = Callable[[httpx.Response, bytes], "bytes | None"]


@runtime_checkable
class NetworkRequest(Protocol):
    r"""Structural contract of a request descriptor.

    Attributes:
        url: The target URL. A leading ``http://`` is upgraded to
            ``https://`` before the request is sent.
        method: The HTTP method.
        body: The request body, or ``None`` for read-only calls.
        validator: A cache validator (entity tag) from a previous
            response. When set, it is sent as ``If-None-Match``.
        extra_headers: Additional request headers.
        transport_delegate: An opaque object forwarded to the transport
            (TLS trust, authentication). The executor never inspects it.
    """

    @property
    def url(self) -> str: ...

    @property
    def method(self) -> HttpMethod: ...

    @property
    def body(self) -> bytes | None: ...

    @property
    def validator(self) -> str | None: ...

    @property
    def extra_headers(self) -> Mapping[str, str] | None: ...

    @property
    def transport_delegate(self) -> Any | None: ...

    def cached_payload_for(self, response: httpx.Response, raw_body: bytes) -> bytes | None:
        r"""Return the payload cached for the validator of this request.

        Only called when the server answers 304 (Not Modified). It may be
        called again for every request built from the same descriptor, so
        it must not have side effects.

        Args:
            response: The 304 response.
            raw_body: The raw bytes of the 304 response, usually empty.

        Returns:
            The cached payload, or ``None`` if it is not available. In the
            latter case the request is sent again without validator.
        """
        ...


@dataclass(frozen=True)
class BareRequest:
    r"""Plain GET request without body, validator or cache lookup.

    Args:
        url: The target URL.
    """

    url: str

    @property
    def method(self) -> HttpMethod:
        return HttpMethod.GET

    @property
    def body(self) -> bytes | None:
        return None

    @property
    def validator(self) -> str | None:
        return None

    @property
    def extra_headers(self) -> Mapping[str, str] | None:
        return None

    @property
    def transport_delegate(self) -> Any | None:
        return None

    def cached_payload_for(self, response: httpx.Response, raw_body: bytes) -> bytes | None:  # noqa: ARG002
        return None


@dataclass(frozen=True)
class Request:
    r"""General purpose request descriptor.

    Args:
        url: The target URL.
        method: The HTTP method.
        body: The request body.
        validator: The cache validator sent as ``If-None-Match``.
        extra_headers: Additional request headers.
        transport_delegate: Opaque object forwarded to the transport.
        cache_lookup: Optional function returning the cached payload on a
            304 response. Without it a 304 always triggers a request
            without validator.

    Example:
        ```pycon
        >>> from etagnet.request import Request
        >>> cache = {'"v1"': b'{"a": 1}'}
        >>> request = Request(
        ...     "https://api.example.com/a",
        ...     validator='"v1"',
        ...     cache_lookup=lambda response, raw_body: cache.get('"v1"'),
        ... )
        >>> request.cached_payload_for(None, b"")
        b'{"a": 1}'

        ```
    """

    url: str
    method: HttpMethod = HttpMethod.GET
    body: bytes | None = None
    validator: str | None = None
    extra_headers: Mapping[str, str] | None = None
    transport_delegate: Any | None = None
    cache_lookup: CacheLookup | None = None

    def cached_payload_for(self, response: httpx.Response, raw_body: bytes) -> bytes | None:
        if self.cache_lookup is None:
            return None
        return self.cache_lookup(response, raw_body)
