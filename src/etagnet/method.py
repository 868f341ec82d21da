r"""HTTP methods supported by the request descriptors."""

from __future__ import annotations

__all__ = ["HttpMethod"]

from enum import Enum


class HttpMethod(str, Enum):
    r"""HTTP method of a request descriptor.

    The value of each member is the method token sent on the wire.

    Example:
        ```pycon
        >>> from etagnet.method import HttpMethod
        >>> HttpMethod.GET.value
        'GET'
        >>> HttpMethod("PATCH") is HttpMethod.PATCH
        True

        ```
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
