r"""Transport collaborator performing the actual HTTP exchange.

The request executor only knows the ``Transport`` protocol. The default
implementation, ``HttpxTransport``, sends each request through a fresh
``httpx.Client`` configured from the descriptor's transport delegate.
"""

from __future__ import annotations

__all__ = ["HttpxTransport", "Transport", "TransportDelegate"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

if TYPE_CHECKING:
    import ssl
    from collections.abc import Callable, Mapping

    from etagnet.core.http_logic import PreparedRequest

logger: logging.Logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    r"""Performs one HTTP exchange.

    Implementations return the complete response (body read) or raise
    an ``httpx.HTTPError`` for transport failures and
    ``RequestCancelledError`` for cancelled exchanges.
    """

    def send(self, prepared: PreparedRequest, timeout: float | httpx.Timeout) -> httpx.Response:
        r"""Send the prepared request.

        Args:
            prepared: The request to send, including the opaque delegate.
            timeout: The timeout of the exchange.

        Returns:
            The HTTP response.
        """
        ...


@dataclass(frozen=True)
class TransportDelegate:
    r"""Low-level hooks forwarded to ``httpx.Client``.

    Attach an instance to a request descriptor as ``transport_delegate``
    to customize TLS trust or authentication of that request.

    Args:
        verify: TLS verification: ``True``, ``False``, a CA bundle path or
            an ``ssl.SSLContext``.
        cert: Client certificate passed to httpx.
        auth: Authentication flow, e.g. ``httpx.BasicAuth`` or a custom
            ``httpx.Auth`` answering challenges.
        event_hooks: httpx event hooks (``{"request": [...], "response":
            [...]}``). A hook may raise ``RequestCancelledError`` to abort
            the exchange.

    Example:
        ```pycon
        >>> import httpx
        >>> from etagnet.request import Request
        >>> from etagnet.transport import TransportDelegate
        >>> request = Request(
        ...     "https://internal.example.com/status",
        ...     transport_delegate=TransportDelegate(auth=httpx.BasicAuth("user", "secret")),
        ... )

        ```
    """

    verify: ssl.SSLContext | str | bool = True
    cert: Any | None = None
    auth: httpx.Auth | None = None
    event_hooks: Mapping[str, list[Callable[..., Any]]] | None = None

    def client_kwargs(self) -> dict[str, Any]:
        r"""Return the keyword arguments for ``httpx.Client``."""
        kwargs: dict[str, Any] = {"verify": self.verify}
        if self.cert is not None:
            kwargs["cert"] = self.cert
        if self.auth is not None:
            kwargs["auth"] = self.auth
        if self.event_hooks is not None:
            kwargs["event_hooks"] = {name: list(hooks) for name, hooks in self.event_hooks.items()}
        return kwargs


class HttpxTransport:
    r"""Transport sending each request through its own ``httpx.Client``.

    A client is opened for each exchange and closed once the body has
    been read, so no connection state is shared between calls. Redirects
    are not followed.

    Args:
        transport: Optional httpx transport used by every client, e.g.
            ``httpx.MockTransport`` in tests or a proxy transport.

    Example:
        ```pycon
        >>> import httpx
        >>> from etagnet.core.http_logic import prepare_request
        >>> from etagnet.request import BareRequest
        >>> from etagnet.transport import HttpxTransport
        >>> transport = HttpxTransport(
        ...     transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"ok"))
        ... )
        >>> response = transport.send(prepare_request(BareRequest("https://example.com")), 5.0)
        >>> response.content
        b'ok'

        ```
    """

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(transport={self._transport!r})"

    def send(self, prepared: PreparedRequest, timeout: float | httpx.Timeout) -> httpx.Response:
        with httpx.Client(**self._client_kwargs(prepared.delegate, timeout)) as client:
            response = client.request(
                method=prepared.method,
                url=prepared.url,
                content=prepared.content,
                headers=prepared.headers,
            )
            response.read()
        return response

    def _client_kwargs(self, delegate: Any | None, timeout: float | httpx.Timeout) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"timeout": timeout, "follow_redirects": False}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        if isinstance(delegate, TransportDelegate):
            kwargs.update(delegate.client_kwargs())
        elif isinstance(delegate, httpx.Auth):
            kwargs["auth"] = delegate
        elif delegate is not None:
            logger.debug(f"{type(delegate).__name__} delegate is not supported by httpx, ignoring it")
        return kwargs
