r"""Request executor with conditional caching.

``NetworkService`` sends one request per call and returns an ``Outcome``.
It offers three call forms that share a single implementation:

- ``fire``: blocks until the outcome is known.
- ``submit``: runs ``fire`` on a worker thread and calls a completion
  function with the outcome.
- ``fire_async``: awaits the future returned by ``submit``.

A request with a validator is sent with ``If-None-Match``. When the
server answers 304 (Not Modified), the descriptor is asked for its cached
payload; if it has none, the request is sent once more without validator.
"""

from __future__ import annotations

__all__ = ["NetworkService", "fire", "fire_async", "get_default_service", "submit"]

import asyncio
import functools
import logging
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

from etagnet.core.config import ServiceConfig
from etagnet.core.http_logic import (
    RetryWithoutValidator,
    classify_exception,
    classify_response,
    prepare_request,
)
from etagnet.outcome import Failure, Outcome
from etagnet.request import BareRequest, NetworkRequest
from etagnet.transport import HttpxTransport, Transport
from etagnet.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType
    from typing import Self

logger: logging.Logger = logging.getLogger(__name__)


def _as_request(request: NetworkRequest | str) -> NetworkRequest:
    if isinstance(request, str):
        return BareRequest(request)
    return request


class NetworkService:
    r"""Executes request descriptors and classifies their outcome.

    The service holds no per-request state. Concurrent calls, including
    calls for the same URL, are independent.

    Args:
        config: Optional ServiceConfig. If ``None``, a default config is
            used.
        transport: Optional transport performing the HTTP exchange. If
            ``None``, an ``HttpxTransport`` is used.

    Example:
        ```pycon
        >>> from etagnet import NetworkService, Request, Success
        >>> with NetworkService() as service:  # doctest: +SKIP
        ...     outcome = service.fire(Request("https://api.example.com/items", validator='"v1"'))
        ...     if isinstance(outcome, Success):
        ...         print(outcome.payload)
        ...

        ```
    """

    def __init__(
        self,
        config: ServiceConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config: ServiceConfig = config or ServiceConfig()
        self._transport: Transport = transport or HttpxTransport()
        self._executor = ThreadPoolExecutor(
            max_workers=self._config.max_workers, thread_name_prefix="etagnet"
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self._config}, transport={self._transport!r})"

    @property
    def config(self) -> ServiceConfig:
        return self._config

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        r"""Shut down the worker pool after the pending calls finished."""
        self._executor.shutdown(wait=True)

    def fire(self, request: NetworkRequest | str, *, ignore_validator: bool = False) -> Outcome:
        r"""Send a request and return its outcome.

        Args:
            request: The request descriptor, or a URL for a bare GET.
            ignore_validator: If ``True``, the validator of the descriptor
                is not sent.

        Returns:
            ``Success`` with the payload, or a ``Failure``:
            ``INVALID_URL`` if the URL does not parse (nothing is sent),
            ``NO_DATA`` on transport errors and cancellation,
            ``SERVER_FAILURE`` for a status outside 2xx and 304,
            ``CUSTOM`` for any other error raised by the transport.
        """
        request = _as_request(request)
        log_structured(logger, logging.INFO, f"creating request at '{request.url}'", url=request.url)
        prepared = prepare_request(request, ignore_validator=ignore_validator)
        if isinstance(prepared, Failure):
            return prepared

        url = str(prepared.url)
        log_structured(
            logger,
            logging.INFO,
            f"starting {prepared.method} request at '{url}'",
            url=url,
            method=prepared.method,
            conditional="If-None-Match" in prepared.headers,
        )
        try:
            response = self._transport.send(prepared, self._config.timeout)
        except Exception as exc:  # noqa: BLE001
            return classify_exception(exc, url)

        outcome = classify_response(request, response, url, ignore_validator=ignore_validator)
        if isinstance(outcome, RetryWithoutValidator):
            return self.fire(request, ignore_validator=True)
        return outcome

    def submit(
        self,
        request: NetworkRequest | str,
        completion: Callable[[Outcome], None] | None = None,
        *,
        ignore_validator: bool = False,
    ) -> Future[Outcome]:
        r"""Send a request on a worker thread.

        Args:
            request: The request descriptor, or a URL for a bare GET.
            completion: Optional function called with the outcome, on the
                worker thread. If the future is cancelled before the
                request runs, it is called with a ``NO_DATA`` failure.
            ignore_validator: If ``True``, the validator is not sent.

        Returns:
            A future resolving to the outcome of ``fire``.
        """
        request = _as_request(request)
        future = self._executor.submit(self.fire, request, ignore_validator=ignore_validator)
        if completion is not None:
            future.add_done_callback(functools.partial(_complete, completion, request.url))
        return future

    async def fire_async(
        self, request: NetworkRequest | str, *, ignore_validator: bool = False
    ) -> Outcome:
        r"""Send a request without blocking the event loop.

        This awaits the future of ``submit``, so the outcome is the one
        ``fire`` would have returned. Cancelling the awaiting task cancels
        the future if the request has not started yet, and the task
        receives ``asyncio.CancelledError``.

        Args:
            request: The request descriptor, or a URL for a bare GET.
            ignore_validator: If ``True``, the validator is not sent.

        Returns:
            The outcome of the request.
        """
        return await asyncio.wrap_future(self.submit(request, ignore_validator=ignore_validator))


def _complete(completion: Callable[[Outcome], None], url: str, future: Future[Outcome]) -> None:
    if future.cancelled():
        completion(classify_exception(CancelledError(), url))
        return
    exc = future.exception()
    if exc is not None:
        completion(classify_exception(exc, url))
        return
    completion(future.result())


@functools.lru_cache(maxsize=1)
def get_default_service() -> NetworkService:
    r"""Return the process-wide service used by the module-level helpers.

    Returns:
        The default service.
    """
    return NetworkService()


def fire(request: NetworkRequest | str, *, ignore_validator: bool = False) -> Outcome:
    r"""Send a request with the default service.

    Example:
        ```pycon
        >>> from etagnet import fire
        >>> outcome = fire("http://api.example.com/data")  # doctest: +SKIP

        ```
    """
    return get_default_service().fire(request, ignore_validator=ignore_validator)


def submit(
    request: NetworkRequest | str,
    completion: Callable[[Outcome], None] | None = None,
    *,
    ignore_validator: bool = False,
) -> Future[Outcome]:
    r"""Send a request on a worker thread of the default service."""
    return get_default_service().submit(request, completion, ignore_validator=ignore_validator)


async def fire_async(request: NetworkRequest | str, *, ignore_validator: bool = False) -> Outcome:
    r"""Send a request with the default service without blocking the
    event loop."""
    return await get_default_service().fire_async(request, ignore_validator=ignore_validator)
