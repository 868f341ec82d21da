r"""etagnet - Single-shot HTTP requests with conditional caching.

This package sends one HTTP request per call and returns a typed outcome
instead of raising. Requests may carry an entity tag: it is sent as
``If-None-Match`` and, when the server answers 304 (Not Modified), the
request descriptor supplies the cached payload. If it cannot, the request
is transparently sent once more without the entity tag.

Key Features:
    - Structural request descriptors (``NetworkRequest`` protocol) with
      ready-made ``BareRequest`` and ``Request`` implementations
    - ``Success | Failure`` outcomes with a closed set of failure kinds
    - Automatic ``http://`` to ``https://`` upgrade
    - Blocking, callback and awaitable call forms sharing one implementation
    - Opaque transport delegates for TLS trust and authentication
    - Structured (JSON) logging of every request event

Example:
    ```pycon
    >>> from etagnet import Failure, Request, Success, fire
    >>> outcome = fire(Request("https://api.example.com/data", validator='"v1"'))  # doctest: +SKIP
    >>> match outcome:  # doctest: +SKIP
    ...     case Success(payload=payload):
    ...         print(payload)
    ...     case Failure(kind=kind):
    ...         print(kind)
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "BareRequest",
    "Failure",
    "FailureKind",
    "HttpMethod",
    "HttpxTransport",
    "NetworkError",
    "NetworkRequest",
    "NetworkService",
    "Outcome",
    "Request",
    "RequestCancelledError",
    "ServiceConfig",
    "Success",
    "Transport",
    "TransportDelegate",
    "__version__",
    "fire",
    "fire_async",
    "submit",
]

from importlib.metadata import PackageNotFoundError, version

from etagnet.core.config import ServiceConfig
from etagnet.exceptions import NetworkError, RequestCancelledError
from etagnet.method import HttpMethod
from etagnet.outcome import Failure, FailureKind, Outcome, Success
from etagnet.request import BareRequest, NetworkRequest, Request
from etagnet.service import NetworkService, fire, fire_async, submit
from etagnet.transport import HttpxTransport, Transport, TransportDelegate

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
