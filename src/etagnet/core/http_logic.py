r"""Request preparation and outcome classification.

This module contains the decision logic of the request executor. It is
free of I/O so that every call form of ``NetworkService`` goes through
exactly the same rules: the executor only dispatches the prepared request
and acts on the classification.
"""

from __future__ import annotations

__all__ = [
    "RETRY_WITHOUT_VALIDATOR",
    "PreparedRequest",
    "RetryWithoutValidator",
    "build_headers",
    "classify_exception",
    "classify_response",
    "prepare_request",
]

import concurrent.futures
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from etagnet.core.config import (
    ACCEPT_HEADER,
    CACHE_BYPASS_HEADERS,
    NOT_MODIFIED,
    SUCCESS_STATUS_RANGE,
)
from etagnet.core.validation import normalize_url
from etagnet.exceptions import RequestCancelledError
from etagnet.outcome import Failure, Outcome, Success
from etagnet.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from etagnet.request import NetworkRequest

logger: logging.Logger = logging.getLogger(__name__)

_CANCELLATION_ERRORS = (
    RequestCancelledError,
    concurrent.futures.CancelledError,
)


class RetryWithoutValidator:
    r"""Marker returned by ``classify_response`` when a 304 response has
    no cached payload and the request must be sent again without
    validator."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "RETRY_WITHOUT_VALIDATOR"


RETRY_WITHOUT_VALIDATOR = RetryWithoutValidator()


@dataclass(frozen=True)
class PreparedRequest:
    r"""Transport-level request built from a descriptor.

    Attributes:
        method: The HTTP method token.
        url: The normalized URL.
        content: The request body.
        headers: The complete request headers.
        delegate: The descriptor's transport delegate, forwarded as is.
    """

    method: str
    url: httpx.URL
    content: bytes | None
    headers: httpx.Headers
    delegate: Any | None = None


def build_headers(request: NetworkRequest, ignore_validator: bool = False) -> httpx.Headers:
    r"""Build the headers of the outgoing request.

    The descriptor's extra headers come first, then the cache bypass
    directives, then ``If-None-Match`` when a validator is present and not
    ignored, and finally the ``Accept`` header, which always wins. Header
    names are compared case-insensitively, so a later header replaces an
    earlier one whatever its casing.

    Args:
        request: The request descriptor.
        ignore_validator: If ``True``, the validator is not sent.

    Returns:
        The request headers.

    Example:
        ```pycon
        >>> from etagnet.core.http_logic import build_headers
        >>> from etagnet.request import Request
        >>> headers = build_headers(Request("https://example.com", validator='"v1"'))
        >>> headers["If-None-Match"]
        '"v1"'
        >>> headers["Accept"]
        'application/json; charset=utf-8'
        >>> "If-None-Match" in build_headers(
        ...     Request("https://example.com", validator='"v1"'), ignore_validator=True
        ... )
        False

        ```
    """
    headers = httpx.Headers(request.extra_headers)
    headers.update(CACHE_BYPASS_HEADERS)
    if not ignore_validator and request.validator is not None:
        headers["If-None-Match"] = request.validator
    headers["Accept"] = ACCEPT_HEADER
    return headers


def prepare_request(
    request: NetworkRequest, ignore_validator: bool = False
) -> PreparedRequest | Failure:
    r"""Normalize the URL of a descriptor and build the transport request.

    Args:
        request: The request descriptor.
        ignore_validator: If ``True``, the validator is not sent.

    Returns:
        The prepared request, or an ``INVALID_URL`` failure if the URL
        does not parse after scheme normalization.
    """
    url = normalize_url(request.url)
    if url is None:
        log_structured(
            logger,
            logging.ERROR,
            f"failed to create request for '{request.url}': invalid URL",
            url=request.url,
        )
        return Failure.invalid_url()
    return PreparedRequest(
        method=request.method.value,
        url=url,
        content=request.body,
        headers=build_headers(request, ignore_validator=ignore_validator),
        delegate=request.transport_delegate,
    )


def classify_exception(exc: BaseException, url: str) -> Failure:
    r"""Map an exception raised by the transport to a failure.

    Cancellation and transport errors, including timeouts, both become
    ``NO_DATA``. Any other exception becomes ``CUSTOM``.

    Args:
        exc: The exception raised by the transport.
        url: The request URL, used in log messages.

    Returns:
        The failure.

    Raises:
        BaseException: ``exc`` itself if it is not an ``Exception``, for
            instance ``KeyboardInterrupt``.
    """
    if isinstance(exc, _CANCELLATION_ERRORS):
        log_structured(
            logger,
            logging.INFO,
            f"cancelled request at '{url}': {exc!r}",
            url=url,
        )
        return Failure.no_data(message="cancelled")
    if isinstance(exc, httpx.RequestError):
        log_structured(
            logger,
            logging.ERROR,
            f"failed request at '{url}' with {type(exc).__name__}: {exc}",
            url=url,
        )
        return Failure.no_data(message=str(exc) or type(exc).__name__)
    if isinstance(exc, Exception):
        log_structured(
            logger,
            logging.ERROR,
            f"unexpected transport error at '{url}' with {type(exc).__name__}: {exc}",
            url=url,
        )
        return Failure.custom(str(exc) or type(exc).__name__)
    raise exc


def classify_response(
    request: NetworkRequest,
    response: Any,
    url: str,
    ignore_validator: bool = False,
) -> Outcome | RetryWithoutValidator:
    r"""Classify the response of one HTTP exchange.

    Args:
        request: The request descriptor, consulted for the cached payload
            on a 304 response.
        response: What the transport returned.
        url: The request URL, used in log messages.
        ignore_validator: Whether the exchange was sent without validator.

    Returns:
        ``Success`` with the response bytes for a 2xx status.
        ``Success`` with the cached payload for a 304 status when the
        descriptor provides one. ``RETRY_WITHOUT_VALIDATOR`` for a 304
        status without cached payload, unless the exchange was already
        sent without validator. ``SERVER_FAILURE`` for any other status.
        ``NO_DATA`` if the transport did not return an HTTP response.
    """
    if not isinstance(response, httpx.Response):
        log_structured(logger, logging.ERROR, f"failed request at '{url}' with no data", url=url)
        return Failure.no_data(message="no HTTP response")

    status_code = response.status_code
    raw_body = response.content
    if status_code in SUCCESS_STATUS_RANGE:
        log_structured(
            logger,
            logging.INFO,
            f"successfully finished request at '{url}'",
            url=url,
            status_code=status_code,
        )
        return Success(raw_body)

    if status_code == NOT_MODIFIED:
        cached = request.cached_payload_for(response, raw_body)
        if cached is not None:
            log_structured(
                logger,
                logging.INFO,
                f"sending cached data for request at '{url}'",
                url=url,
                status_code=status_code,
            )
            return Success(cached)
        if not ignore_validator:
            log_structured(
                logger,
                logging.INFO,
                f"no cached data for request at '{url}', retrying without validator",
                url=url,
                status_code=status_code,
            )
            return RETRY_WITHOUT_VALIDATOR

    log_structured(
        logger,
        logging.ERROR,
        f"request at '{url}' returned code {status_code}",
        url=url,
        status_code=status_code,
    )
    return Failure.server_failure(status_code, raw_body)
