r"""Validation utilities for service configuration and request URLs."""

from __future__ import annotations

__all__ = ["normalize_url", "validate_max_workers", "validate_timeout"]

import logging
import re

import httpx

logger: logging.Logger = logging.getLogger(__name__)

_INSECURE_SCHEME = re.compile(r"^http://", flags=re.IGNORECASE)


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from etagnet.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_max_workers(max_workers: int) -> None:
    """Validate the size of the worker pool used by the callback form.

    Args:
        max_workers: Number of worker threads. Must be > 0.

    Raises:
        ValueError: If max_workers is <= 0.
    """
    if max_workers <= 0:
        msg = f"max_workers must be > 0, got {max_workers}"
        raise ValueError(msg)


def normalize_url(url: str) -> httpx.URL | None:
    """Upgrade the scheme of a URL to HTTPS and parse it.

    Only a leading ``http://`` is rewritten. The rest of the URL is kept
    as is, so case-sensitive paths and query strings are preserved.

    Args:
        url: The URL given by the request descriptor.

    Returns:
        The parsed URL, or ``None`` if the URL is empty, does not parse,
        or has no host or an unsupported scheme.

    Example:
        ```pycon
        >>> from etagnet.core.validation import normalize_url
        >>> str(normalize_url("http://api.example.com/Items?Page=2"))
        'https://api.example.com/Items?Page=2'
        >>> normalize_url("") is None
        True
        >>> normalize_url("not a url") is None
        True

        ```
    """
    if not url:
        return None
    candidate = _INSECURE_SCHEME.sub("https://", url, count=1)
    try:
        parsed = httpx.URL(candidate)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        logger.debug(f"'{url}' does not parse as a URL: {exc}")
        return None
    if parsed.scheme not in ("http", "https") or not parsed.host:
        return None
    return parsed
