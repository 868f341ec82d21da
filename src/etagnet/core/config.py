r"""Configuration dataclass and protocol constants for NetworkService.

This module provides the fixed policy of the request executor (content
negotiation, cache bypass, status ranges) and a dataclass-based
configuration object for the tunable parts.
"""

from __future__ import annotations

__all__ = [
    "ACCEPT_HEADER",
    "CACHE_BYPASS_HEADERS",
    "DEFAULT_MAX_WORKERS",
    "DEFAULT_TIMEOUT",
    "NOT_MODIFIED",
    "SUCCESS_STATUS_RANGE",
    "ServiceConfig",
]

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from etagnet.core.validation import validate_max_workers, validate_timeout

if TYPE_CHECKING:
    import httpx


# Default timeout in seconds for one HTTP exchange
DEFAULT_TIMEOUT = 10.0

# Default number of worker threads serving the callback and awaitable forms
DEFAULT_MAX_WORKERS = 4

# Every request asks for JSON
ACCEPT_HEADER = "application/json; charset=utf-8"

# Conditional requests are handled by the executor, so intermediate and
# local HTTP caches must not answer on its behalf
CACHE_BYPASS_HEADERS = MappingProxyType({"Cache-Control": "no-cache", "Pragma": "no-cache"})

# 304: Not Modified - the validator still matches the server representation
NOT_MODIFIED = 304

# 2xx: the response body is the payload
SUCCESS_STATUS_RANGE = range(200, 300)


@dataclass
class ServiceConfig:
    """Configuration for NetworkService.

    Args:
        timeout: Maximum seconds to wait for one HTTP exchange, or an
            ``httpx.Timeout``. Must be > 0 if numeric. A timeout surfaces
            as a ``NO_DATA`` failure.
        max_workers: Number of worker threads used by ``submit`` and
            ``fire_async``. Must be > 0.

    Example:
        ```pycon
        >>> from etagnet.core.config import ServiceConfig
        >>> config = ServiceConfig()
        >>> config.timeout
        10.0
        >>> merged = config.merge(timeout=30.0)
        >>> merged.timeout
        30.0
        >>> config.timeout  # Original unchanged
        10.0

        ```
    """

    timeout: float | httpx.Timeout = DEFAULT_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_timeout(self.timeout)
        validate_max_workers(self.max_workers)

    def merge(self, **overrides: Any) -> ServiceConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ServiceConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration parameters.
        """
        return {"timeout": self.timeout, "max_workers": self.max_workers}
