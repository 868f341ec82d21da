r"""Core logic shared by every call form of the request executor.

This package contains configuration, validation, request preparation and
outcome classification. None of it performs I/O.
"""

from __future__ import annotations

__all__ = [
    "ACCEPT_HEADER",
    "CACHE_BYPASS_HEADERS",
    "DEFAULT_MAX_WORKERS",
    "DEFAULT_TIMEOUT",
    "NOT_MODIFIED",
    "RETRY_WITHOUT_VALIDATOR",
    "SUCCESS_STATUS_RANGE",
    "PreparedRequest",
    "ServiceConfig",
    "build_headers",
    "classify_exception",
    "classify_response",
    "normalize_url",
    "prepare_request",
    "validate_max_workers",
    "validate_timeout",
]

from etagnet.core.config import (
    ACCEPT_HEADER,
    CACHE_BYPASS_HEADERS,
    DEFAULT_MAX_WORKERS,
    DEFAULT_TIMEOUT,
    NOT_MODIFIED,
    SUCCESS_STATUS_RANGE,
    ServiceConfig,
)
from etagnet.core.http_logic import (
    RETRY_WITHOUT_VALIDATOR,
    PreparedRequest,
    build_headers,
    classify_exception,
    classify_response,
    prepare_request,
)
from etagnet.core.validation import normalize_url, validate_max_workers, validate_timeout
