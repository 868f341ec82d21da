r"""Utility helpers shared across etagnet."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "configure_structured_logging",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

from etagnet.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    configure_structured_logging,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
