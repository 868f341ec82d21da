r"""Exceptions raised by etagnet.

Request execution never raises: every failure is returned as a
``Failure`` value. ``NetworkError`` exists for callers that prefer the
exception form and call ``Outcome.unwrap()``.
"""

from __future__ import annotations

__all__ = ["NetworkError", "RequestCancelledError"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from etagnet.outcome import Failure, FailureKind


class NetworkError(Exception):
    r"""Exception wrapping a failed request outcome.

    Args:
        failure: The failure returned by the request executor.

    Example:
        ```pycon
        >>> from etagnet.exceptions import NetworkError
        >>> from etagnet.outcome import Failure
        >>> error = NetworkError(Failure.server_failure(404, b"missing"))
        >>> error.status_code
        404
        >>> error.raw_body
        b'missing'

        ```
    """

    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.describe())
        self.failure = failure

    @property
    def kind(self) -> FailureKind:
        return self.failure.kind

    @property
    def status_code(self) -> int | None:
        return self.failure.status_code

    @property
    def raw_body(self) -> bytes | None:
        return self.failure.raw_body


class RequestCancelledError(Exception):
    r"""Raised by a transport when an exchange was cancelled before it
    completed.

    The request executor resolves a cancelled exchange as a ``NO_DATA``
    failure.
    """
