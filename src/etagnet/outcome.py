r"""Closed result type of one request execution.

An ``Outcome`` is either a ``Success`` wrapping the payload bytes or a
``Failure`` carrying a ``FailureKind`` and the details of that kind.

Example:
    ```pycon
    >>> from etagnet.outcome import Failure, Success
    >>> def describe(outcome):
    ...     match outcome:
    ...         case Success(payload=payload):
    ...             return f"got {len(payload)} bytes"
    ...         case Failure(kind=kind):
    ...             return f"failed with {kind.value}"
    ...
    >>> describe(Success(b"{}"))
    'got 2 bytes'
    >>> describe(Failure.no_data())
    'failed with no_data'

    ```
"""

from __future__ import annotations

__all__ = ["Failure", "FailureKind", "Outcome", "Success"]

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from etagnet.exceptions import NetworkError


class FailureKind(str, Enum):
    r"""Classification of a failed request.

    - ``INVALID_URL``: the URL does not parse after scheme normalization.
      Nothing was sent.
    - ``NO_DATA``: the transport failed, was cancelled, or did not
      produce an HTTP response.
    - ``SERVER_FAILURE``: the server answered with a status outside the
      success range. The status code and raw body are attached.
    - ``CUSTOM``: an unclassified transport exception. Its message is
      attached.
    """

    INVALID_URL = "invalid_url"
    NO_DATA = "no_data"
    SERVER_FAILURE = "server_failure"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Success:
    r"""Successful outcome.

    Args:
        payload: The response bytes, or the cached payload returned by
            the request descriptor on a 304 response.
    """

    payload: bytes

    @property
    def is_success(self) -> Literal[True]:
        return True

    def unwrap(self) -> bytes:
        r"""Return the payload.

        Returns:
            The payload bytes.
        """
        return self.payload


@dataclass(frozen=True)
class Failure:
    r"""Failed outcome.

    Use the named constructors rather than building instances by hand.

    Args:
        kind: The failure classification.
        status_code: The HTTP status code, set for ``SERVER_FAILURE``.
        raw_body: The raw response bytes, set for ``SERVER_FAILURE``.
        message: A human readable detail, set for ``CUSTOM`` and
            optionally for ``NO_DATA``.
    """

    kind: FailureKind
    status_code: int | None = None
    raw_body: bytes | None = None
    message: str | None = None

    @classmethod
    def invalid_url(cls) -> Failure:
        return cls(kind=FailureKind.INVALID_URL)

    @classmethod
    def no_data(cls, message: str | None = None) -> Failure:
        return cls(kind=FailureKind.NO_DATA, message=message)

    @classmethod
    def server_failure(cls, status_code: int, raw_body: bytes) -> Failure:
        return cls(kind=FailureKind.SERVER_FAILURE, status_code=status_code, raw_body=raw_body)

    @classmethod
    def custom(cls, message: str) -> Failure:
        return cls(kind=FailureKind.CUSTOM, message=message)

    @property
    def is_success(self) -> Literal[False]:
        return False

    def describe(self) -> str:
        r"""Return a one-line description of the failure.

        Example:
            ```pycon
            >>> from etagnet.outcome import Failure
            >>> Failure.server_failure(503, b"").describe()
            'server_failure (HTTP 503)'
            >>> Failure.custom("boom").describe()
            'custom: boom'

            ```
        """
        if self.kind is FailureKind.SERVER_FAILURE:
            return f"{self.kind.value} (HTTP {self.status_code})"
        if self.message:
            return f"{self.kind.value}: {self.message}"
        return self.kind.value

    def unwrap(self) -> bytes:
        r"""Raise the failure as an exception.

        Raises:
            NetworkError: Always.
        """
        raise NetworkError(self)


Outcome = Success | Failure
