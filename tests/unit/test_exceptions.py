from __future__ import annotations

import pytest

from etagnet import Failure, FailureKind, NetworkError, RequestCancelledError

##################################
#     Tests for NetworkError     #
##################################


def test_network_error_message() -> None:
    assert str(NetworkError(Failure.custom("boom"))) == "custom: boom"


def test_network_error_invalid_url() -> None:
    error = NetworkError(Failure.invalid_url())
    assert error.kind is FailureKind.INVALID_URL
    assert error.status_code is None
    assert error.raw_body is None


def test_network_error_is_raisable() -> None:
    with pytest.raises(NetworkError, match=r"no_data"):
        raise NetworkError(Failure.no_data())


###########################################
#     Tests for RequestCancelledError     #
###########################################


def test_request_cancelled_error_is_exception() -> None:
    assert issubclass(RequestCancelledError, Exception)
