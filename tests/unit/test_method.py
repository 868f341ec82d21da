from __future__ import annotations

import pytest

from etagnet import HttpMethod


@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "PATCH", "DELETE"])
def test_http_method_values(method: str) -> None:
    assert HttpMethod(method).value == method


def test_http_method_members() -> None:
    assert len(HttpMethod) == 5


def test_http_method_is_str() -> None:
    assert HttpMethod.POST == "POST"


def test_http_method_unknown() -> None:
    with pytest.raises(ValueError, match=r"HEAD"):
        HttpMethod("HEAD")
