r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import etagnet


def test_package_version_is_string() -> None:
    assert isinstance(etagnet.__version__, str)


def test_package_version_format() -> None:
    assert "." in etagnet.__version__


def test_all_exports_defined() -> None:
    for name in etagnet.__all__:
        assert hasattr(etagnet, name), f"{name} is in __all__ but not defined in module"


def test_all_exports_sorted() -> None:
    assert etagnet.__all__ == sorted(etagnet.__all__)
