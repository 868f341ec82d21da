from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from etagnet import HttpxTransport, NetworkService, ServiceConfig

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_transport() -> Mock:
    """Create a mock transport returning an empty 200 response."""
    return Mock(spec=HttpxTransport, send=Mock(return_value=httpx.Response(200, content=b"")))


@pytest.fixture
def service(mock_transport: Mock) -> Generator[NetworkService, None, None]:
    """Create a NetworkService sending through the mock transport."""
    with NetworkService(config=ServiceConfig(max_workers=2), transport=mock_transport) as service:
        yield service


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock completion function for testing the callback form."""
    return Mock()
