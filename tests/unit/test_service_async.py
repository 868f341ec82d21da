r"""Unit tests for the awaitable form of NetworkService."""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future
from unittest.mock import Mock, patch

import httpx
import pytest

from etagnet import (
    Failure,
    FailureKind,
    NetworkService,
    Request,
    RequestCancelledError,
    ServiceConfig,
    Success,
    fire_async,
)

TEST_URL = "https://api.example.com/data"


###############################################
#     Tests for NetworkService.fire_async     #
###############################################


@pytest.mark.asyncio
async def test_fire_async_success(service: NetworkService, mock_transport: Mock) -> None:
    mock_transport.send.return_value = httpx.Response(200, content=b'{"a":1}')

    outcome = await service.fire_async("http://api.example.com/x")

    assert outcome == Success(b'{"a":1}')
    assert str(mock_transport.send.call_args.args[0].url) == "https://api.example.com/x"


@pytest.mark.asyncio
async def test_fire_async_invalid_url(service: NetworkService, mock_transport: Mock) -> None:
    assert await service.fire_async("") == Failure.invalid_url()
    mock_transport.send.assert_not_called()


@pytest.mark.asyncio
async def test_fire_async_server_failure(service: NetworkService, mock_transport: Mock) -> None:
    mock_transport.send.return_value = httpx.Response(502, content=b"bad gateway")
    assert await service.fire_async(TEST_URL) == Failure.server_failure(502, b"bad gateway")


@pytest.mark.asyncio
async def test_fire_async_not_modified_retry(
    service: NetworkService, mock_transport: Mock
) -> None:
    mock_transport.send.side_effect = [
        httpx.Response(304),
        httpx.Response(200, content=b'{"b":2}'),
    ]
    request = Request(TEST_URL, validator="etag-1", cache_lookup=Mock(return_value=None))

    assert await service.fire_async(request) == Success(b'{"b":2}')
    assert mock_transport.send.call_count == 2
    assert "If-None-Match" not in mock_transport.send.call_args_list[1].args[0].headers


@pytest.mark.asyncio
async def test_fire_async_not_modified_cached(
    service: NetworkService, mock_transport: Mock
) -> None:
    mock_transport.send.return_value = httpx.Response(304)
    request = Request(TEST_URL, validator="etag-1", cache_lookup=Mock(return_value=b"cached"))
    assert await service.fire_async(request) == Success(b"cached")
    mock_transport.send.assert_called_once()


@pytest.mark.asyncio
async def test_fire_async_ignore_validator(service: NetworkService, mock_transport: Mock) -> None:
    await service.fire_async(Request(TEST_URL, validator="etag-1"), ignore_validator=True)
    assert "If-None-Match" not in mock_transport.send.call_args.args[0].headers


@pytest.mark.asyncio
async def test_fire_async_transport_cancelled(
    service: NetworkService, mock_transport: Mock
) -> None:
    mock_transport.send.side_effect = RequestCancelledError()
    outcome = await service.fire_async(Request(TEST_URL, validator="etag-1"))
    assert outcome.kind is FailureKind.NO_DATA


@pytest.mark.asyncio
async def test_fire_async_timeout(service: NetworkService, mock_transport: Mock) -> None:
    mock_transport.send.side_effect = httpx.ReadTimeout("timed out")
    assert (await service.fire_async(TEST_URL)).kind is FailureKind.NO_DATA


@pytest.mark.asyncio
async def test_fire_async_matches_fire(service: NetworkService, mock_transport: Mock) -> None:
    mock_transport.send.return_value = httpx.Response(418, content=b"teapot")
    assert await service.fire_async(TEST_URL) == service.fire(TEST_URL)


@pytest.mark.asyncio
async def test_fire_async_concurrent_calls(service: NetworkService, mock_transport: Mock) -> None:
    mock_transport.send.side_effect = lambda prepared, timeout: httpx.Response(
        200, content=str(prepared.url).encode()
    )
    urls = [f"{TEST_URL}/{index}" for index in range(5)]

    outcomes = await asyncio.gather(*(service.fire_async(url) for url in urls))

    assert outcomes == [Success(url.encode()) for url in urls]


@pytest.mark.asyncio
async def test_fire_async_does_not_block_event_loop(mock_transport: Mock) -> None:
    release = threading.Event()

    def send(prepared: object, timeout: float) -> httpx.Response:
        release.wait(timeout=5)
        return httpx.Response(200, content=b"late")

    mock_transport.send.side_effect = send
    with NetworkService(config=ServiceConfig(max_workers=1), transport=mock_transport) as service:
        task = asyncio.create_task(service.fire_async(TEST_URL))
        await asyncio.sleep(0)
        assert not task.done()
        release.set()
        assert await task == Success(b"late")


@pytest.mark.asyncio
async def test_fire_async_task_cancellation_propagates(mock_transport: Mock) -> None:
    release = threading.Event()

    def send(prepared: object, timeout: float) -> httpx.Response:
        release.wait(timeout=5)
        return httpx.Response(200)

    mock_transport.send.side_effect = send
    with NetworkService(config=ServiceConfig(max_workers=1), transport=mock_transport) as service:
        task = asyncio.create_task(service.fire_async(TEST_URL))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        release.set()


@pytest.mark.asyncio
async def test_module_fire_async_uses_default_service() -> None:
    future: Future[Success] = Future()
    future.set_result(Success(b"x"))
    with patch.object(NetworkService, "submit", return_value=future) as mock_submit:
        assert await fire_async(TEST_URL) == Success(b"x")
    mock_submit.assert_called_once_with(TEST_URL, ignore_validator=False)
