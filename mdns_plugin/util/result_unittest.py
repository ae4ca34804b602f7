import asyncio
import logging

import pytest

from mdns_plugin.util.result import Failure, Success, capture_async


@pytest.mark.asyncio
async def test_capture_async_success():
    async def operation() -> int:
        return 42

    result = await capture_async(operation)

    assert result == Success(42)


@pytest.mark.asyncio
async def test_capture_async_failure():
    error = OSError("boom")

    async def operation() -> None:
        raise error

    result = await capture_async(operation)

    assert isinstance(result, Failure)
    assert result.error is error
    assert result.message == "boom"


@pytest.mark.asyncio
async def test_capture_async_does_not_capture_cancellation():
    async def operation() -> None:
        raise asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await capture_async(operation)


@pytest.mark.asyncio
async def test_capture_async_does_not_log(caplog):
    async def operation() -> None:
        raise RuntimeError("hidden failure")

    with caplog.at_level(logging.DEBUG):
        result = await capture_async(operation)

    assert isinstance(result, Failure)
    assert not any("hidden failure" in r.getMessage() for r in caplog.records)
