"""
🧪 test_retry.py: спільний примітив повторних спроб.
"""

import asyncio

import pytest

from songbot.shared.utils.retry import RetryExhaustedError, retry_async


class _Sleeper:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.mark.asyncio
async def test_retry_returns_first_success_without_sleeping():
    sleeper = _Sleeper()

    async def ok():
        return 42

    assert await retry_async(ok, attempts=3, delay=1.0, sleep=sleeper) == 42
    assert sleeper.calls == []


@pytest.mark.asyncio
async def test_retry_backoff_grows_by_factor():
    sleeper = _Sleeper()
    calls = {"n": 0}

    async def flaky():
        calls["n"] += 1
        if calls["n"] < 3:
            raise OSError("boom")
        return "done"

    result = await retry_async(flaky, attempts=3, delay=1.0, factor=2.0, retry_on=(OSError,), sleep=sleeper)

    assert result == "done"
    assert sleeper.calls == [1.0, 2.0]


@pytest.mark.asyncio
async def test_retry_exhausted_keeps_last_error():
    sleeper = _Sleeper()

    async def always_fails():
        raise OSError("disk")

    with pytest.raises(RetryExhaustedError) as info:
        await retry_async(always_fails, attempts=2, delay=0.5, retry_on=(OSError,), sleep=sleeper)

    assert info.value.attempts == 2
    assert isinstance(info.value.last_error, OSError)
    assert sleeper.calls == [0.5]


@pytest.mark.asyncio
async def test_retry_does_not_catch_unlisted_errors():
    async def wrong_type():
        raise KeyError("nope")

    with pytest.raises(KeyError):
        await retry_async(wrong_type, attempts=3, retry_on=(OSError,), sleep=_Sleeper())


@pytest.mark.asyncio
async def test_retry_propagates_cancellation():
    async def cancelled():
        raise asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await retry_async(cancelled, attempts=3, sleep=_Sleeper())
