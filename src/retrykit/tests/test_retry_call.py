"""Tests for exception-based entry points: retry_call, retry_call_async, @retrying."""

from __future__ import annotations

import logging

import pytest

from retrykit.retry import BackoffPolicy, retry_call, retry_call_async, retrying

from .support import AsyncSleepRecorder, SleepRecorder


class Flaky:
    """Raises ConnectionError for the first `failures` calls, then returns a value."""

    def __init__(self, failures: int, value: str = "payload") -> None:
        self.failures = failures
        self.value = value
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError(f"attempt {self.calls} refused")
        return self.value


def _policy() -> BackoffPolicy:
    return BackoffPolicy(0.0, 2.0, 0.0, sleep=SleepRecorder(), async_sleep=AsyncSleepRecorder())


def test_retry_call_returns_value_after_failures() -> None:
    fn = Flaky(failures=2)

    assert retry_call(fn, _policy(), max_retries=3) == "payload"
    assert fn.calls == 3


def test_retry_call_reraises_last_exception_unchanged(caplog: pytest.LogCaptureFixture) -> None:
    fn = Flaky(failures=10)

    with pytest.raises(ConnectionError, match="attempt 3 refused") as exc_info:
        retry_call(fn, _policy(), max_retries=2)

    assert fn.calls == 3
    assert isinstance(exc_info.value, ConnectionError)
    (record,) = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert "failed after 2 retries" in record.getMessage()
    assert "attempt 3 refused" in record.getMessage()


def test_retry_call_does_not_capture_base_exceptions() -> None:
    calls = []

    def interrupted() -> None:
        calls.append(1)
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        retry_call(interrupted, _policy(), max_retries=5)
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_retry_call_async_retries_coroutines() -> None:
    fn = Flaky(failures=1)

    async def fetch() -> str:
        return fn()

    assert await retry_call_async(fetch, _policy(), max_retries=1) == "payload"
    assert fn.calls == 2


@pytest.mark.asyncio
async def test_retry_call_async_reraises() -> None:
    async def broken() -> None:
        raise TimeoutError("slow")

    with pytest.raises(TimeoutError, match="slow"):
        await retry_call_async(broken, _policy(), max_retries=2)


def test_retrying_decorator_sync_passes_arguments() -> None:
    fn = Flaky(failures=2)

    @retrying(max_retries=3, policy_factory=_policy)
    def lookup(key: str, *, suffix: str = "") -> str:
        return f"{key}:{fn()}{suffix}"

    assert lookup("user", suffix="!") == "user:payload!"
    assert lookup.__name__ == "lookup"


def test_retrying_builds_fresh_policy_per_call() -> None:
    made: list[BackoffPolicy] = []

    def factory() -> BackoffPolicy:
        made.append(p := BackoffPolicy(1.0, 2.0, 0.0, sleep=SleepRecorder()))
        return p

    @retrying(max_retries=1, policy_factory=factory)
    def always_fails() -> None:
        raise RuntimeError("down")

    for _ in range(2):
        with pytest.raises(RuntimeError):
            always_fails()

    assert len(made) == 2
    assert made[0] is not made[1]
    assert made[0].current_delay == made[1].current_delay == 2.0


@pytest.mark.asyncio
async def test_retrying_decorator_async() -> None:
    fn = Flaky(failures=3)

    @retrying(max_retries=3, policy_factory=_policy)
    async def download(path: str) -> str:
        return f"{path}={fn()}"

    assert await download("/a") == "/a=payload"
    assert fn.calls == 4


class AsyncClient:
    """Callable object with an async __call__ that always refuses."""

    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        raise ConnectionError("refused")


@pytest.mark.asyncio
async def test_retrying_wraps_async_callable_objects() -> None:
    client = AsyncClient()
    fetch = retrying(max_retries=3, policy_factory=_policy)(client)

    with pytest.raises(ConnectionError, match="refused"):
        await fetch()

    assert client.calls == 4


def test_retry_call_rejects_awaitable_results() -> None:
    client = AsyncClient()

    with pytest.raises(TypeError, match="retry_call_async"):
        retry_call(client, _policy(), max_retries=3)


def test_retrying_exhaustion_reraises() -> None:
    @retrying(max_retries=0, policy_factory=_policy)
    def once() -> None:
        raise LookupError("missing")

    with pytest.raises(LookupError, match="missing"):
        once()
