"""Retry driver: run a fallible operation until it succeeds or the budget runs out.

The first attempt is free. ``max_retries`` counts the *additional* attempts, so
a session that never succeeds makes ``max_retries + 1`` calls and sleeps
``max_retries`` times. Every failure is treated as retryable; intermediate
errors are dropped and only the last one is logged and handed back.

Two calling conventions are supported:
- Result-returning operations: ``execute_with_retries`` / ``execute_with_retries_async``
- Raising callables: ``retry_call`` / ``retry_call_async`` / ``@retrying``
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Awaitable, Callable, ParamSpec, TypeVar

from retrykit.config import get_settings
from retrykit.errors import Result, try_call, try_call_async

from .backoff import BackoffPolicy

logger = logging.getLogger("retrykit.retry")

P = ParamSpec("P")
T = TypeVar("T")
E = TypeVar("E")


def _resolve(policy: BackoffPolicy | None, max_retries: int | None) -> tuple[BackoffPolicy, int]:
    if policy is None:
        policy = BackoffPolicy.from_settings()
    if max_retries is None:
        max_retries = get_settings().retry.max_retries
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")
    return policy, max_retries


def _report_exhausted(max_retries: int, error: object) -> None:
    logger.error(
        "Operation failed after %d retries: %r", max_retries, error,
        extra={"max_retries": max_retries, "attempts": max_retries + 1},
    )


def execute_with_retries(
    operation: Callable[[], Result[T, E]],
    policy: BackoffPolicy | None = None,
    max_retries: int | None = None,
) -> Result[T, E]:
    """Execute operation, retrying failed attempts with backoff.

    Args:
        operation: Zero-argument callable returning Ok on success, Err on failure
        policy: Pacing for this session (default: built from RetrySettings)
        max_retries: Attempts allowed after the first (default: RetrySettings.max_retries)

    Returns:
        The first Ok, or the Err from the final attempt unchanged

    Raises:
        ValueError: If max_retries is negative

    Example:
        >>> from retrykit.errors import Err, Ok
        >>> flaky = iter([Err("busy"), Ok("done")])
        >>> execute_with_retries(lambda: next(flaky), BackoffPolicy(0.0, 2.0, 0.0), 3)
        Ok('done')
    """
    policy, max_retries = _resolve(policy, max_retries)

    result = operation()
    for _ in range(max_retries):
        if result._is_ok:
            return result
        policy.wait_and_advance()
        result = operation()

    if not result._is_ok:
        _report_exhausted(max_retries, result._value)
    return result


async def execute_with_retries_async(
    operation: Callable[[], Awaitable[Result[T, E]]],
    policy: BackoffPolicy | None = None,
    max_retries: int | None = None,
) -> Result[T, E]:
    """Async version of execute_with_retries.

    Waits suspend the current task instead of blocking the event loop. Attempts
    are still strictly sequential.
    """
    policy, max_retries = _resolve(policy, max_retries)

    result = await operation()
    for _ in range(max_retries):
        if result._is_ok:
            return result
        await policy.wait_and_advance_async()
        result = await operation()

    if not result._is_ok:
        _report_exhausted(max_retries, result._value)
    return result


def retry_call(
    fn: Callable[[], T],
    policy: BackoffPolicy | None = None,
    max_retries: int | None = None,
) -> T:
    """Call fn, retrying on any Exception. Re-raises the final exception unchanged.

    Raises:
        TypeError: If fn returns an awaitable; use retry_call_async for async work
    """
    def attempt() -> Result[T, Exception]:
        outcome = try_call(fn)
        if outcome._is_ok and inspect.isawaitable(outcome._value):
            if inspect.iscoroutine(outcome._value):
                outcome._value.close()
            raise TypeError(f"retry_call() got an awaitable from {fn!r}; use retry_call_async()")
        return outcome

    result = execute_with_retries(attempt, policy, max_retries)
    if result._is_ok:
        return result._value  # type: ignore[return-value]
    raise result._value  # type: ignore[misc]


async def retry_call_async(
    fn: Callable[[], Awaitable[T]],
    policy: BackoffPolicy | None = None,
    max_retries: int | None = None,
) -> T:
    """Async version of retry_call for coroutine functions."""
    result = await execute_with_retries_async(lambda: try_call_async(fn), policy, max_retries)
    if result._is_ok:
        return result._value  # type: ignore[return-value]
    raise result._value  # type: ignore[misc]


def _is_async_callable(func: object) -> bool:
    """Coroutine functions and objects whose __call__ is a coroutine function."""
    return inspect.iscoroutinefunction(func) or inspect.iscoroutinefunction(getattr(func, "__call__", None))


def retrying(
    max_retries: int | None = None,
    *,
    policy_factory: Callable[[], BackoffPolicy] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator retrying a sync or async function on any Exception.

    Each call gets a fresh policy from ``policy_factory`` (default:
    ``BackoffPolicy.from_settings``), so delays never carry over between calls.

    Example:
        >>> @retrying(max_retries=5)
        ... def fetch_quote(symbol: str) -> float:
        ...     return client.quote(symbol)
    """
    factory = policy_factory or BackoffPolicy.from_settings

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return retry_call(lambda: func(*args, **kwargs), factory(), max_retries)

        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await retry_call_async(lambda: func(*args, **kwargs), factory(), max_retries)  # type: ignore[arg-type,return-value]

        return async_wrapper if _is_async_callable(func) else wrapper  # type: ignore[return-value]

    return decorator
