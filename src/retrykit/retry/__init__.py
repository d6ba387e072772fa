"""Retry with exponential backoff and jitter.

Example:
    >>> from retrykit.errors import Err, Ok
    >>> from retrykit.retry import BackoffPolicy, execute_with_retries
    >>>
    >>> def ping() -> Result[str, str]:
    ...     return Ok("pong") if service.up() else Err("unavailable")
    >>>
    >>> execute_with_retries(ping, BackoffPolicy.default(), max_retries=5)
"""

from .backoff import DEFAULT_GROWTH_FACTOR, DEFAULT_INITIAL_DELAY, DEFAULT_JITTER, BackoffPolicy
from .driver import (
    execute_with_retries,
    execute_with_retries_async,
    retry_call,
    retry_call_async,
    retrying,
)

__all__ = [
    # Pacing
    "BackoffPolicy",
    "DEFAULT_INITIAL_DELAY",
    "DEFAULT_GROWTH_FACTOR",
    "DEFAULT_JITTER",
    # Execution
    "execute_with_retries",
    "execute_with_retries_async",
    "retry_call",
    "retry_call_async",
    "retrying",
]
