"""retrykit - Retry fallible operations with exponential backoff and jitter.

Result-returning operations:
    >>> from retrykit import BackoffPolicy, Err, Ok, execute_with_retries
    >>>
    >>> def connect() -> Result[Connection, str]:
    ...     try:
    ...         return Ok(open_connection())
    ...     except OSError as e:
    ...         return Err(str(e))
    >>>
    >>> conn = execute_with_retries(connect, BackoffPolicy.default(), max_retries=3)

Raising callables:
    >>> from retrykit import retrying
    >>>
    >>> @retrying(max_retries=3)
    ... async def fetch(url: str) -> bytes:
    ...     ...

Configuration comes from RETRYKIT_* environment variables (see retrykit.config).
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import RetrykitSettings, get_settings
from .errors import Err, Ok, Result, try_call, try_call_async
from .observability import configure_logging, get_logger
from .retry import (
    BackoffPolicy,
    execute_with_retries,
    execute_with_retries_async,
    retry_call,
    retry_call_async,
    retrying,
)

__all__ = [
    "__version__",
    # Results
    "Result",
    "Ok",
    "Err",
    "try_call",
    "try_call_async",
    # Retry
    "BackoffPolicy",
    "execute_with_retries",
    "execute_with_retries_async",
    "retry_call",
    "retry_call_async",
    "retrying",
    # Ambient
    "RetrykitSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
