"""Mutable backoff pacing for a single retry session.

A BackoffPolicy owns the delay used between attempts. Every wait sleeps for
the current delay and then grows it:

    next = current * growth_factor + U[0, jitter)

The jitter term keeps independent callers from retrying in lockstep. A policy
is created per session and thrown away afterwards; it is never shared.
"""

from __future__ import annotations

import asyncio
import random
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable

if TYPE_CHECKING:
    from retrykit.config import RetrySettings

DEFAULT_INITIAL_DELAY: float = 1.0
DEFAULT_GROWTH_FACTOR: float = 1.2
DEFAULT_JITTER: float = 0.8


@dataclass(slots=True)
class BackoffPolicy:
    """Exponential backoff with additive jitter.

    Attributes:
        current_delay: Seconds the next wait will sleep
        growth_factor: Multiplier applied after each wait (not validated)
        jitter: Exclusive upper bound, in seconds, of the random term added per wait
        rng: Randomness source; each policy gets its own ``random.Random``
        sleep: Blocking sleep primitive used by ``wait_and_advance``
        async_sleep: Awaitable timer used by ``wait_and_advance_async``

    Example:
        >>> policy = BackoffPolicy(0.0, 2.0, 0.0)
        >>> policy.wait_and_advance()
        >>> policy.current_delay
        0.0
    """

    current_delay: float = DEFAULT_INITIAL_DELAY
    growth_factor: float = DEFAULT_GROWTH_FACTOR
    jitter: float = DEFAULT_JITTER
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False, kw_only=True)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False, compare=False, kw_only=True)
    async_sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, repr=False, compare=False, kw_only=True)

    @classmethod
    def default(cls) -> BackoffPolicy:
        """1s initial delay, 1.2x growth, up to 800ms of jitter."""
        return cls(DEFAULT_INITIAL_DELAY, DEFAULT_GROWTH_FACTOR, DEFAULT_JITTER)

    @classmethod
    def from_settings(cls, settings: RetrySettings | None = None) -> BackoffPolicy:
        """Build a fresh policy from RetrySettings (environment by default)."""
        if settings is None:
            from retrykit.config import get_settings
            settings = get_settings().retry
        return cls(settings.initial_delay, settings.growth_factor, settings.jitter)

    def next_delay(self) -> float:
        """Delay the next wait will sleep for."""
        return max(0.0, self.current_delay)

    def _advance(self) -> None:
        # rng.random() is in [0, 1), so the jitter term never reaches the bound
        grown = self.current_delay * self.growth_factor + self.rng.random() * self.jitter
        self.current_delay = max(0.0, grown)

    def wait_and_advance(self) -> None:
        """Block the calling thread for the current delay, then grow it."""
        self.sleep(self.next_delay())
        self._advance()

    async def wait_and_advance_async(self) -> None:
        """Suspend the calling task for the current delay, then grow it."""
        await self.async_sleep(self.next_delay())
        self._advance()
