"""Test doubles for randomness and sleeping."""

from __future__ import annotations

import random


class ScriptedRandom(random.Random):
    """random.Random whose random() replays a fixed script, cycling when exhausted."""

    def __init__(self, *values: float) -> None:
        super().__init__(0)
        self._values = values or (0.0,)
        self._i = 0

    def random(self) -> float:
        v = self._values[self._i % len(self._values)]
        self._i += 1
        return v


class SleepRecorder:
    """Stand-in for time.sleep that records durations instead of blocking."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class AsyncSleepRecorder(SleepRecorder):
    """Stand-in for asyncio.sleep."""

    async def __call__(self, seconds: float) -> None:  # type: ignore[override]
        self.calls.append(seconds)
