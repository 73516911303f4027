from __future__ import annotations

import math
import time
from typing import Callable, Optional

from .contracts import ConsumeResult, Policy
from .store import CounterStore, InMemoryStore

TimeFn = Callable[[], float]


class RateLimiterService:
    """
    Fixed-window request counter. Every request counts, including the ones
    that get denied, so a client hammering past its budget stays blocked
    until the window ends.
    """

    def __init__(self, store: Optional[CounterStore] = None, now: Optional[TimeFn] = None):
        self.store = store or InMemoryStore()
        self._now = now or time.monotonic

    def consume(self, key: str, policy: Policy) -> ConsumeResult:
        now = self._now()
        window = self.store.hit(f"{policy.name}:{key}", now=now, window_seconds=policy.window_seconds)
        return ConsumeResult(
            allowed=window.hits <= policy.limit,
            limit=policy.limit,
            remaining=max(0, policy.limit - window.hits),
            reset_after=max(0, math.ceil(window.started_at + policy.window_seconds - now)),
            policy=policy.name,
            key=key,
        )
