from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Window:
    started_at: float
    hits: int

    def expired(self, now: float, window_seconds: float) -> bool:
        return now - self.started_at >= window_seconds


class CounterStore:
    """Port for fixed-window hit counters keyed by client."""

    def hit(self, key: str, *, now: float, window_seconds: float) -> Window:
        """Count one hit, opening a fresh window when the current one has ended."""
        raise NotImplementedError


class InMemoryStore(CounterStore):
    """Per-process counters behind one lock.

    Several workers each keep their own windows. Ended windows are dropped
    once the table grows past `sweep_after` keys.
    """

    def __init__(self, sweep_after: int = 10_000):
        self._windows: Dict[str, Window] = {}
        self._lock = threading.Lock()
        self.sweep_after = sweep_after

    def hit(self, key: str, *, now: float, window_seconds: float) -> Window:
        with self._lock:
            current = self._windows.get(key)
            if current is None or current.expired(now, window_seconds):
                if len(self._windows) >= self.sweep_after:
                    self._sweep(now, window_seconds)
                current = Window(started_at=now, hits=0)
            updated = Window(started_at=current.started_at, hits=current.hits + 1)
            self._windows[key] = updated
            return updated

    def _sweep(self, now: float, window_seconds: float) -> None:
        stale = [k for k, w in self._windows.items() if w.expired(now, window_seconds)]
        for k in stale:
            del self._windows[k]
