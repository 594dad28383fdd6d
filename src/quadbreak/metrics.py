"""Optional counters and timings for path rewrites.

Nothing is recorded unless a tracker is activated with :func:`use_tracker`;
the active tracker is held in a context variable so concurrent rewrites in
separate threads or tasks do not share it.
"""
from __future__ import annotations

from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from time import perf_counter
from typing import Dict, Iterator


_TRACKER_VAR: ContextVar["MetricsTracker | None"] = ContextVar(
    "quadbreak_metrics_tracker", default=None
)


@dataclass
class MetricsTracker:
    """Split and approximation counters plus per-entry-point wall time."""

    timings: Dict[str, float] = field(default_factory=dict)
    counters: Dict[str, int] = field(default_factory=dict)

    def add_time(self, key: str, duration: float) -> None:
        if duration < 0.0:
            return
        self.timings[key] = self.timings.get(key, 0.0) + duration

    def increment(self, key: str, value: int = 1) -> None:
        self.counters[key] = self.counters.get(key, 0) + value

    def get_time(self, key: str) -> float:
        return self.timings.get(key, 0.0)

    def get_count(self, key: str) -> int:
        return self.counters.get(key, 0)

    def quads_split(self) -> int:
        """Number of input quads that needed at least one split."""
        return sum(self.get_count(k) for k in ("quads.split_x", "quads.split_y", "quads.split_xy"))


def get_tracker() -> "MetricsTracker | None":
    return _TRACKER_VAR.get()


@contextmanager
def use_tracker(tracker: MetricsTracker) -> Iterator[MetricsTracker]:
    """Activate *tracker* for the duration of the context."""

    token = _TRACKER_VAR.set(tracker)
    try:
        yield tracker
    finally:
        _TRACKER_VAR.reset(token)


class Timer(AbstractContextManager["Timer"]):
    """Wall time of a block, added to the active tracker under *key*."""

    def __init__(self, key: str) -> None:
        self.key = key
        self.duration: float = 0.0
        self._start: float | None = None

    @property
    def ms(self) -> float:
        return self.duration * 1000.0

    def __enter__(self) -> "Timer":  # type: ignore[override]
        self._start = perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        if self._start is None:
            return None
        self.duration = perf_counter() - self._start
        tracker = get_tracker()
        if tracker is not None:
            tracker.add_time(self.key, self.duration)
        return None


__all__ = ["MetricsTracker", "Timer", "get_tracker", "use_tracker"]
