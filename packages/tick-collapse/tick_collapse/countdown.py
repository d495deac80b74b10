"""Countdown - the per-phase game clock pushed to the timer sink."""
from __future__ import annotations

from tick_collapse.types import TimerSink

# Float dt (e.g. 1/20) never sums to a duration exactly; residue below
# this counts as zero.
TIME_EPSILON = 1e-9


class Countdown:
    """One-shot hold of ``duration`` time units.

    Each ``tick`` subtracts ``dt``, reports the clamped remainder to the
    sink and returns True once the hold has run out.
    """

    def __init__(self, duration: float, sink: TimerSink | None = None) -> None:
        if duration < 0:
            raise ValueError("duration must be non-negative")
        self._duration = duration
        self._remaining = 0.0 if duration <= TIME_EPSILON else duration
        self._sink = sink

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def remaining(self) -> float:
        return self._remaining

    @property
    def expired(self) -> bool:
        return self._remaining <= 0.0

    def tick(self, dt: float) -> bool:
        if dt < 0:
            raise ValueError("dt must be non-negative")
        self._remaining -= dt
        if self._remaining <= TIME_EPSILON:
            self._remaining = 0.0
        if self._sink is not None:
            self._sink.set_remaining(self._remaining)
        return self.expired
