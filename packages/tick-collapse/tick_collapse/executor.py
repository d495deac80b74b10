"""WaveExecutor - warning phase then collapse phase against the active tiles."""
from __future__ import annotations

import logging
import random as _random_mod
from dataclasses import dataclass
from typing import MutableSequence

from tick_collapse.countdown import Countdown
from tick_collapse.selector import select_random
from tick_collapse.types import TileHandle, TimerSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaveSpec:
    """Nominal tile counts for one wave.

    ``drop_count`` is relative to the flash subset, never the whole set.
    """

    flash_count: int
    drop_count: int

    def clamped(self, active: int) -> WaveSpec:
        """Return the feasible spec for ``active`` remaining tiles."""
        flash = max(0, min(self.flash_count, active))
        drop = max(0, min(self.drop_count, flash))
        return WaveSpec(flash, drop)


class WaveExecutor:
    """Runs single waves. Holds no state beyond its collaborators."""

    def __init__(
        self,
        warning_duration: float = 3.0,
        timer: TimerSink | None = None,
        rng: _random_mod.Random | None = None,
    ) -> None:
        if warning_duration < 0:
            raise ValueError("warning_duration must be non-negative")
        self._warning_duration = warning_duration
        self._timer = timer
        self._rng = rng if rng is not None else _random_mod.Random()

    @property
    def warning_duration(self) -> float:
        return self._warning_duration

    def begin_warning(self, active: MutableSequence[TileHandle]) -> Countdown:
        """Flash every remaining tile and return the warning hold."""
        for tile in active:
            tile.set_warning(True)
        return Countdown(self._warning_duration, self._timer)

    def collapse(
        self, active: MutableSequence[TileHandle], spec: WaveSpec,
    ) -> list[TileHandle]:
        """Clear all warnings, then drop a random subset of a random flash subset.

        Collapsed tiles are removed from ``active`` before returning.
        """
        for tile in active:
            tile.set_warning(False)

        feasible = spec.clamped(len(active))
        if feasible != spec:
            logger.debug(
                "Clamped wave counts %d/%d to %d/%d for %d active tiles",
                spec.flash_count, spec.drop_count,
                feasible.flash_count, feasible.drop_count, len(active),
            )

        flash = select_random(active, feasible.flash_count, self._rng)
        drop = select_random(flash, feasible.drop_count, self._rng)
        for tile in drop:
            tile.collapse()
            active.remove(tile)
        return drop

    def run_wave(
        self,
        active: MutableSequence[TileHandle],
        flash_count: int,
        drop_count: int,
        dt: float = 1.0,
    ) -> list[TileHandle]:
        """Run a whole wave in one call, stepping the warning hold by ``dt``."""
        if not active:
            logger.debug("Wave invoked with no active tiles; nothing to do")
            return []
        if dt <= 0:
            raise ValueError("dt must be positive")
        hold = self.begin_warning(active)
        while not hold.expired:
            hold.tick(dt)
        return self.collapse(active, WaveSpec(flash_count, drop_count))
