"""Engine - fixed-timestep host loop for a floor session.

Hosts with their own frame loop (the pygame demo) call ``step`` from a
tick accumulator; tests and headless runs use ``run``.
"""

import os
import random
from typing import Callable

from tick_collapse.types import System, TickContext


class Clock:
    def __init__(self, tps: int) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._dt = 1.0 / tps
        self._tick_number = 0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def context(self, stop_fn: Callable[[], None], rng: random.Random) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=self._dt,
            elapsed=self._tick_number * self._dt,
            request_stop=stop_fn,
            random=rng,
        )


Hook = Callable[[TickContext], None]


class Engine:
    """Runs systems in registration order once per tick.

    A system may call ``ctx.request_stop()``; the remaining systems of
    that tick are skipped, ``run`` returns, and stop hooks fire so they
    can deliver whatever the skipped systems would have.
    """

    def __init__(self, tps: int = 20, seed: int | None = None) -> None:
        self._clock = Clock(tps)
        self._systems: list[System] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def stopped(self) -> bool:
        return self._stop_requested

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def _context(self) -> TickContext:
        return self._clock.context(self._request_stop, self._rng)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def step(self) -> None:
        """Run one tick. Stop hooks fire if a system asks to stop."""
        self._stop_requested = False
        self._clock.advance()
        ctx = self._context()
        for system in self._systems:
            system(ctx)
            if self._stop_requested:
                for hook in self._stop_hooks:
                    hook(ctx)
                return

    def run(self, n: int) -> int:
        """Step up to ``n`` ticks, ending early on a stop request; return ticks run."""
        for ran in range(1, n + 1):
            self.step()
            if self._stop_requested:
                return ran
        return n
