"""WaveOrchestrator - the tick-driven state machine for one floor session."""
from __future__ import annotations

import logging
import random as _random_mod
from enum import Enum

from tick_collapse import signals
from tick_collapse.config import WaveConfig
from tick_collapse.countdown import TIME_EPSILON, Countdown
from tick_collapse.executor import WaveExecutor, WaveSpec
from tick_collapse.selector import select_random
from tick_collapse.signals import SignalBus
from tick_collapse.types import StartupTimeout, TileHandle, TileSource, TimerSink

logger = logging.getLogger(__name__)


class Phase(Enum):
    AWAITING_GRID = "awaiting_grid"
    WAVE_1 = "wave_1"
    INTERVAL_1 = "interval_1"
    WAVE_2 = "wave_2"
    INTERVAL_2 = "interval_2"
    TREASURE_SPAWN = "treasure_spawn"
    WAVE_3 = "wave_3"
    INTERVAL_3 = "interval_3"
    WAVE_4 = "wave_4"
    GAME_OVER = "game_over"
    ERROR = "error"


_NEXT: dict[Phase, Phase] = {
    Phase.AWAITING_GRID: Phase.WAVE_1,
    Phase.WAVE_1: Phase.INTERVAL_1,
    Phase.INTERVAL_1: Phase.WAVE_2,
    Phase.WAVE_2: Phase.INTERVAL_2,
    Phase.INTERVAL_2: Phase.TREASURE_SPAWN,
    Phase.TREASURE_SPAWN: Phase.WAVE_3,
    Phase.WAVE_3: Phase.INTERVAL_3,
    Phase.INTERVAL_3: Phase.WAVE_4,
    Phase.WAVE_4: Phase.GAME_OVER,
}

_WAVES: dict[Phase, int] = {
    Phase.WAVE_1: 1,
    Phase.WAVE_2: 2,
    Phase.WAVE_3: 3,
    Phase.WAVE_4: 4,
}

_INTERVALS = frozenset({Phase.INTERVAL_1, Phase.INTERVAL_2, Phase.INTERVAL_3})

TERMINAL_PHASES = frozenset({Phase.GAME_OVER, Phase.ERROR})


class WaveOrchestrator:
    """Drives four collapse waves over the tiles produced by ``source``.

    Call ``advance(dt)`` once per scheduling tick. Hold phases (warnings
    and intervals) own a Countdown that reports to ``timer`` each tick;
    every other phase resolves on the tick the preceding hold ends.
    The orchestrator is single-shot: once GAME_OVER or ERROR is reached
    further calls do nothing.
    """

    def __init__(
        self,
        source: TileSource,
        timer: TimerSink | None = None,
        bus: SignalBus | None = None,
        config: WaveConfig | None = None,
        rng: _random_mod.Random | None = None,
    ) -> None:
        self._source = source
        self._timer = timer
        self._bus = bus if bus is not None else SignalBus()
        self._config = config if config is not None else WaveConfig()
        self._rng = rng if rng is not None else _random_mod.Random()
        self._executor = WaveExecutor(
            self._config.warning_duration, timer, self._rng,
        )

        self._phase = Phase.AWAITING_GRID
        self._history: list[Phase] = [Phase.AWAITING_GRID]
        self._active: list[TileHandle] = []
        self._initial_count = 0
        self._waited = 0.0
        self._hold: Countdown | None = None
        self._wave_spec: WaveSpec | None = None
        self._treasure_spawned = False
        self.error: StartupTimeout | None = None

    # --- Queries ---

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def history(self) -> list[Phase]:
        """Every phase entered so far, in order."""
        return list(self._history)

    @property
    def config(self) -> WaveConfig:
        return self._config

    @property
    def bus(self) -> SignalBus:
        return self._bus

    @property
    def active_tiles(self) -> tuple[TileHandle, ...]:
        return tuple(self._active)

    @property
    def initial_count(self) -> int:
        return self._initial_count

    @property
    def per_wave_drop(self) -> int:
        return self._initial_count // self._config.wave_divisor

    @property
    def current_wave(self) -> int:
        """Number of the last wave entered, 0 before wave 1."""
        for phase in reversed(self._history):
            if phase in _WAVES:
                return _WAVES[phase]
        return 0

    @property
    def remaining(self) -> float:
        """Time left in the current hold, 0 outside holds."""
        return self._hold.remaining if self._hold is not None else 0.0

    @property
    def warning_active(self) -> bool:
        return self._phase in _WAVES and self._hold is not None

    @property
    def treasure_spawned(self) -> bool:
        return self._treasure_spawned

    @property
    def finished(self) -> bool:
        return self._phase in TERMINAL_PHASES

    # --- Tick entry point ---

    def advance(self, dt: float) -> Phase:
        """Step the session by ``dt`` time units and return the resulting phase."""
        if dt < 0:
            raise ValueError("dt must be non-negative")
        if self.finished:
            return self._phase

        if self._phase is Phase.AWAITING_GRID:
            self._poll(dt)
        elif self._hold is not None and self._hold.tick(dt):
            self._finish_hold()
        return self._phase

    # --- Phase handling ---

    def _poll(self, dt: float) -> None:
        tiles = self._source.get_active_tiles()
        if tiles:
            self._active = list(tiles)
            self._initial_count = len(self._active)
            logger.info("Found %d tiles; starting waves", self._initial_count)
            self._enter(Phase.WAVE_1)
            return

        self._waited += dt
        if self._waited >= self._config.await_grid_timeout - TIME_EPSILON:
            self.error = StartupTimeout(self._config.await_grid_timeout)
            logger.error("%s; wave system cannot start", self.error)
            self._set_phase(Phase.ERROR)
            self._bus.publish(
                signals.STARTUP_FAILED, timeout=self._config.await_grid_timeout,
            )

    def _set_phase(self, phase: Phase) -> None:
        self._phase = phase
        self._history.append(phase)

    def _enter(self, phase: Phase) -> None:
        self._set_phase(phase)
        self._hold = None

        if phase in _WAVES:
            self._start_wave(_WAVES[phase])
        elif phase in _INTERVALS:
            self._hold = Countdown(self._config.wave_interval, self._timer)
            if self._hold.expired:
                self._finish_hold()
        elif phase is Phase.TREASURE_SPAWN:
            self._spawn_treasure()
            self._enter(_NEXT[phase])
        elif phase is Phase.GAME_OVER:
            self._game_over()

    def _finish_hold(self) -> None:
        self._hold = None
        if self._phase in _WAVES and self._wave_spec is not None:
            wave = _WAVES[self._phase]
            removed = self._executor.collapse(self._active, self._wave_spec)
            self._wave_spec = None
            logger.info(
                "Wave %d collapsed %d tiles, %d remain",
                wave, len(removed), len(self._active),
            )
            self._bus.publish(
                signals.WAVE_COLLAPSED,
                wave=wave, removed=removed, remaining=len(self._active),
            )
        self._enter(_NEXT[self._phase])

    def _nominal_spec(self, wave: int) -> WaveSpec | None:
        cfg = self._config
        n = len(self._active)
        if n == 0:
            return None
        if wave in (1, 2):
            per = self.per_wave_drop
            return WaveSpec(per + cfg.flash_margin, per)
        if wave == 3:
            drop = max(n - cfg.wave3_survivors, 0)
            return WaveSpec(n, drop) if drop > 0 else None
        return WaveSpec(n, cfg.final_drop) if n > 1 else None

    def _start_wave(self, wave: int) -> None:
        spec = self._nominal_spec(wave)
        if spec is None:
            logger.debug(
                "Wave %d skipped with %d active tiles", wave, len(self._active),
            )
            self._bus.publish(signals.WAVE_SKIPPED, wave=wave)
            self._enter(_NEXT[self._phase])
            return

        logger.info("Wave %d starting", wave)
        self._wave_spec = spec
        self._bus.publish(
            signals.WAVE_STARTED,
            wave=wave, flash_count=spec.flash_count, drop_count=spec.drop_count,
        )
        self._hold = self._executor.begin_warning(self._active)
        if self._hold.expired:
            self._finish_hold()

    def _spawn_treasure(self) -> None:
        if self._treasure_spawned:
            return
        if not self._active:
            logger.warning("No remaining tiles to spawn treasure on")
            return
        (tile,) = select_random(self._active, 1, self._rng)
        x, y, z = tile.position()
        position = (x, y + self._config.treasure_lift, z)
        self._treasure_spawned = True
        logger.info("Treasure spawned at %s", position)
        self._bus.publish(signals.TREASURE_SPAWNED, position=position, tile=tile)

    def _game_over(self) -> None:
        if self._timer is not None:
            self._timer.set_remaining(0.0)
        logger.info("Game over with %d tiles standing", len(self._active))
        self._bus.publish(signals.GAME_OVER, survivors=list(self._active))
