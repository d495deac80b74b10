"""Session assembly: one Engine, one orchestrator, one signal bus."""
from __future__ import annotations

from dataclasses import dataclass

from tick_collapse.config import WaveConfig
from tick_collapse.engine import Engine
from tick_collapse.orchestrator import WaveOrchestrator
from tick_collapse.signals import SignalBus
from tick_collapse.systems import make_signal_system, make_wave_system
from tick_collapse.types import TileSource, TimerSink


@dataclass
class Session:
    engine: Engine
    orchestrator: WaveOrchestrator
    bus: SignalBus

    def run(self, max_ticks: int) -> int:
        """Run until the session ends or ``max_ticks`` elapse."""
        return self.engine.run(max_ticks)


def build_session(
    source: TileSource,
    timer: TimerSink | None = None,
    config: WaveConfig | None = None,
    tps: int = 20,
    seed: int | None = None,
) -> Session:
    """Wire a fresh orchestrator into an Engine.

    The orchestrator shares the engine's seeded RNG, so a session is
    reproducible from ``seed``. Signals still queued when the engine
    stops are delivered by a stop hook.
    """
    engine = Engine(tps=tps, seed=seed)
    bus = SignalBus()
    orchestrator = WaveOrchestrator(
        source, timer=timer, bus=bus, config=config, rng=engine.rng,
    )
    engine.add_system(make_wave_system(orchestrator))
    engine.add_system(make_signal_system(bus))
    engine.on_stop(lambda ctx: bus.flush())
    return Session(engine=engine, orchestrator=orchestrator, bus=bus)
