"""tick-collapse - Collapsing-floor wave engine on a fixed-timestep tick loop."""
from __future__ import annotations

from tick_collapse.config import WaveConfig
from tick_collapse.countdown import Countdown
from tick_collapse.engine import Clock, Engine
from tick_collapse.executor import WaveExecutor, WaveSpec
from tick_collapse.orchestrator import Phase, WaveOrchestrator
from tick_collapse.selector import select_random
from tick_collapse.session import Session, build_session
from tick_collapse.signals import SignalBus
from tick_collapse.systems import make_signal_system, make_wave_system
from tick_collapse.tiles import (
    DelayedTileSource,
    RecordingTimer,
    StaticTileSource,
    Tile,
    make_grid,
)
from tick_collapse.types import (
    StartupTimeout,
    TickContext,
    TileHandle,
    TileSource,
    TileState,
    TimerSink,
    Vec3,
)

__all__ = [
    "Clock",
    "Countdown",
    "DelayedTileSource",
    "Engine",
    "Phase",
    "RecordingTimer",
    "Session",
    "SignalBus",
    "StartupTimeout",
    "StaticTileSource",
    "TickContext",
    "Tile",
    "TileHandle",
    "TileSource",
    "TileState",
    "TimerSink",
    "Vec3",
    "WaveConfig",
    "WaveExecutor",
    "WaveOrchestrator",
    "WaveSpec",
    "build_session",
    "make_grid",
    "make_signal_system",
    "make_wave_system",
    "select_random",
]
