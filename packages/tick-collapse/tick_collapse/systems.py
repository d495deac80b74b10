"""System factories wiring the session into an Engine."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from tick_collapse.signals import SignalBus

if TYPE_CHECKING:
    from tick_collapse.orchestrator import Phase, WaveOrchestrator
    from tick_collapse.types import TickContext


def make_wave_system(
    orchestrator: WaveOrchestrator,
    on_finish: Callable[[TickContext, Phase], None] | None = None,
    stop_when_finished: bool = True,
) -> Callable[[TickContext], None]:
    """Return a system that advances ``orchestrator`` by ``ctx.dt`` each tick.

    Once the session reaches GAME_OVER or ERROR, ``on_finish`` fires
    exactly once and the engine is asked to stop.
    """
    reported = False

    def wave_system(ctx: TickContext) -> None:
        nonlocal reported
        phase = orchestrator.advance(ctx.dt)
        if not orchestrator.finished or reported:
            return
        reported = True
        if on_finish is not None:
            on_finish(ctx, phase)
        if stop_when_finished:
            ctx.request_stop()

    return wave_system


def make_signal_system(bus: SignalBus) -> Callable[[TickContext], None]:
    def signal_system(ctx: TickContext) -> None:
        bus.flush()

    return signal_system
