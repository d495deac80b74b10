"""Build the collapse arena game state."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tick_collapse import (
    DelayedTileSource,
    Session,
    Tile,
    Vec3,
    WaveConfig,
    build_session,
    make_grid,
    signals,
)

# --- Configuration ---
ROWS, COLUMNS = 10, 10
SQUARE_SIZE = 0.3048  # 1 ft in meters
TPS = 20
FPS = 60
FLOOR_DELAY_TICKS = 10
LOG_LINES = 6


@dataclass
class DisplayTimer:
    """Timer sink that keeps the latest value for the HUD."""

    remaining: float = 0.0
    use_minutes_seconds: bool = True

    def set_remaining(self, value: float) -> None:
        self.remaining = max(0.0, value)

    def text(self) -> str:
        if self.use_minutes_seconds:
            minutes, seconds = divmod(int(self.remaining), 60)
            return f"{minutes:02d}:{seconds:02d}"
        return str(int(-(-self.remaining // 1)))


@dataclass
class GameState:
    """Holds the running session and what the renderer needs from it."""

    session: Session
    tiles: list[Tile]
    timer: DisplayTimer
    treasure: Vec3 | None = None
    treasure_tile: Tile | None = None
    log: list[str] = field(default_factory=list)
    paused: bool = False
    echo: bool = False

    def note(self, line: str) -> None:
        if self.echo:
            print(f"[t={self.session.engine.clock.tick_number:3d}] {line}")
        self.log.append(line)
        del self.log[:-LOG_LINES]


def _wire_signals(state: GameState) -> None:
    bus = state.session.bus

    def on_wave_started(name: str, data: dict[str, Any]) -> None:
        state.note(
            f"Wave {data['wave']}: {data['drop_count']} of "
            f"{data['flash_count']} flashing tiles will fall"
        )

    def on_wave_collapsed(name: str, data: dict[str, Any]) -> None:
        # Surviving rock cracks a little more after every wave.
        for tile in state.session.orchestrator.active_tiles:
            tile.wear()
        state.note(f"Wave {data['wave']}: {data['remaining']} tiles left")

    def on_wave_skipped(name: str, data: dict[str, Any]) -> None:
        state.note(f"Wave {data['wave']} skipped")

    def on_treasure(name: str, data: dict[str, Any]) -> None:
        state.treasure = data["position"]
        state.treasure_tile = data["tile"]
        state.note("Treasure chest appeared!")

    def on_game_over(name: str, data: dict[str, Any]) -> None:
        state.note(f"Game over - {len(data['survivors'])} tile(s) standing")

    def on_startup_failed(name: str, data: dict[str, Any]) -> None:
        state.note(f"No floor found within {data['timeout']:g}s")

    bus.subscribe(signals.WAVE_STARTED, on_wave_started)
    bus.subscribe(signals.WAVE_COLLAPSED, on_wave_collapsed)
    bus.subscribe(signals.WAVE_SKIPPED, on_wave_skipped)
    bus.subscribe(signals.TREASURE_SPAWNED, on_treasure)
    bus.subscribe(signals.GAME_OVER, on_game_over)
    bus.subscribe(signals.STARTUP_FAILED, on_startup_failed)


def build_game(
    rows: int = ROWS,
    columns: int = COLUMNS,
    seed: int | None = None,
    floor_delay: int | None = FLOOR_DELAY_TICKS,
    config: WaveConfig | None = None,
    tps: int = TPS,
    echo: bool = False,
) -> GameState:
    """Lay out the grid and start a session that discovers it after ``floor_delay`` ticks."""
    tiles = make_grid(rows, columns, square_size=SQUARE_SIZE)
    timer = DisplayTimer()
    session = build_session(
        DelayedTileSource(tiles, delay=floor_delay),
        timer=timer,
        config=config,
        tps=tps,
        seed=seed,
    )
    state = GameState(session=session, tiles=tiles, timer=timer, echo=echo)
    _wire_signals(state)
    state.note("Waiting for floor...")
    return state
