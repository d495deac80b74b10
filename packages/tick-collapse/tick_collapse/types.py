"""Shared types, protocols and errors for the collapsing-floor engine."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Hashable, Protocol, Sequence, runtime_checkable

# (x, y, z) with y pointing up.
Vec3 = tuple[float, float, float]


class TileState(Enum):
    NORMAL = "normal"
    CRACKED = "cracked"
    VERGE_OF_CRUMBLING = "verge_of_crumbling"
    COLLAPSED = "collapsed"


@runtime_checkable
class TileHandle(Protocol):
    """Capability interface exposed by every floor tile."""

    tile_id: Hashable
    state: TileState
    warning: bool

    def set_warning(self, on: bool) -> None: ...

    def collapse(self) -> None: ...

    def position(self) -> Vec3: ...


class TileSource(Protocol):
    """Upstream producer of the floor tiles. May yield nothing for a while."""

    def get_active_tiles(self) -> Sequence[TileHandle] | None: ...


class TimerSink(Protocol):
    """Consumer of the remaining-time value, called once per hold tick."""

    def set_remaining(self, value: float) -> None: ...


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]
    random: _random.Random


class StartupTimeout(Exception):
    """No tile collection became available before the startup deadline."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            f"No tiles found after waiting {timeout} time units for the grid"
        )


System = Callable[[TickContext], None]
