"""In-memory tile handle, tile sources and timer sink."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Sequence

from tick_collapse.types import TileHandle, TileState, Vec3

_WEAR_ORDER = (TileState.NORMAL, TileState.CRACKED, TileState.VERGE_OF_CRUMBLING)


@dataclass(eq=False)
class Tile:
    """Concrete floor cell. Identity-compared so equal positions stay distinct.

    ``wear()`` walks the rock through its cosmetic damage stages; only
    ``collapse()`` ever reaches COLLAPSED.
    """

    tile_id: Hashable
    pos: Vec3 = (0.0, 0.0, 0.0)
    state: TileState = TileState.NORMAL
    warning: bool = False
    collapse_calls: int = field(default=0, repr=False)

    def set_warning(self, on: bool) -> None:
        if self.state is TileState.COLLAPSED:
            return
        self.warning = on

    def collapse(self) -> None:
        self.collapse_calls += 1
        self.warning = False
        self.state = TileState.COLLAPSED

    def position(self) -> Vec3:
        return self.pos

    def wear(self) -> TileState:
        if self.state in _WEAR_ORDER:
            idx = _WEAR_ORDER.index(self.state)
            self.state = _WEAR_ORDER[min(idx + 1, len(_WEAR_ORDER) - 1)]
        return self.state

    @property
    def collapsed(self) -> bool:
        return self.state is TileState.COLLAPSED


class StaticTileSource:
    """Yields the same tile list on every poll."""

    def __init__(self, tiles: Sequence[TileHandle]) -> None:
        self._tiles = list(tiles)
        self.polls = 0

    def get_active_tiles(self) -> list[TileHandle]:
        self.polls += 1
        return list(self._tiles)


class DelayedTileSource:
    """Yields nothing for the first ``delay`` polls, then the tiles.

    Stands in for a grid generator still waiting on floor detection.
    ``delay=None`` never yields.
    """

    def __init__(self, tiles: Sequence[TileHandle], delay: int | None) -> None:
        self._tiles = list(tiles)
        self._delay = delay
        self.polls = 0

    def get_active_tiles(self) -> list[TileHandle] | None:
        self.polls += 1
        if self._delay is None or self.polls <= self._delay:
            return None
        return list(self._tiles)


class RecordingTimer:
    """Timer sink that keeps every reported value."""

    def __init__(self) -> None:
        self.values: list[float] = []

    def set_remaining(self, value: float) -> None:
        self.values.append(value)

    @property
    def last(self) -> float | None:
        return self.values[-1] if self.values else None


def make_grid(
    rows: int,
    columns: int,
    square_size: float = 0.3048,
    center: Vec3 = (0.0, 0.0, 0.0),
) -> list[Tile]:
    """Lay out ``rows * columns`` tiles centered on ``center`` in the xz-plane."""
    if rows < 0 or columns < 0:
        raise ValueError("rows and columns must be non-negative")
    cx, cy, cz = center
    start_x = -(columns / 2.0) * square_size
    start_z = -(rows / 2.0) * square_size
    tiles: list[Tile] = []
    for i in range(rows):
        for j in range(columns):
            pos = (cx + start_x + j * square_size, cy, cz + start_z + i * square_size)
            tiles.append(Tile(tile_id=(i, j), pos=pos))
    return tiles
