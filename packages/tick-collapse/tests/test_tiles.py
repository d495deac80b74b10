"""Tests for the in-memory tile handle, sources and grid layout."""
from __future__ import annotations

import pytest

from tick_collapse import (
    DelayedTileSource,
    RecordingTimer,
    StaticTileSource,
    Tile,
    TileHandle,
    TileState,
    make_grid,
)


class TestTile:

    def test_defaults(self):
        tile = Tile(tile_id=1)
        assert tile.state is TileState.NORMAL
        assert tile.warning is False
        assert tile.position() == (0.0, 0.0, 0.0)

    def test_satisfies_handle_protocol(self):
        assert isinstance(Tile(tile_id=1), TileHandle)

    def test_set_warning_toggles(self):
        tile = Tile(tile_id=1)
        tile.set_warning(True)
        assert tile.warning is True
        tile.set_warning(False)
        assert tile.warning is False

    def test_collapse_sets_state_and_clears_warning(self):
        tile = Tile(tile_id=1)
        tile.set_warning(True)
        tile.collapse()
        assert tile.state is TileState.COLLAPSED
        assert tile.collapsed
        assert tile.warning is False

    def test_collapse_is_idempotent(self):
        tile = Tile(tile_id=1)
        tile.collapse()
        tile.collapse()
        assert tile.state is TileState.COLLAPSED
        assert tile.collapse_calls == 2

    def test_warning_ignored_after_collapse(self):
        tile = Tile(tile_id=1)
        tile.collapse()
        tile.set_warning(True)
        assert tile.warning is False

    def test_wear_progression_stops_before_collapse(self):
        tile = Tile(tile_id=1)
        assert tile.wear() is TileState.CRACKED
        assert tile.wear() is TileState.VERGE_OF_CRUMBLING
        assert tile.wear() is TileState.VERGE_OF_CRUMBLING

    def test_wear_does_nothing_on_collapsed(self):
        tile = Tile(tile_id=1)
        tile.collapse()
        assert tile.wear() is TileState.COLLAPSED

    def test_identity_equality(self):
        a = Tile(tile_id=1, pos=(1.0, 0.0, 1.0))
        b = Tile(tile_id=1, pos=(1.0, 0.0, 1.0))
        assert a != b
        tiles = [a, b]
        tiles.remove(b)
        assert tiles == [a]


class TestSources:

    def test_static_source_returns_copy(self):
        tiles = [Tile(tile_id=i) for i in range(3)]
        source = StaticTileSource(tiles)
        got = source.get_active_tiles()
        got.clear()
        assert len(source.get_active_tiles()) == 3
        assert source.polls == 2

    def test_delayed_source(self):
        tiles = [Tile(tile_id=i) for i in range(2)]
        source = DelayedTileSource(tiles, delay=2)
        assert source.get_active_tiles() is None
        assert source.get_active_tiles() is None
        assert len(source.get_active_tiles()) == 2

    def test_delayed_source_never(self):
        source = DelayedTileSource([Tile(tile_id=0)], delay=None)
        for _ in range(10):
            assert source.get_active_tiles() is None


def test_recording_timer():
    timer = RecordingTimer()
    assert timer.last is None
    timer.set_remaining(2.0)
    timer.set_remaining(1.0)
    assert timer.values == [2.0, 1.0]
    assert timer.last == 1.0


class TestGrid:

    def test_size_and_unique_ids(self):
        tiles = make_grid(10, 10)
        assert len(tiles) == 100
        assert len({t.tile_id for t in tiles}) == 100

    def test_centered_layout(self):
        tiles = make_grid(2, 2, square_size=1.0, center=(10.0, 2.0, -4.0))
        positions = sorted(t.position() for t in tiles)
        assert positions == [
            (9.0, 2.0, -5.0),
            (9.0, 2.0, -4.0),
            (10.0, 2.0, -5.0),
            (10.0, 2.0, -4.0),
        ]

    def test_empty_grid(self):
        assert make_grid(0, 5) == []

    def test_negative_dimensions_rejected(self):
        with pytest.raises(ValueError):
            make_grid(-1, 3)
