"""Tests for sky_garden.board."""

import pytest

from sky_garden.board import (
    CLOUDS,
    DOUBLE_ROLL_TILES,
    FREEZE_TILES,
    MYSTERY_TILES,
    SWAP_TILES,
    TOTAL_TILES,
    VINES,
    TileType,
    board_rows,
    cloud_dest,
    is_cloud,
    is_vine,
    nearest_vine_above,
    tile_to_coord,
    tile_type,
    vine_dest,
)


# ── constants ────────────────────────────────────────────────────────

def test_five_vines_all_go_up():
    assert len(VINES) == 5
    assert all(dest > src for src, dest in VINES.items())


def test_five_clouds_all_go_down():
    assert len(CLOUDS) == 5
    assert all(dest < src for src, dest in CLOUDS.items())


def test_special_tiles_do_not_overlap():
    groups = [set(VINES), set(CLOUDS), DOUBLE_ROLL_TILES, SWAP_TILES, FREEZE_TILES, MYSTERY_TILES]
    seen: set[int] = set()
    for group in groups:
        assert not (seen & group)
        seen |= group
    assert TOTAL_TILES not in seen


def test_all_tiles_in_range():
    for src, dest in {**VINES, **CLOUDS}.items():
        assert 1 <= src < TOTAL_TILES
        assert 1 <= dest < TOTAL_TILES


# ── lookups ─────────────────────────────────────────────────────────

def test_tile_type():
    assert tile_type(4) is TileType.VINE
    assert tile_type(17) is TileType.CLOUD
    assert tile_type(7) is TileType.DOUBLE
    assert tile_type(13) is TileType.SWAP
    assert tile_type(23) is TileType.FREEZE
    assert tile_type(10) is TileType.MYSTERY
    assert tile_type(1) is TileType.NORMAL
    assert tile_type(64) is TileType.NORMAL


def test_vine_and_cloud_helpers():
    assert is_vine(44) and vine_dest(44) == 61
    assert is_cloud(60) and cloud_dest(60) == 41
    assert not is_vine(17)
    assert not is_cloud(4)
    assert vine_dest(5) is None
    assert cloud_dest(5) is None


def test_nearest_vine_above():
    assert nearest_vine_above(0) == 4
    assert nearest_vine_above(4) == 9
    assert nearest_vine_above(36) == 44
    assert nearest_vine_above(44) is None


# ── layout ──────────────────────────────────────────────────────────

def test_corners():
    assert tile_to_coord(1) == (7, 0)
    assert tile_to_coord(8) == (7, 7)
    assert tile_to_coord(9) == (6, 7)
    assert tile_to_coord(64) == (0, 0)


def test_off_board_tile_rejected():
    with pytest.raises(ValueError):
        tile_to_coord(0)
    with pytest.raises(ValueError):
        tile_to_coord(65)


def test_board_rows_snake():
    rows = board_rows()
    assert len(rows) == 8
    assert rows[-1] == [1, 2, 3, 4, 5, 6, 7, 8]
    assert rows[-2] == [16, 15, 14, 13, 12, 11, 10, 9]
    assert rows[0][0] == 64
    assert sorted(t for row in rows for t in row) == list(range(1, 65))
