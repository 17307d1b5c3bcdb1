"""Board definition and tile lookups for Sky Garden Race."""

from __future__ import annotations

from enum import Enum

TOTAL_TILES = 64
BOARD_COLS = 8

# fmt: off
# Magic vines (climb UP)
VINES: dict[int, int] = {
     4: 18,   9: 25,  20: 38,  33: 52,  44: 61,
}

# Mischief clouds (fall DOWN)
CLOUDS: dict[int, int] = {
    17:  6,  28: 12,  40: 22,  54: 35,  60: 41,
}
# fmt: on

DOUBLE_ROLL_TILES = frozenset({7, 16, 31, 48})
SWAP_TILES = frozenset({13, 29, 46})
FREEZE_TILES = frozenset({23, 37, 55})
MYSTERY_TILES = frozenset({10, 19, 36, 50, 58})


class TileType(str, Enum):
    VINE = "vine"
    CLOUD = "cloud"
    DOUBLE = "double"
    SWAP = "swap"
    FREEZE = "freeze"
    MYSTERY = "mystery"
    NORMAL = "normal"


TILE_ICONS: dict[TileType, str] = {
    TileType.VINE: "🌸",
    TileType.CLOUD: "🌪",
    TileType.DOUBLE: "✨",
    TileType.SWAP: "🔄",
    TileType.FREEZE: "🧊",
    TileType.MYSTERY: "🎁",
    TileType.NORMAL: "",
}


def tile_type(tile: int) -> TileType:
    if tile in VINES:
        return TileType.VINE
    if tile in CLOUDS:
        return TileType.CLOUD
    if tile in DOUBLE_ROLL_TILES:
        return TileType.DOUBLE
    if tile in SWAP_TILES:
        return TileType.SWAP
    if tile in FREEZE_TILES:
        return TileType.FREEZE
    if tile in MYSTERY_TILES:
        return TileType.MYSTERY
    return TileType.NORMAL


def is_vine(tile: int) -> bool:
    return tile in VINES


def is_cloud(tile: int) -> bool:
    return tile in CLOUDS


def vine_dest(tile: int) -> int | None:
    return VINES.get(tile)


def cloud_dest(tile: int) -> int | None:
    return CLOUDS.get(tile)


def nearest_vine_above(position: int) -> int | None:
    """Smallest vine source strictly ahead of *position*, or ``None``."""
    ahead = [src for src in VINES if src > position]
    return min(ahead) if ahead else None


def tile_to_coord(tile: int, cols: int = BOARD_COLS) -> tuple[int, int]:
    """Grid ``(row, col)`` of *tile*, row 0 being the top of the board.

    Tiles snake back and forth: tile 1 sits bottom-left, the second row runs
    right-to-left, and so on.
    """
    if not 1 <= tile <= TOTAL_TILES:
        raise ValueError(f"tile {tile} is off the board")
    idx = tile - 1
    row_from_bottom = idx // cols
    if row_from_bottom % 2 == 0:
        col = idx % cols
    else:
        col = cols - 1 - (idx % cols)
    top_row = (TOTAL_TILES - 1) // cols
    return top_row - row_from_bottom, col


def board_rows(cols: int = BOARD_COLS) -> list[list[int]]:
    """The board as rows of tile numbers, top row first."""
    n_rows = -(-TOTAL_TILES // cols)
    grid: list[list[int]] = [[0] * cols for _ in range(n_rows)]
    for tile in range(1, TOTAL_TILES + 1):
        row, col = tile_to_coord(tile, cols)
        grid[row][col] = tile
    return grid
