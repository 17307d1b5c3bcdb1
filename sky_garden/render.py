"""Plain-text board and status rendering for the terminal game."""

from __future__ import annotations

from sky_garden.board import TILE_ICONS, board_rows, tile_type
from sky_garden.game import GameSession, Phase

DICE_FACES = ["", "⚀", "⚁", "⚂", "⚃", "⚄", "⚅"]

MARKERS = ("1", "2")


def _cell(tile: int, positions: list[int]) -> str:
    here = "".join(MARKERS[i] for i, pos in enumerate(positions) if pos == tile)
    icon = TILE_ICONS[tile_type(tile)]
    if here:
        return f"[{here:^2}]{tile:>2}"
    return f" {icon or '·':^2} {tile:>2}"


def render_board(positions: list[int]) -> str:
    """The 8×8 grid, top row first, with player markers on their tiles."""
    lines = []
    for row in board_rows():
        lines.append(" ".join(_cell(tile, positions) for tile in row))
    start = [MARKERS[i] for i, pos in enumerate(positions) if pos == 0]
    if start:
        lines.append(f"start: {' '.join(start)}")
    return "\n".join(lines)


def render_status(session: GameSession) -> str:
    parts = []
    for p in session.players:
        flags = []
        if p.frozen:
            flags.append(f"❄️×{p.frozen}")
        if p.shield:
            flags.append("🛡️")
        if p.double_next:
            flags.append("⭐")
        turn = "▶ " if session.current_player == p.idx and session.phase is Phase.GAME else "  "
        parts.append(f"{turn}{p.label} @ {p.position} {' '.join(flags)}".rstrip())
    dice = DICE_FACES[session.dice_value] if session.dice_value else "-"
    parts.append(f"Round {int(session.round)}   Dice {dice}")
    return "\n".join(parts)


def render(session: GameSession) -> str:
    return "\n\n".join([render_board(session.positions), render_status(session)])
