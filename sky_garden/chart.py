"""Generate a race chart (position by turn) for a finished game."""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt

from sky_garden.board import TOTAL_TILES
from sky_garden.game import TurnRecord

PLAYER_COLORS = ("#FF88CC", "#7080E0")


def position_series(records: list[TurnRecord]) -> list[list[int]]:
    """Per-player positions after each turn, starting from the start tile."""
    series: list[list[int]] = [[0], [0]]
    for rec in records:
        for idx in (0, 1):
            series[idx].append(rec.board_after[idx])
    return series


def make_race_chart(
    records: list[TurnRecord],
    names: tuple[str, str] = ("Player 1", "Player 2"),
    output_path: str = "race.png",
    title: str = "Sky Garden Race",
) -> str:
    """Plot both players' positions turn by turn and mark the event turns.

    Returns the path to the saved PNG.
    """
    series = position_series(records)
    turns = list(range(len(series[0])))

    fig, ax = plt.subplots(figsize=(10, 5))
    for idx, positions in enumerate(series):
        ax.step(turns, positions, where="post", color=PLAYER_COLORS[idx],
                linewidth=2, label=names[idx])

    # Event turns as faint vertical bands
    for rec in records:
        if rec.event is not None:
            ax.axvline(rec.turn_number, color="#AAAAAA", linestyle=":", linewidth=1)

    winners = [rec for rec in records if rec.is_winning_move]
    if winners:
        win = winners[-1]
        ax.scatter([win.turn_number], [TOTAL_TILES], s=120, marker="*",
                   color=PLAYER_COLORS[win.player], zorder=3)

    ax.set_xlabel("Turn")
    ax.set_ylabel("Tile")
    ax.set_ylim(0, TOTAL_TILES + 2)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.legend(loc="upper left")

    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
