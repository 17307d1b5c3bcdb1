"""Aggregate statistics over many simulated games."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from sky_garden.game import GameResult


@dataclass
class Summary:
    games: int = 0
    wins: list[int] = field(default_factory=lambda: [0, 0])
    unfinished: int = 0
    average_turns: float = 0.0
    events: Counter = field(default_factory=Counter)
    tile_effects: Counter = field(default_factory=Counter)

    @property
    def first_player_win_rate(self) -> float:
        finished = self.wins[0] + self.wins[1]
        return self.wins[0] / finished if finished else 0.0


def summarize(results: list[GameResult]) -> Summary:
    """Tally winners, game length and how often each card and tile fired."""
    summary = Summary(games=len(results))
    total_turns = 0

    for result in results:
        total_turns += result.turns
        if result.winner is None:
            summary.unfinished += 1
        else:
            summary.wins[result.winner] += 1
        for rec in result.log:
            if rec.event is not None:
                summary.events[rec.event] += 1
            if rec.tile_effect is not None:
                summary.tile_effects[rec.tile_effect] += 1

    if results:
        summary.average_turns = total_turns / len(results)
    return summary
