"""Immutable player records and the snapshot the resolver works on."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol, Sequence, TypeVar

from sky_garden.board import TOTAL_TILES
from sky_garden.cards import Character

T = TypeVar("T")


class RandomSource(Protocol):
    """The slice of :class:`random.Random` the rules engine draws from."""

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...


@dataclass(frozen=True)
class PlayerState:
    """One racer. Replaced, never mutated, as turns resolve."""

    idx: int
    name: str
    character: Character | None = None
    position: int = 0
    frozen: int = 0
    shield: bool = False
    double_next: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.position <= TOTAL_TILES:
            raise ValueError(f"position {self.position} outside 0..{TOTAL_TILES}")

    def moved_to(self, position: int) -> PlayerState:
        return replace(self, position=position)

    @property
    def label(self) -> str:
        if self.character is None:
            return self.name
        return f"{self.character.emoji} {self.name}"


def new_players() -> tuple[PlayerState, PlayerState]:
    return (PlayerState(0, "Player 1"), PlayerState(1, "Player 2"))


@dataclass(frozen=True)
class TurnSnapshot:
    """Both players plus whose turn it is and how many turns have resolved."""

    players: tuple[PlayerState, PlayerState]
    current: int = 0
    turn_count: int = 0

    @property
    def player(self) -> PlayerState:
        return self.players[self.current]

    @property
    def positions(self) -> list[int]:
        return [p.position for p in self.players]


def with_player(
    players: tuple[PlayerState, PlayerState], updated: PlayerState,
) -> tuple[PlayerState, PlayerState]:
    """Return *players* with the record at ``updated.idx`` swapped in."""
    if updated.idx == 0:
        return (updated, players[1])
    return (players[0], updated)


def trailing_index(players: tuple[PlayerState, PlayerState]) -> int:
    # Ties count player 2 as trailing.
    return 0 if players[0].position < players[1].position else 1
