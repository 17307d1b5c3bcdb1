"""Event scheduler: when the periodic event fires and what the card does."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sky_garden.board import TOTAL_TILES
from sky_garden.cards import COMEBACK_CARD, EVENT_CARDS, EventCard, EventKind
from sky_garden.state import PlayerState, RandomSource, trailing_index, with_player

logger = logging.getLogger(__name__)

EVENT_EVERY_ROUNDS = 5
COMEBACK_GAP = 15
COMEBACK_LEAP = 8
SHIFT = 3
CHAOS_SPREAD = 5
HALFWAY_TILE = TOTAL_TILES // 2
# Cards never carry anyone onto the final tile.
EVENT_CEILING = TOTAL_TILES - 1

Players = tuple[PlayerState, PlayerState]


def round_number(turn_count: int) -> float:
    """Round shown to players: starts at 1, half a round per resolved turn."""
    return 1 + turn_count / 2


def is_event_round(turn_count: int) -> bool:
    """True when *turn_count* resolved turns close a round divisible by 5."""
    if turn_count <= 0 or turn_count % 2:
        return False
    return (1 + turn_count // 2) % EVENT_EVERY_ROUNDS == 0


@dataclass(frozen=True)
class EventOutcome:
    card: EventCard
    players: Players
    extra_turn: bool = False

    @property
    def message(self) -> str:
        return f"📣 Event: {self.card.text}"


def _clamp(position: int) -> int:
    return max(0, min(EVENT_CEILING, position))


def _shift_both(players: Players, delta: int) -> Players:
    return (
        players[0].moved_to(_clamp(players[0].position + delta)),
        players[1].moved_to(_clamp(players[1].position + delta)),
    )


def draw_event(players: Players, rng: RandomSource) -> EventOutcome:
    """Pick the event for this round and apply it.

    A wide gap between the players always produces the comeback card;
    otherwise one of the six regular cards is drawn at random.
    """
    gap = abs(players[0].position - players[1].position)
    if gap > COMEBACK_GAP:
        logger.debug("gap %d exceeds %d, dealing comeback", gap, COMEBACK_GAP)
        return apply_event(COMEBACK_CARD, players, rng)

    card = rng.choice(EVENT_CARDS)
    logger.debug("event card drawn: %s", card.kind.value)
    return apply_event(card, players, rng)


def apply_event(card: EventCard, players: Players, rng: RandomSource) -> EventOutcome:
    """Apply *card* to both players. Does NOT mutate the records passed in."""
    kind = card.kind

    if kind is EventKind.WINDSTORM:
        return EventOutcome(card, _shift_both(players, -SHIFT))

    if kind is EventKind.CHERRY_BLOSSOM:
        return EventOutcome(card, _shift_both(players, SHIFT))

    if kind is EventKind.CHAOS_DICE:
        a, b = (
            p.moved_to(_clamp(p.position + rng.randint(-CHAOS_SPREAD, CHAOS_SPREAD)))
            for p in players
        )
        return EventOutcome(card, (a, b))

    if kind is EventKind.MIRROR_WORLD:
        a, b = players
        return EventOutcome(card, (a.moved_to(b.position), b.moved_to(a.position)))

    if kind is EventKind.TIME_FREEZE:
        return EventOutcome(card, players, extra_turn=True)

    if kind is EventKind.SHOOTING_STAR:
        p = players[trailing_index(players)]
        if p.position >= HALFWAY_TILE:
            return EventOutcome(card, players)
        return EventOutcome(card, with_player(players, p.moved_to(HALFWAY_TILE)))

    if kind is EventKind.COMEBACK:
        p = players[trailing_index(players)]
        leapt = p.moved_to(min(p.position + COMEBACK_LEAP, EVENT_CEILING))
        return EventOutcome(card, with_player(players, leapt))

    raise ValueError(f"unknown event card: {kind}")
