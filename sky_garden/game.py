"""Game session holding the two players, the turn, the round and the log."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Protocol

from sky_garden.cards import character_by_id
from sky_garden.events import round_number
from sky_garden.resolver import TurnOutcome, resolve_turn, roll_die, skip_frozen
from sky_garden.state import RandomSource, TurnSnapshot, new_players, with_player

logger = logging.getLogger(__name__)

# Messages kept for the on-screen log.
LOG_LIMIT = 21


class Phase(str, Enum):
    SETUP = "setup"
    GAME = "game"
    WIN = "win"


# ── Structured types ────────────────────────────────────────────────

@dataclass
class ActionResult:
    ok: bool = True
    message: str = ""
    outcome: TurnOutcome | None = None


@dataclass
class TurnRecord:
    """Record of a single resolved turn."""

    turn_number: int
    player: int
    board_before: list[int]
    board_after: list[int]
    roll: int | None
    bonus_roll: int | None
    tile_effect: str | None
    event: str | None
    skipped: bool
    overshoot: bool
    is_winning_move: bool
    messages: list[str]

    @classmethod
    def from_outcome(cls, before: TurnSnapshot, outcome: TurnOutcome) -> TurnRecord:
        return cls(
            turn_number=outcome.turn_count,
            player=outcome.mover,
            board_before=before.positions,
            board_after=outcome.positions,
            roll=outcome.roll,
            bonus_roll=outcome.bonus_roll,
            tile_effect=outcome.tile_effect.value if outcome.tile_effect else None,
            event=outcome.event.card.kind.value if outcome.event else None,
            skipped=outcome.skipped,
            overshoot=outcome.overshoot,
            is_winning_move=outcome.winner is not None,
            messages=list(outcome.messages),
        )


@dataclass
class GameResult:
    winner: int | None  # 0 or 1, or None when the turn limit ran out
    reason: str  # "win" | "max_turns"
    turns: int = 0
    log: list[TurnRecord] = field(default_factory=list)


# ── Observer ────────────────────────────────────────────────────────

class GameObserver(Protocol):
    """Receives a record for every resolved turn."""

    def on_turn(self, record: TurnRecord) -> None: ...


@dataclass
class ListObserver:
    """Default observer, collects records into a list."""

    records: list[TurnRecord] = field(default_factory=list)

    def on_turn(self, record: TurnRecord) -> None:
        self.records.append(record)


# ── Session ─────────────────────────────────────────────────────────

class GameSession:
    """One two-player game, from character selection to the winner."""

    def __init__(
        self,
        rng: RandomSource | None = None,
        observer: GameObserver | None = None,
    ):
        self.rng = rng or random.Random()
        self.observer = observer or ListObserver()
        self.reset()

    def reset(self) -> None:
        self.phase = Phase.SETUP
        self.players = new_players()
        self.current_player = 0
        self.turn_count = 0
        self.dice_value: int | None = None
        self.log: list[str] = []
        self.winner: int | None = None
        if isinstance(self.observer, ListObserver):
            self.observer.records.clear()
        logger.debug("session reset")

    # ── derived state ──

    @property
    def round(self) -> float:
        return round_number(self.turn_count)

    @property
    def snapshot(self) -> TurnSnapshot:
        return TurnSnapshot(self.players, self.current_player, self.turn_count)

    @property
    def positions(self) -> list[int]:
        return [p.position for p in self.players]

    def add_log(self, message: str) -> None:
        self.log.append(message)
        del self.log[:-LOG_LIMIT]

    # ── setup ──

    def select_character(self, player_idx: int, char_id: str) -> ActionResult:
        if self.phase is not Phase.SETUP:
            return ActionResult(ok=False, message="Characters are chosen before the race starts.")
        if player_idx not in (0, 1):
            return ActionResult(ok=False, message=f"No player {player_idx + 1}.")
        try:
            char = character_by_id(char_id)
        except KeyError:
            return ActionResult(ok=False, message=f"Unknown character: {char_id}")

        other = self.players[1 - player_idx]
        if other.character is not None and other.character.id == char.id:
            return ActionResult(ok=False, message=f"{char.name} is taken by {other.name}.")

        chosen = replace(self.players[player_idx], character=char)
        self.players = with_player(self.players, chosen)
        return ActionResult(ok=True, message=f"{chosen.name} is {char.emoji} {char.name}.")

    def start(self) -> ActionResult:
        if self.phase is not Phase.SETUP:
            return ActionResult(ok=False, message="The race has already started.")
        a, b = self.players
        if a.character is None or b.character is None:
            return ActionResult(ok=False, message="Both players must choose a character.")
        if a.character.id == b.character.id:
            return ActionResult(ok=False, message="Players must choose different characters.")
        self.phase = Phase.GAME
        self.add_log("🌸 Sky Garden Race begins!")
        return ActionResult(ok=True, message="Sky Garden Race begins!")

    # ── play ──

    def roll(self, value: int | None = None) -> ActionResult:
        """Play the current player's turn.

        *value* forces the die (the rng is still used for bonus rolls,
        mystery rewards and event cards).
        """
        if self.phase is Phase.SETUP:
            return ActionResult(ok=False, message="The race has not started yet.")
        if self.winner is not None:
            return ActionResult(ok=False, message="The race is over.")

        before = self.snapshot
        if before.player.frozen > 0:
            outcome = skip_frozen(before, self.rng)
        else:
            dice = value if value is not None else roll_die(self.rng)
            self.dice_value = dice
            outcome = resolve_turn(before, dice, self.rng)
            if outcome.bonus_roll is not None:
                self.dice_value = outcome.bonus_roll

        self._commit(outcome)
        self.observer.on_turn(TurnRecord.from_outcome(before, outcome))
        return ActionResult(ok=True, message=" ".join(outcome.messages), outcome=outcome)

    def _commit(self, outcome: TurnOutcome) -> None:
        self.players = outcome.players
        self.current_player = outcome.current_player
        self.turn_count = outcome.turn_count
        for msg in outcome.messages:
            self.add_log(msg)
        if outcome.winner is not None:
            self.winner = outcome.winner
            self.phase = Phase.WIN
            logger.info("%s wins after %d turns", self.players[outcome.winner].name, self.turn_count)


def play_out(session: GameSession, max_turns: int = 1000) -> GameResult:
    """Autoplay a started *session* until someone wins or *max_turns* pass."""
    assert session.phase is not Phase.SETUP, "start the session first"
    while session.winner is None and session.turn_count < max_turns:
        session.roll()
    records = session.observer.records if isinstance(session.observer, ListObserver) else []
    if session.winner is not None:
        return GameResult(winner=session.winner, reason="win", turns=session.turn_count, log=records)
    return GameResult(winner=None, reason="max_turns", turns=session.turn_count, log=records)


def new_session(
    p1: str = "bunny",
    p2: str = "fox",
    seed: int | None = None,
    observer: GameObserver | None = None,
) -> GameSession:
    """A session with characters chosen and the race started."""
    session = GameSession(rng=random.Random(seed), observer=observer)
    for idx, char_id in enumerate((p1, p2)):
        result = session.select_character(idx, char_id)
        if not result.ok:
            raise ValueError(result.message)
    result = session.start()
    if not result.ok:
        raise ValueError(result.message)
    return session
