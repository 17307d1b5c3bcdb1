"""Turn resolver: applies one roll to the current player.

Tile effects are applied in a fixed order and at most one tile effect fires
per landing:

1. frozen players skip the turn without rolling
2. exact landing on the final tile wins; overshooting stays put
3. vine lifts / cloud drops (a shield holds the player on both; it is
   spent only on a cloud)
4. double-roll bonus (double tile or a pending Star Power)
5. swap positions with the opponent
6. freeze the opponent for a turn
7. mystery reward
8. win check
9. periodic event card, then the turn passes on

Nothing here mutates its input: every call returns a :class:`TurnOutcome`
and the caller decides whether to commit it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from sky_garden.board import (
    CLOUDS,
    TOTAL_TILES,
    VINES,
    TileType,
    nearest_vine_above,
    tile_type,
)
from sky_garden.cards import MYSTERY_REWARDS, ROCKET_BOOST, MysteryReward, RewardEffect
from sky_garden.events import EventOutcome, draw_event, is_event_round
from sky_garden.state import PlayerState, RandomSource, TurnSnapshot, with_player

logger = logging.getLogger(__name__)

DIE_FACES = 6


def roll_die(rng: RandomSource) -> int:
    return rng.randint(1, DIE_FACES)


@dataclass(frozen=True)
class TurnOutcome:
    """Everything that happened during one turn."""

    players: tuple[PlayerState, PlayerState]
    current_player: int  # whose turn is next
    turn_count: int
    mover: int
    roll: int | None = None
    landed_on: int | None = None
    tile_effect: TileType | None = None
    bonus_roll: int | None = None
    reward: MysteryReward | None = None
    shield_used: bool = False
    overshoot: bool = False
    skipped: bool = False
    event: EventOutcome | None = None
    winner: int | None = None
    messages: list[str] = field(default_factory=list)

    @property
    def positions(self) -> list[int]:
        return [p.position for p in self.players]


def skip_frozen(snapshot: TurnSnapshot, rng: RandomSource) -> TurnOutcome:
    """Resolve the turn of a frozen player: thaw by one, no roll."""
    p = snapshot.player
    assert p.frozen > 0, "skip_frozen called for a player who is not frozen"
    thawed = replace(p, frozen=p.frozen - 1)
    players = with_player(snapshot.players, thawed)
    messages = [f"❄️ {p.name} is frozen! Skipping turn..."]
    logger.debug("%s frozen, %d turn(s) left after skip", p.name, thawed.frozen)
    return _close_turn(
        snapshot, players, rng, messages,
        mover=p.idx, skipped=True,
    )


def resolve_turn(snapshot: TurnSnapshot, roll: int, rng: RandomSource) -> TurnOutcome:
    """Apply *roll* for the current player of *snapshot*.

    *rng* supplies the bonus die, the mystery reward and the event card.
    """
    if not 1 <= roll <= DIE_FACES:
        raise ValueError(f"roll must be 1..{DIE_FACES}, got {roll}")

    p = snapshot.player
    if p.frozen > 0:
        return skip_frozen(snapshot, rng)

    messages = [f"🎲 {p.name} rolled a {roll}!"]
    target = p.position + roll

    # Exact landing wins on the spot.
    if target == TOTAL_TILES:
        moved = p.moved_to(TOTAL_TILES)
        messages.append(f"🏆 {p.name} reached tile {TOTAL_TILES} and wins!")
        return TurnOutcome(
            players=with_player(snapshot.players, moved),
            current_player=snapshot.current,
            turn_count=snapshot.turn_count + 1,
            mover=p.idx,
            roll=roll,
            landed_on=TOTAL_TILES,
            winner=p.idx,
            messages=messages,
        )

    if target > TOTAL_TILES:
        messages.append(
            f"⛔ {p.name} needs exactly {TOTAL_TILES - p.position} to win! Stays put."
        )
        return _close_turn(
            snapshot, snapshot.players, rng, messages,
            mover=p.idx, roll=roll, overshoot=True,
        )

    p = p.moved_to(target)
    players = with_player(snapshot.players, p)
    kind = tile_type(target)
    details: dict = {"landed_on": target, "roll": roll}

    # ── vine / cloud ──
    # A shielded player neither climbs vines nor falls through clouds.
    if kind is TileType.VINE and not p.shield:
        dest = VINES[target]
        messages.append(f"🌸 {p.name} grabbed a Magic Vine! Soared to tile {dest}!")
        players = with_player(players, p.moved_to(dest))
        details["tile_effect"] = kind

    elif kind is TileType.CLOUD and p.shield:
        messages.append(f"🛡️ {p.name}'s shield blocked the cloud!")
        players = with_player(players, replace(p, shield=False))
        details.update(tile_effect=kind, shield_used=True)

    elif kind is TileType.CLOUD:
        dest = CLOUDS[target]
        messages.append(f"🌪 {p.name} hit a Mischief Cloud! Fell to tile {dest}!")
        players = with_player(players, p.moved_to(dest))
        details["tile_effect"] = kind

    # ── double roll ──
    elif kind is TileType.DOUBLE or p.double_next:
        bonus = roll_die(rng)
        messages.append(f"✨ {p.name} gets a Double Roll!")
        messages.append(f"🎲 Bonus roll: {bonus}!")
        after = p.position + bonus
        if after > TOTAL_TILES:
            messages.append(
                f"⛔ Bonus overshoots tile {TOTAL_TILES}. {p.name} stays on {p.position}."
            )
            after = p.position
        players = with_player(players, replace(p, position=after, double_next=False))
        details.update(tile_effect=TileType.DOUBLE, bonus_roll=bonus)

    # ── swap ──
    elif kind is TileType.SWAP:
        other = players[1 - p.idx]
        messages.append(f"🔄 {p.name} swapped positions with {other.name}!")
        players = with_player(players, p.moved_to(other.position))
        players = with_player(players, other.moved_to(p.position))
        details["tile_effect"] = kind

    # ── freeze ──
    elif kind is TileType.FREEZE:
        other = players[1 - p.idx]
        messages.append(f"🧊 {p.name} froze {other.name} for 1 turn!")
        players = with_player(players, replace(other, frozen=other.frozen + 1))
        details["tile_effect"] = kind

    # ── mystery ──
    elif kind is TileType.MYSTERY:
        reward = rng.choice(MYSTERY_REWARDS)
        messages.append(f"🎁 {p.name} got a mystery reward: {reward.text}")
        players = with_player(players, apply_reward(p, reward))
        details.update(tile_effect=kind, reward=reward)

    logger.debug(
        "%s: %d + %d -> %d (%s), now %s",
        p.name, snapshot.player.position, roll, target, kind.value,
        [q.position for q in players],
    )

    # ── win check ──
    if players[p.idx].position == TOTAL_TILES:
        messages.append(f"🏆 {p.name} reached tile {TOTAL_TILES} and wins!")
        return TurnOutcome(
            players=players,
            current_player=snapshot.current,
            turn_count=snapshot.turn_count + 1,
            mover=p.idx,
            winner=p.idx,
            messages=messages,
            **details,
        )

    return _close_turn(snapshot, players, rng, messages, mover=p.idx, **details)


def apply_reward(p: PlayerState, reward: MysteryReward) -> PlayerState:
    """Return *p* with the mystery *reward* applied."""
    effect = reward.effect
    if effect is RewardEffect.BOOST:
        # Only an exact die roll may finish the race.
        return p.moved_to(min(p.position + ROCKET_BOOST, TOTAL_TILES - 1))
    if effect is RewardEffect.SHIELD:
        return replace(p, shield=True)
    if effect is RewardEffect.DOUBLE_NEXT:
        return replace(p, double_next=True)
    if effect is RewardEffect.VINE:
        source = nearest_vine_above(p.position)
        if source is None:
            return p
        return p.moved_to(VINES[source])
    raise ValueError(f"unknown reward effect: {effect}")


def _close_turn(
    snapshot: TurnSnapshot,
    players: tuple[PlayerState, PlayerState],
    rng: RandomSource,
    messages: list[str],
    **details,
) -> TurnOutcome:
    """Advance the round counter, fire the periodic event, pass the turn."""
    turn_count = snapshot.turn_count + 1
    event = None
    next_player = 1 - snapshot.current

    if is_event_round(turn_count):
        event = draw_event(players, rng)
        players = event.players
        messages.append(event.message)
        if event.extra_turn:
            next_player = snapshot.current

    return TurnOutcome(
        players=players,
        current_player=next_player,
        turn_count=turn_count,
        event=event,
        messages=messages,
        **details,
    )
