"""Characters, mystery rewards and event cards."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Character:
    id: str
    emoji: str
    name: str
    color: str


CHARACTERS: tuple[Character, ...] = (
    Character("bunny", "🐰", "Bunny", "#FFB3D9"),
    Character("fox", "🦊", "Fox", "#FFB347"),
    Character("cat", "🐱", "Cat", "#B3D9FF"),
    Character("fairy", "🧚", "Fairy", "#C8B3FF"),
)


def character_by_id(char_id: str) -> Character:
    for char in CHARACTERS:
        if char.id == char_id:
            return char
    raise KeyError(char_id)


# ── Mystery rewards ──────────────────────────────────────────────────

class RewardEffect(str, Enum):
    BOOST = "boost"
    SHIELD = "shield"
    DOUBLE_NEXT = "doubleNext"
    VINE = "vine"


@dataclass(frozen=True)
class MysteryReward:
    icon: str
    text: str
    effect: RewardEffect


MYSTERY_REWARDS: tuple[MysteryReward, ...] = (
    MysteryReward("🚀", "Rocket Boost! Move +6 tiles", RewardEffect.BOOST),
    MysteryReward("🛡️", "Cloud Shield! Immune to next cloud", RewardEffect.SHIELD),
    MysteryReward("⭐", "Star Power! Roll twice next turn", RewardEffect.DOUBLE_NEXT),
    MysteryReward("🌈", "Rainbow Jump! Jump to nearest vine", RewardEffect.VINE),
    MysteryReward("💫", "Lucky Star! Skip any cloud once", RewardEffect.SHIELD),
)

ROCKET_BOOST = 6


# ── Event cards ──────────────────────────────────────────────────────

class EventKind(str, Enum):
    WINDSTORM = "windstorm"
    CHERRY_BLOSSOM = "cherry_blossom"
    CHAOS_DICE = "chaos_dice"
    MIRROR_WORLD = "mirror_world"
    TIME_FREEZE = "time_freeze"
    SHOOTING_STAR = "shooting_star"
    COMEBACK = "comeback"


@dataclass(frozen=True)
class EventCard:
    kind: EventKind
    icon: str
    text: str


EVENT_CARDS: tuple[EventCard, ...] = (
    EventCard(EventKind.WINDSTORM, "🌪", "Windstorm! Both players move back 3 tiles."),
    EventCard(EventKind.CHERRY_BLOSSOM, "🌸", "Cherry Blossom! Both players move forward 3 tiles."),
    EventCard(EventKind.CHAOS_DICE, "🎲", "Chaos Dice! All players re-roll their position (within 5 tiles)."),
    EventCard(EventKind.MIRROR_WORLD, "🔀", "Mirror World! Swap all players' positions!"),
    EventCard(EventKind.TIME_FREEZE, "⏸️", "Time Freeze! Current player gets an extra turn."),
    EventCard(EventKind.SHOOTING_STAR, "🌟", "Shooting Star! Trailing player jumps to halfway point."),
)

COMEBACK_CARD = EventCard(
    EventKind.COMEBACK, "🌟", "Comeback! The trailing player leaps forward 8 tiles!",
)
