from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum, auto
from typing import Any, ClassVar


class EffectType(Enum):
    CLICK_FLAT = auto()
    CLICK_MULT = auto()
    PRODUCER_MULT = auto()
    SYNERGY = auto()
    GLOBAL_MULT = auto()
    ACHIEVEMENT_SCALE = auto()
    ACHIEVEMENT_DOUBLE = auto()
    COST_DISCOUNT = auto()
    OFFLINE_CAP = auto()
    OFFLINE_MULT = auto()
    CRIT_CHANCE = auto()
    EVENT_FREQUENCY = auto()
    EVENT_DURATION = auto()
    START_BONUS = auto()
    UNLOCK_SKINS = auto()
    UNLOCK_FLAG = auto()


# Each payload is its own frozen dataclass; the class decides which fields
# exist, so a handler never reads a field that its kind does not carry.


@dataclass(frozen=True)
class ClickFlat:
    add: float
    type: ClassVar[EffectType] = EffectType.CLICK_FLAT


@dataclass(frozen=True)
class ClickMult:
    mult: float
    type: ClassVar[EffectType] = EffectType.CLICK_MULT


@dataclass(frozen=True)
class ProducerMult:
    producer: str
    mult: float
    type: ClassVar[EffectType] = EffectType.PRODUCER_MULT


@dataclass(frozen=True)
class Synergy:
    """Each owned *source* adds *pct* to the output of *target*."""

    source: str
    target: str
    pct: float
    type: ClassVar[EffectType] = EffectType.SYNERGY


@dataclass(frozen=True)
class GlobalMult:
    mult: float
    type: ClassVar[EffectType] = EffectType.GLOBAL_MULT


@dataclass(frozen=True)
class AchievementScale:
    pct: float
    type: ClassVar[EffectType] = EffectType.ACHIEVEMENT_SCALE


@dataclass(frozen=True)
class AchievementDouble:
    type: ClassVar[EffectType] = EffectType.ACHIEVEMENT_DOUBLE


@dataclass(frozen=True)
class CostDiscount:
    pct: float
    type: ClassVar[EffectType] = EffectType.COST_DISCOUNT


@dataclass(frozen=True)
class OfflineCap:
    hours: float
    type: ClassVar[EffectType] = EffectType.OFFLINE_CAP


@dataclass(frozen=True)
class OfflineMult:
    mult: float
    type: ClassVar[EffectType] = EffectType.OFFLINE_MULT


@dataclass(frozen=True)
class CritChance:
    chance: float
    mult: float
    type: ClassVar[EffectType] = EffectType.CRIT_CHANCE


@dataclass(frozen=True)
class EventFrequency:
    mult: float
    type: ClassVar[EffectType] = EffectType.EVENT_FREQUENCY


@dataclass(frozen=True)
class EventDuration:
    mult: float
    type: ClassVar[EffectType] = EffectType.EVENT_DURATION


@dataclass(frozen=True)
class StartBonus:
    amount: float
    type: ClassVar[EffectType] = EffectType.START_BONUS


@dataclass(frozen=True)
class UnlockSkins:
    skins: tuple[str, ...]
    type: ClassVar[EffectType] = EffectType.UNLOCK_SKINS


@dataclass(frozen=True)
class UnlockFlag:
    flag: str
    type: ClassVar[EffectType] = EffectType.UNLOCK_FLAG


UpgradeEffect = ClickFlat | ClickMult | ProducerMult | Synergy | GlobalMult | AchievementScale

PrestigeEffect = (
    GlobalMult
    | ClickMult
    | CostDiscount
    | OfflineCap
    | OfflineMult
    | CritChance
    | EventFrequency
    | EventDuration
    | AchievementDouble
    | StartBonus
    | UnlockSkins
    | UnlockFlag
)

UPGRADE_EFFECTS: tuple[type, ...] = (
    ClickFlat,
    ClickMult,
    ProducerMult,
    Synergy,
    GlobalMult,
    AchievementScale,
)

PRESTIGE_EFFECTS: tuple[type, ...] = (
    GlobalMult,
    ClickMult,
    CostDiscount,
    OfflineCap,
    OfflineMult,
    CritChance,
    EventFrequency,
    EventDuration,
    AchievementDouble,
    StartBonus,
    UnlockSkins,
    UnlockFlag,
)


def describe_effect(effect: UpgradeEffect | PrestigeEffect) -> dict[str, Any]:
    """Flatten an effect into a JSON-friendly dict tagged with its kind."""
    data: dict[str, Any] = {"type": effect.type.name}
    for key, value in asdict(effect).items():
        data[key] = list(value) if isinstance(value, tuple) else value
    return data
