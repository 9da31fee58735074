from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from emojiclicker.state import GameState


class BuffKind(Enum):
    RATE_MULT = "rate_mult"
    CLICK_MULT = "click_mult"


@dataclass
class Buff:
    """A temporary multiplier with an absolute expiry time (epoch seconds)."""

    kind: BuffKind
    value: float
    expires: float
    label: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])


@dataclass(frozen=True)
class BuffStatus:
    label: str
    kind: BuffKind
    value: float
    remaining: float


def add_buff(
    state: GameState,
    kind: BuffKind,
    value: float,
    duration: float,
    now: float,
    label: str = "",
) -> Buff:
    """Attach a buff lasting *duration* seconds from *now*."""
    buff = Buff(kind=kind, value=value, expires=now + duration, label=label)
    state.buffs.append(buff)
    return buff


def prune_expired(state: GameState, now: float) -> list[Buff]:
    """Drop buffs whose expiry is at or before *now*. Returns the removed ones."""
    expired = [b for b in state.buffs if b.expires <= now]
    if expired:
        state.buffs = [b for b in state.buffs if b.expires > now]
    return expired


def buff_multiplier(state: GameState, kind: BuffKind) -> float:
    """Product of all active buffs of *kind*; same-kind buffs stack multiplicatively."""
    mult = 1.0
    for buff in state.buffs:
        if buff.kind is kind:
            mult *= buff.value
    return mult


def remaining(buff: Buff, now: float) -> float:
    return max(0.0, buff.expires - now)


def buff_statuses(state: GameState, now: float) -> list[BuffStatus]:
    return [
        BuffStatus(label=b.label, kind=b.kind, value=b.value, remaining=remaining(b, now))
        for b in state.buffs
        if b.expires > now
    ]
