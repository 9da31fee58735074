from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from emojiclicker._types import RandomSource
from emojiclicker.buffs import BuffKind, add_buff
from emojiclicker.effect import EventDuration, EventFrequency

if TYPE_CHECKING:
    from emojiclicker.definition import Catalog
    from emojiclicker.state import GameState

logger = logging.getLogger(__name__)

VOID_SECRET = "void"


class EventKind(Enum):
    GOLDEN = "golden"
    VOID = "void"


class GoldenAction(Enum):
    RATE_BUFF = "rate_buff"
    CLICK_BUFF = "click_buff"
    RAIN = "rain"
    INSTANT = "instant"
    GLITCH = "glitch"


@dataclass(frozen=True)
class GoldenEffect:
    """One row of the weighted bonus table.

    ``value`` is the buff multiplier for buffs and the number of seconds of
    production for an instant grant. ``duration`` is in seconds.
    """

    name: str
    description: str
    weight: float
    action: GoldenAction
    value: float = 0.0
    duration: float = 0.0


GOLDEN_EFFECTS: tuple[GoldenEffect, ...] = (
    GoldenEffect("Hype Rush", "+700% EPS for 20s", 30, GoldenAction.RATE_BUFF, 8, 20),
    GoldenEffect("Tap Frenzy", "Clicks 20x for 10s", 30, GoldenAction.CLICK_BUFF, 20, 10),
    GoldenEffect("Emoji Rain", "Clickable emojis fall for 10s!", 25, GoldenAction.RAIN, 2, 10),
    GoldenEffect("Instant Bonus", "Get 10 minutes of EPS!", 10, GoldenAction.INSTANT, 600),
    GoldenEffect("Glitch!", "Something weird happens...", 5, GoldenAction.GLITCH, 0, 5),
)

VOID_BUFF_MULT = 51
VOID_BUFF_SECONDS = 30
VOID_LOSS_PCT = 0.10
VOID_WIN_CHANCE = 0.5


@dataclass(frozen=True)
class PendingEvent:
    kind: EventKind
    spawned: float
    expires: float


@dataclass(frozen=True)
class ClaimResult:
    success: bool
    kind: EventKind | None = None
    effect: GoldenEffect | None = None
    amount: float = 0.0
    reason: str = ""


@dataclass(frozen=True)
class VoidResult:
    accepted: bool
    empowered: bool = False
    loss: float = 0.0


class EventScheduler:
    """Timing and outcomes of golden and void events.

    Holds no timers itself; the runtime arms them on its task scheduler
    with the delays computed here.
    """

    def __init__(
        self,
        catalog: Catalog,
        rng: RandomSource,
        effects: tuple[GoldenEffect, ...] = GOLDEN_EFFECTS,
    ) -> None:
        self.catalog = catalog
        self.config = catalog.config
        self.rng = rng
        self.effects = effects

    def frequency_mult(self, state: GameState) -> float:
        mult = 1.0
        for effect in self.catalog.node_effects(state):
            if isinstance(effect, EventFrequency):
                mult *= effect.mult
        return mult

    def duration_mult(self, state: GameState) -> float:
        mult = 1.0
        for effect in self.catalog.node_effects(state):
            if isinstance(effect, EventDuration):
                mult *= effect.mult
        return mult

    def next_delay(self, state: GameState) -> float:
        base = self.rng.uniform(self.config.event_min_delay, self.config.event_max_delay)
        return base / self.frequency_mult(state)

    def lifetime(self, state: GameState) -> float:
        base = self.rng.uniform(self.config.event_min_lifetime, self.config.event_max_lifetime)
        return base * self.duration_mult(state)

    def spawn(self, state: GameState, now: float) -> PendingEvent:
        kind = EventKind.VOID if self.rng.random() < self.config.high_risk_chance else EventKind.GOLDEN
        return PendingEvent(kind=kind, spawned=now, expires=now + self.lifetime(state))

    def choose_effect(self) -> GoldenEffect:
        """Weighted pick: walk the table subtracting weights until r <= 0."""
        total = sum(e.weight for e in self.effects)
        r = self.rng.random() * total
        for effect in self.effects:
            r -= effect.weight
            if r <= 0:
                return effect
        return self.effects[0]

    def apply_effect(self, state: GameState, effect: GoldenEffect, now: float) -> float:
        """Apply *effect*; returns any currency granted directly."""
        if effect.action is GoldenAction.RATE_BUFF:
            add_buff(state, BuffKind.RATE_MULT, effect.value, effect.duration, now, effect.name)
        elif effect.action is GoldenAction.CLICK_BUFF:
            add_buff(state, BuffKind.CLICK_MULT, effect.value, effect.duration, now, effect.name)
        elif effect.action is GoldenAction.INSTANT:
            amount = state.rate * effect.value
            state.currency += amount
            state.total_earned += amount
            return amount
        return 0.0

    def fire(self, state: GameState, event: PendingEvent, now: float) -> ClaimResult:
        """Claim *event*. Golden events apply a bonus; void events await a choice."""
        state.golden_clicks += 1
        if event.kind is EventKind.VOID:
            return ClaimResult(success=True, kind=EventKind.VOID)
        effect = self.choose_effect()
        amount = self.apply_effect(state, effect, now)
        logger.debug("Golden event: %s (+%g)", effect.name, amount)
        return ClaimResult(success=True, kind=EventKind.GOLDEN, effect=effect, amount=amount)

    def resolve_void(self, state: GameState, accept: bool, now: float) -> VoidResult:
        if not accept:
            return VoidResult(accepted=False)
        state.unlock_secret(VOID_SECRET)
        if self.rng.random() < VOID_WIN_CHANCE:
            add_buff(
                state, BuffKind.RATE_MULT, VOID_BUFF_MULT, VOID_BUFF_SECONDS, now, "VOID POWER"
            )
            return VoidResult(accepted=True, empowered=True)
        loss = state.currency * VOID_LOSS_PCT
        state.currency -= loss
        return VoidResult(accepted=True, loss=loss)
