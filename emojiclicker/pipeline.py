from __future__ import annotations

from typing import TYPE_CHECKING

from emojiclicker._types import RandomSource
from emojiclicker.buffs import BuffKind, buff_multiplier
from emojiclicker.effect import (
    AchievementDouble,
    AchievementScale,
    ClickFlat,
    ClickMult,
    CritChance,
    GlobalMult,
    ProducerMult,
    Synergy,
)

if TYPE_CHECKING:
    from emojiclicker.definition import Catalog
    from emojiclicker.state import GameState


class ProductionPipeline:
    """Derives the production rate and per-click value from a state.

    Rate phases, in order: per-producer output (base rate, producer
    multipliers, synergy bonus), then the product of global upgrade
    multipliers, the two achievement bonuses, the prestige bonus with its
    node multipliers, and active rate buffs.
    """

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.config = catalog.config

    def achievement_doubler(self, state: GameState) -> float:
        for effect in self.catalog.node_effects(state):
            if isinstance(effect, AchievementDouble):
                return 2.0
        return 1.0

    def prestige_bonus(self, state: GameState) -> float:
        return 1.0 + state.prestige * self.config.prestige_bonus_per_point

    def compute_rate(self, state: GameState) -> float:
        """Compute the rate, store it on *state* and raise the best-rate mark."""
        producer_mult = {p.id: 1.0 for p in self.catalog.producers}
        synergy = {p.id: 0.0 for p in self.catalog.producers}
        global_mult = 1.0
        ach_pct = 0.0

        for effect in self.catalog.upgrade_effects(state):
            if isinstance(effect, ProducerMult):
                producer_mult[effect.producer] = producer_mult.get(effect.producer, 1.0) * effect.mult
            elif isinstance(effect, Synergy):
                synergy[effect.target] = (
                    synergy.get(effect.target, 0.0)
                    + state.producer_count(effect.source) * effect.pct
                )
            elif isinstance(effect, GlobalMult):
                global_mult *= effect.mult
            elif isinstance(effect, AchievementScale):
                ach_pct += effect.pct

        total = 0.0
        for pdef in self.catalog.producers:
            count = state.producer_count(pdef.id)
            if count <= 0:
                continue
            total += (
                pdef.base_rate
                * count
                * producer_mult[pdef.id]
                * (1.0 + synergy[pdef.id])
            )

        achievements = len(state.achievements)
        doubler = self.achievement_doubler(state)
        ach_bonus = 1.0 + achievements * ach_pct * doubler
        ach_base = 1.0 + achievements * self.config.achievement_base_bonus * doubler

        prestige_mult = self.prestige_bonus(state)
        for effect in self.catalog.node_effects(state):
            if isinstance(effect, GlobalMult):
                prestige_mult *= effect.mult

        rate = (
            total
            * global_mult
            * ach_bonus
            * ach_base
            * prestige_mult
            * buff_multiplier(state, BuffKind.RATE_MULT)
        )
        rate = max(0.0, rate)
        state.rate = rate
        state.best_rate = max(state.best_rate, rate)
        return rate

    def crit_multiplier(self, state: GameState, rng: RandomSource | None) -> float:
        """Each crit node draws once; the best successful multiplier applies."""
        if rng is None:
            return 1.0
        crit = 1.0
        for effect in self.catalog.node_effects(state):
            if isinstance(effect, CritChance) and rng.random() < effect.chance:
                crit = max(crit, effect.mult)
        return crit

    def compute_click_value(
        self, state: GameState, rng: RandomSource | None = None
    ) -> float:
        """Value of one click. Without *rng* no crit is rolled."""
        base = state.click_power
        mult = 1.0
        for effect in self.catalog.upgrade_effects(state):
            if isinstance(effect, ClickFlat):
                base += effect.add
            elif isinstance(effect, ClickMult):
                mult *= effect.mult

        for effect in self.catalog.node_effects(state):
            if isinstance(effect, ClickMult):
                mult *= effect.mult

        mult *= buff_multiplier(state, BuffKind.CLICK_MULT)
        value = base * mult * self.crit_multiplier(state, rng) * self.prestige_bonus(state)
        return max(0.0, value)
