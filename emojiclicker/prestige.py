from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from emojiclicker.economy import PurchaseResult
from emojiclicker.effect import PrestigeEffect, StartBonus, UnlockFlag, UnlockSkins

if TYPE_CHECKING:
    from emojiclicker.definition import Catalog, GameConfig
    from emojiclicker.state import GameState

logger = logging.getLogger(__name__)

# Flags carried by UnlockFlag nodes.
PET_FLAG = "pet"
SEASONS_FLAG = "seasons"


@dataclass(frozen=True)
class PrestigeNodeDef:
    """A permanent node bought with prestige currency; survives reboot."""

    id: str
    cost: int
    effect: PrestigeEffect
    display_name: str = ""
    icon: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)


@dataclass(frozen=True)
class PrestigeNodeStatus:
    id: str
    display_name: str
    cost: int
    purchased: bool
    affordable: bool


@dataclass(frozen=True)
class PrestigeResult:
    """Outcome of a reboot attempt."""

    success: bool
    gain: int = 0
    start_bonus: float = 0.0
    reason: str = ""


def prestige_gain(state: GameState, config: GameConfig) -> int:
    """Prestige currency a reboot would pay right now.

    Zero below the threshold, then ``floor(sqrt(total / threshold))`` and
    never less than one once the threshold is reached.
    """
    if state.total_earned < config.prestige_threshold:
        return 0
    return max(1, math.floor(math.sqrt(state.total_earned / config.prestige_threshold)))


def start_bonus(state: GameState, catalog: Catalog) -> float:
    return sum(
        e.amount for e in catalog.node_effects(state) if isinstance(e, StartBonus)
    )


def reboot(state: GameState, catalog: Catalog, now: float | None = None) -> PrestigeResult:
    """Trade the current cycle for prestige currency.

    Achievements, prestige balances and purchased nodes survive; currency,
    lifetime totals for the cycle, producers, upgrades and buffs do not.
    Nothing changes when the gain is zero.
    """
    gain = prestige_gain(state, catalog.config)
    if gain <= 0:
        return PrestigeResult(success=False, reason="Not enough total earned to reboot")

    now = time.time() if now is None else now
    state.prestige += gain
    state.prestige_lifetime += gain
    state.reboots += 1

    state.currency = 0.0
    state.total_earned = 0.0
    state.total_clicks = 0
    state.rate = 0.0
    state.click_power = catalog.config.base_click_power
    state.producers = {p.id: 0 for p in catalog.producers}
    state.upgrades = []
    state.buffs = []

    bonus = start_bonus(state, catalog)
    state.currency = bonus
    state.total_earned = bonus

    state.add_milestone(f"Reboot #{state.reboots} (+{gain} Aura)", now)
    logger.info("Reboot #%d gained %d prestige (start bonus %g)", state.reboots, gain, bonus)
    return PrestigeResult(success=True, gain=gain, start_bonus=bonus)


def purchase_node(state: GameState, catalog: Catalog, node_id: str) -> PurchaseResult:
    node = catalog.get_prestige_node(node_id)
    if node is None:
        return PurchaseResult(success=False, item_id=node_id, reason="Unknown node")
    if state.has_node(node_id):
        return PurchaseResult(success=False, item_id=node_id, reason="Already purchased")
    if node.cost > state.prestige_available:
        return PurchaseResult(
            success=False, item_id=node_id, cost=node.cost, reason="Cannot afford"
        )

    state.prestige_spent += node.cost
    state.prestige_nodes.append(node_id)

    effect = node.effect
    if isinstance(effect, UnlockSkins):
        for skin in effect.skins:
            if skin not in state.unlocked_skins:
                state.unlocked_skins.append(skin)
    elif isinstance(effect, UnlockFlag) and effect.flag == PET_FLAG:
        state.pet_hatched = True

    return PurchaseResult(success=True, item_id=node_id, quantity=1, cost=node.cost)


def node_statuses(state: GameState, catalog: Catalog) -> list[PrestigeNodeStatus]:
    available = state.prestige_available
    result: list[PrestigeNodeStatus] = []
    for node in catalog.prestige_nodes:
        purchased = state.has_node(node.id)
        result.append(
            PrestigeNodeStatus(
                id=node.id,
                display_name=node.display_name,
                cost=node.cost,
                purchased=purchased,
                affordable=not purchased and available >= node.cost,
            )
        )
    return result
