from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from emojiclicker.cost_scaling import CostScaling
from emojiclicker.effect import CostDiscount
from emojiclicker.producer import ProducerStatus
from emojiclicker.state import BUY_MAX
from emojiclicker.upgrade import UpgradeStatus

if TYPE_CHECKING:
    from emojiclicker.definition import Catalog
    from emojiclicker.state import GameState


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of a purchase attempt. A failed attempt changed nothing."""

    success: bool
    item_id: str = ""
    quantity: int = 0
    cost: float = 0.0
    reason: str = ""


class Economy:
    """Prices producers and upgrades and applies purchases atomically."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.config = catalog.config
        self.scaling = CostScaling.exponential(catalog.config.cost_growth)

    # ── Pricing ──────────────────────────────────────────────────────

    def discount_factor(self, state: GameState) -> float:
        """1 minus purchased cost discounts, never below the configured floor."""
        factor = 1.0
        for effect in self.catalog.node_effects(state):
            if isinstance(effect, CostDiscount):
                factor -= effect.pct
        return max(self.config.max_discount, factor)

    def cost_of(
        self,
        state: GameState,
        producer_id: str,
        quantity: int = 1,
        owned: int | None = None,
    ) -> float:
        pdef = self.catalog.get_producer(producer_id)
        if pdef is None:
            raise KeyError(producer_id)
        if owned is None:
            owned = state.producer_count(producer_id)
        return self.scaling.total_cost(
            pdef.base_cost, owned, quantity, self.discount_factor(state)
        )

    def max_affordable(
        self, state: GameState, producer_id: str, budget: float | None = None
    ) -> int:
        pdef = self.catalog.get_producer(producer_id)
        if pdef is None:
            raise KeyError(producer_id)
        return self.scaling.max_affordable(
            pdef.base_cost,
            state.producer_count(producer_id),
            state.currency if budget is None else budget,
            self.discount_factor(state),
            self.config.max_affordable_scan,
        )

    def bulk_quantity(self, state: GameState, producer_id: str) -> int:
        """Quantity the store would buy under the current bulk-buy setting."""
        bulk = state.settings.bulk_buy
        if bulk == BUY_MAX:
            return self.max_affordable(state, producer_id)
        return bulk

    # ── Purchases ────────────────────────────────────────────────────

    def purchase_producer(
        self,
        state: GameState,
        producer_id: str,
        quantity: int = 1,
        now: float | None = None,
    ) -> PurchaseResult:
        pdef = self.catalog.get_producer(producer_id)
        if pdef is None:
            return PurchaseResult(success=False, item_id=producer_id, reason="Unknown producer")
        if quantity < 1:
            return PurchaseResult(success=False, item_id=producer_id, reason="Invalid quantity")

        cost = self.cost_of(state, producer_id, quantity)
        if cost > state.currency:
            return PurchaseResult(
                success=False,
                item_id=producer_id,
                quantity=quantity,
                cost=cost,
                reason="Cannot afford",
            )

        state.currency -= cost
        state.producers[producer_id] = state.producer_count(producer_id) + quantity
        if state.producers[producer_id] == quantity:
            state.add_milestone(
                f"First {pdef.display_name}!", time.time() if now is None else now
            )
        return PurchaseResult(
            success=True, item_id=producer_id, quantity=quantity, cost=cost
        )

    def purchase_upgrade(self, state: GameState, upgrade_id: str) -> PurchaseResult:
        udef = self.catalog.get_upgrade(upgrade_id)
        if udef is None:
            return PurchaseResult(success=False, item_id=upgrade_id, reason="Unknown upgrade")
        if state.has_upgrade(upgrade_id):
            return PurchaseResult(success=False, item_id=upgrade_id, reason="Already purchased")
        if not udef.requirement.is_visible(state):
            return PurchaseResult(success=False, item_id=upgrade_id, reason="Locked")
        if udef.cost > state.currency:
            return PurchaseResult(
                success=False, item_id=upgrade_id, cost=udef.cost, reason="Cannot afford"
            )

        state.currency -= udef.cost
        state.upgrades.append(upgrade_id)
        return PurchaseResult(success=True, item_id=upgrade_id, quantity=1, cost=udef.cost)

    # ── Queries ──────────────────────────────────────────────────────

    def producer_statuses(self, state: GameState) -> list[ProducerStatus]:
        result: list[ProducerStatus] = []
        for pdef in self.catalog.producers:
            qty = self.bulk_quantity(state, pdef.id)
            bulk_cost = self.cost_of(state, pdef.id, qty)
            result.append(
                ProducerStatus(
                    id=pdef.id,
                    display_name=pdef.display_name,
                    count=state.producer_count(pdef.id),
                    next_cost=self.cost_of(state, pdef.id, 1),
                    bulk_quantity=qty,
                    bulk_cost=bulk_cost,
                    affordable=state.currency >= bulk_cost,
                )
            )
        return result

    def upgrade_statuses(self, state: GameState) -> list[UpgradeStatus]:
        result: list[UpgradeStatus] = []
        for udef in self.catalog.upgrades:
            purchased = state.has_upgrade(udef.id)
            visible = purchased or udef.requirement.is_visible(state)
            result.append(
                UpgradeStatus(
                    id=udef.id,
                    display_name=udef.display_name,
                    cost=udef.cost,
                    purchased=purchased,
                    visible=visible,
                    unlocked=udef.requirement.evaluate(state),
                    affordable=visible and not purchased and state.currency >= udef.cost,
                )
            )
        return result
