from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from emojiclicker.requirement import Requirement

if TYPE_CHECKING:
    from emojiclicker.runtime import GameRuntime
    from emojiclicker.state import GameState


@dataclass(frozen=True)
class PurchaseChoice:
    kind: str  # "producer" or "upgrade"
    item_id: str
    cost: float


@dataclass
class ClickProfile:
    """Configures click behavior for strategies."""

    clicks_per_second: float = 0.0
    active_until: Requirement | None = None

    def get_clicks(self, state: GameState, duration: float) -> int:
        """Number of clicks to make over *duration* seconds."""
        if self.active_until is not None and self.active_until.evaluate(state):
            return 0
        return max(0, int(self.clicks_per_second * duration))


class Strategy(ABC):
    """Base class for simulation strategies."""

    @abstractmethod
    def decide_purchases(self, runtime: GameRuntime) -> list[PurchaseChoice]:
        """Return an ordered list of purchases to attempt."""
        ...

    def get_clicks(self, state: GameState, duration: float) -> int:
        return 0

    def should_reboot(self, runtime: GameRuntime) -> bool:
        return False

    def claim_events(self) -> bool:
        """Whether golden events are clicked when they appear."""
        return True

    def accept_void(self) -> bool:
        return False

    @abstractmethod
    def describe(self) -> str: ...


class GreedyCheapest(Strategy):
    """Buy the cheapest affordable producer or upgrade first."""

    def __init__(
        self,
        click_profile: ClickProfile | None = None,
        upgrades: bool = True,
        reboot_at: int = 0,
        claim: bool = True,
    ) -> None:
        self.click_profile = click_profile
        self.upgrades = upgrades
        # Reboot once the pending gain reaches this many points; 0 never reboots.
        self.reboot_at = reboot_at
        self.claim = claim

    def decide_purchases(self, runtime: GameRuntime) -> list[PurchaseChoice]:
        currency = runtime.state.currency
        choices = [
            PurchaseChoice("producer", p.id, p.next_cost)
            for p in runtime.producer_statuses()
            if p.next_cost <= currency
        ]
        if self.upgrades:
            choices += [
                PurchaseChoice("upgrade", u.id, u.cost)
                for u in runtime.upgrade_statuses()
                if u.affordable
            ]
        return sorted(choices, key=lambda c: c.cost)

    def get_clicks(self, state: GameState, duration: float) -> int:
        if self.click_profile:
            return self.click_profile.get_clicks(state, duration)
        return 0

    def should_reboot(self, runtime: GameRuntime) -> bool:
        return self.reboot_at > 0 and runtime.prestige_gain() >= self.reboot_at

    def claim_events(self) -> bool:
        return self.claim

    def describe(self) -> str:
        parts = ["GreedyCheapest"]
        if self.click_profile and self.click_profile.clicks_per_second:
            parts.append(f"({self.click_profile.clicks_per_second:g} CPS)")
        if not self.upgrades:
            parts.append("no upgrades")
        if self.reboot_at:
            parts.append(f"reboot at {self.reboot_at}")
        return " ".join(parts)


class IdleOnly(Strategy):
    """Never buys anything; measures click income alone."""

    def __init__(self, click_profile: ClickProfile | None = None) -> None:
        self.click_profile = click_profile

    def decide_purchases(self, runtime: GameRuntime) -> list[PurchaseChoice]:
        return []

    def get_clicks(self, state: GameState, duration: float) -> int:
        if self.click_profile:
            return self.click_profile.get_clicks(state, duration)
        return 0

    def claim_events(self) -> bool:
        return False

    def describe(self) -> str:
        return "IdleOnly"
