from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from emojiclicker.buffs import Buff

if TYPE_CHECKING:
    from emojiclicker.definition import Catalog

# Bulk-buy selector value meaning "as many as the budget covers".
BUY_MAX = -1


@dataclass
class Settings:
    """Player preferences persisted with the save."""

    reduced_motion: bool = False
    sound: bool = True
    volume: float = 0.5
    haptics: bool = True
    high_contrast: bool = False
    large_text: bool = False
    sci_notation: bool = False
    bulk_buy: int = 1


@dataclass
class MilestoneEntry:
    text: str
    time: float


class GameState:
    """Mutable runtime container holding one player's progress.

    Owned by a single ``GameRuntime`` and passed explicitly to every engine
    call; nothing here is module-global, so several simulations can run side
    by side.
    """

    def __init__(self, catalog: Catalog, now: float | None = None) -> None:
        now = time.time() if now is None else now
        config = catalog.config

        self.currency: float = 0.0
        self.total_earned: float = 0.0
        self.total_clicks: int = 0
        self.click_power: float = config.base_click_power
        self.rate: float = 0.0
        self.best_rate: float = 0.0

        self.producers: dict[str, int] = {p.id: 0 for p in catalog.producers}
        self.upgrades: list[str] = []
        self.achievements: list[str] = []

        self.prestige: int = 0
        self.prestige_spent: int = 0
        self.prestige_lifetime: int = 0
        self.prestige_nodes: list[str] = []
        self.reboots: int = 0

        self.golden_clicks: int = 0
        self.diamond_count: int = 0
        self.unlocked_skins: list[str] = list(catalog.default_skins)
        self.active_skin: str = self.unlocked_skins[0] if self.unlocked_skins else ""
        self.season: str | None = None
        self.save_name: str = ""
        self.settings = Settings()
        self.secrets: list[str] = []
        self.pet_hatched: bool = False

        self.start_time: float = now
        self.last_tick: float = now
        self.last_save: float = now
        self.time_played: float = 0.0
        self.milestones: list[MilestoneEntry] = []
        self.milestone_limit: int = config.milestone_log_limit

        # Transient: never persisted.
        self.buffs: list[Buff] = []

    def producer_count(self, id: str) -> int:
        return self.producers.get(id, 0)

    def has_upgrade(self, id: str) -> bool:
        return id in self.upgrades

    def has_node(self, id: str) -> bool:
        return id in self.prestige_nodes

    def has_achievement(self, id: str) -> bool:
        return id in self.achievements

    @property
    def prestige_available(self) -> int:
        return self.prestige - self.prestige_spent

    def unlock_secret(self, flag: str) -> bool:
        """Record a found secret. Returns False if it was already known."""
        if flag in self.secrets:
            return False
        self.secrets.append(flag)
        return True

    def add_milestone(self, text: str, now: float) -> None:
        """Append to the milestone log, keeping only the most recent entries."""
        self.milestones.append(MilestoneEntry(text=text, time=now))
        if len(self.milestones) > self.milestone_limit:
            self.milestones = self.milestones[-self.milestone_limit:]
