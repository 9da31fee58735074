from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from emojiclicker.state import GameState


@dataclass
class Snapshot:
    time: float
    currency: float
    rate: float
    total_earned: float


@dataclass
class PurchaseEvent:
    time: float
    kind: str  # "producer", "upgrade" or "node"
    item_id: str
    quantity: int
    cost: float
    currency_after: float


@dataclass
class AchievementEvent:
    time: float
    achievement_id: str


@dataclass
class RebootEvent:
    time: float
    gain: int
    run_duration: float


@dataclass
class GoldenEvent:
    time: float
    kind: str
    effect: str = ""


class MetricsCollector:
    """Collects simulation metrics; times are seconds since the run started."""

    def __init__(self, snapshot_interval: float = 1.0) -> None:
        self.snapshot_interval = snapshot_interval
        self._last_snapshot_time: float = -1.0

        self.snapshots: list[Snapshot] = []
        self.purchases: list[PurchaseEvent] = []
        self.achievements: list[AchievementEvent] = []
        self.reboots: list[RebootEvent] = []
        self.golden: list[GoldenEvent] = []

    def record_tick(self, state: GameState, elapsed: float) -> None:
        """Record a snapshot if enough time has passed."""
        if elapsed - self._last_snapshot_time >= self.snapshot_interval:
            self.snapshots.append(
                Snapshot(
                    time=elapsed,
                    currency=state.currency,
                    rate=state.rate,
                    total_earned=state.total_earned,
                )
            )
            self._last_snapshot_time = elapsed

    def record_purchase(
        self,
        state: GameState,
        elapsed: float,
        kind: str,
        item_id: str,
        quantity: int,
        cost: float,
    ) -> None:
        self.purchases.append(
            PurchaseEvent(
                time=elapsed,
                kind=kind,
                item_id=item_id,
                quantity=quantity,
                cost=cost,
                currency_after=state.currency,
            )
        )

    def record_achievement(self, elapsed: float, achievement_id: str) -> None:
        self.achievements.append(AchievementEvent(elapsed, achievement_id))

    def record_reboot(self, elapsed: float, gain: int, run_duration: float) -> None:
        self.reboots.append(RebootEvent(elapsed, gain, run_duration))

    def record_golden(self, elapsed: float, kind: str, effect: str = "") -> None:
        self.golden.append(GoldenEvent(elapsed, kind, effect))
