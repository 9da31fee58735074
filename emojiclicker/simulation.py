from __future__ import annotations

import math
import random

from emojiclicker.achievement import AchievementDef
from emojiclicker.definition import Catalog
from emojiclicker.listener import EngineListener
from emojiclicker.metrics import MetricsCollector
from emojiclicker.report import SimulationReport, build_report
from emojiclicker.runtime import GameRuntime
from emojiclicker.scheduler import VirtualClock
from emojiclicker.strategy import Strategy

MAX_TICKS = 10_000_000


class _RecordingListener(EngineListener):
    """Forwards achievement grants into the metrics collector."""

    def __init__(self, simulation: Simulation) -> None:
        self.simulation = simulation

    def achievement_earned(self, achievement: AchievementDef) -> None:
        self.simulation.collector.record_achievement(
            self.simulation.elapsed, achievement.id
        )


class Simulation:
    """Orchestrates a headless run of the game on a virtual clock."""

    def __init__(
        self,
        catalog: Catalog,
        strategy: Strategy,
        seconds: float,
        tick_resolution: float = 1.0,
        seed: int | None = None,
    ) -> None:
        if tick_resolution <= 0:
            raise ValueError("tick_resolution must be positive")
        if tick_resolution >= catalog.config.max_frame_delta:
            # Longer frames are treated as suspensions and paid at the offline rate.
            raise ValueError(
                f"tick_resolution must be below {catalog.config.max_frame_delta:g}s"
            )
        self.catalog = catalog
        self.strategy = strategy
        self.seconds = seconds
        self.tick_resolution = tick_resolution

        self.clock = VirtualClock()
        self.start = self.clock.now()
        self.rng = random.Random(seed)
        self.collector = MetricsCollector(snapshot_interval=tick_resolution)
        self.runtime = GameRuntime(
            catalog,
            clock=self.clock,
            rng=self.rng,
            listener=_RecordingListener(self),
        )
        self._run_start = self.start

    @property
    def elapsed(self) -> float:
        return self.clock.now() - self.start

    def run(self) -> SimulationReport:
        runtime = self.runtime
        runtime.boot()
        state = runtime.state
        tick_count = 0
        outcome = "Time limit reached"

        while self.elapsed < self.seconds - 1e-9:
            tick_count += 1
            if tick_count > MAX_TICKS:
                outcome = "Max ticks reached"
                break

            # 1. Advance time
            dt = min(self.tick_resolution, self.seconds - self.elapsed)
            self.clock.advance(dt)
            runtime.tick()

            # 2. Clicks
            for _ in range(self.strategy.get_clicks(state, dt)):
                runtime.click()

            # 3. Random events
            if runtime.pending_event is not None and self.strategy.claim_events():
                result = runtime.claim_event()
                self.collector.record_golden(
                    self.elapsed,
                    result.kind.value if result.kind else "",
                    result.effect.name if result.effect else "",
                )
                if runtime.awaiting_void:
                    runtime.resolve_void(self.strategy.accept_void())

            # 4. Purchases, re-planned after every success
            self._buy()

            # 5. Prestige
            if self.strategy.should_reboot(runtime):
                result = runtime.reboot()
                if result.success:
                    self.collector.record_reboot(
                        self.elapsed, result.gain, self.clock.now() - self._run_start
                    )
                    self._run_start = self.clock.now()
                    state = runtime.state

            # 6. Record metrics
            self.collector.record_tick(state, self.elapsed)

            if math.isnan(state.currency) or math.isinf(state.currency):
                outcome = "Aborted: NaN/Inf detected"
                break

        return self._build_report(outcome)

    def _buy(self) -> None:
        runtime = self.runtime
        bought = True
        while bought:
            bought = False
            for choice in self.strategy.decide_purchases(runtime):
                if choice.kind == "producer":
                    result = runtime.buy_producer(choice.item_id, 1)
                else:
                    result = runtime.buy_upgrade(choice.item_id)
                if result.success:
                    self.collector.record_purchase(
                        runtime.state,
                        self.elapsed,
                        choice.kind,
                        choice.item_id,
                        result.quantity,
                        result.cost,
                    )
                    bought = True
                    break

    def _build_report(self, outcome: str) -> SimulationReport:
        state = self.runtime.state
        return build_report(
            collector=self.collector,
            strategy_description=self.strategy.describe(),
            outcome=outcome,
            total_time=self.elapsed,
            final_currency=state.currency,
            final_rate=state.rate,
            best_rate=state.best_rate,
            total_clicks=state.total_clicks,
            prestige=state.prestige,
        )
