from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from emojiclicker import prestige
from emojiclicker._types import RandomSource
from emojiclicker.achievement import AchievementDef, AchievementEngine, AchievementStatus
from emojiclicker.buffs import BuffKind, BuffStatus, add_buff, buff_statuses, prune_expired
from emojiclicker.definition import Catalog
from emojiclicker.economy import Economy, PurchaseResult
from emojiclicker.effect import UnlockFlag
from emojiclicker.events import (
    ClaimResult,
    EventKind,
    EventScheduler,
    GoldenAction,
    GoldenEffect,
    PendingEvent,
    VoidResult,
)
from emojiclicker.listener import EngineListener
from emojiclicker.offline import OfflineGrant, apply_offline_progress
from emojiclicker.persistence import InvalidSaveError, dumps, export_text, import_text, loads
from emojiclicker.pipeline import ProductionPipeline
from emojiclicker.prestige import PrestigeNodeStatus, PrestigeResult
from emojiclicker.producer import ProducerStatus
from emojiclicker.scheduler import Clock, SystemClock, TaskHandle, TaskScheduler
from emojiclicker.state import BUY_MAX, GameState, Settings
from emojiclicker.upgrade import UpgradeStatus

if TYPE_CHECKING:
    from emojiclicker.persistence import SaveSlot

logger = logging.getLogger(__name__)

KONAMI_CODE = (38, 38, 40, 40, 37, 39, 37, 39, 66, 65)
KONAMI_SKIN = "🤯"
SPECIAL_SAVE_NAMES = ("emoji", "clicker")
OVERCHARGE_MULT = 5
OVERCHARGE_SECONDS = 5


@dataclass(frozen=True)
class ImportResult:
    success: bool
    reason: str = ""


class GameRuntime:
    """Owns one game state and drives it: the frame tick, periodic tasks,
    random events, purchases and the secret triggers.

    Every method that takes ``now`` falls back to the runtime's clock, so
    tests and simulations drive it with a :class:`VirtualClock`.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        clock: Clock | None = None,
        rng: RandomSource | None = None,
        slot: SaveSlot | None = None,
        listener: EngineListener | None = None,
    ) -> None:
        if catalog is None:
            from emojiclicker.content import define_game

            catalog = define_game()
        errors = catalog.validate()
        if errors:
            raise ValueError(
                "Invalid Catalog:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.catalog = catalog
        self.config = catalog.config
        self.clock = clock or SystemClock()
        self.rng = rng or random.Random()
        self.slot = slot
        self.listener = listener or EngineListener()

        self.pipeline = ProductionPipeline(catalog)
        self.economy = Economy(catalog)
        self.achievements = AchievementEngine(catalog)
        self.events = EventScheduler(catalog, self.rng)
        self.scheduler = TaskScheduler()

        self.state = GameState(catalog, now=self.clock.now())
        self._reset_session(self.clock.now())
        self.booted = False

    def _reset_session(self, now: float) -> None:
        """Clear everything that lives only for one session."""
        self.pending_event: PendingEvent | None = None
        self.awaiting_void = False
        self._event_timer: TaskHandle | None = None
        self._save_timer: TaskHandle | None = None
        self._expiry_timer: TaskHandle | None = None
        self._last_frame = now
        self._last_activity = now
        self._idle_checked = False
        self._rapid_clicks: list[float] = []
        self._konami: list[int] = []
        self.news_index = 0
        self.rain_until = 0.0
        self.retro = False

    # ── Lifecycle ────────────────────────────────────────────────────

    def boot(self, now: float | None = None) -> OfflineGrant | None:
        """Load the save slot (or start fresh) and arm the periodic tasks."""
        now = self._now(now)
        loaded = None
        if self.slot is not None:
            text = self.slot.read()
            if text:
                loaded = loads(text, self.catalog)
        return self._start(loaded, now)

    def _start(self, loaded: GameState | None, now: float) -> OfflineGrant | None:
        self.scheduler.cancel_all()
        self._reset_session(now)

        grant = None
        if loaded is not None:
            self.state = loaded
            grant = self._apply_offline(now)
            logger.info("Loaded save (%d achievements)", len(loaded.achievements))
        else:
            self.state = GameState(self.catalog, now=now)
            self.state.add_milestone("Game started!", now)
            logger.info("Starting a fresh game")

        self.state.last_tick = now
        self.pipeline.compute_rate(self.state)

        self._save_timer = self.scheduler.call_every(
            self.config.save_interval, self._autosave, now
        )
        self.scheduler.call_every(self.config.achievement_interval, self._periodic_checks, now)
        self.scheduler.call_every(self.config.ticker_interval, self._tick_news, now)
        self.scheduler.call_every(self.config.midnight_interval, self._check_midnight, now)
        self._tick_news(now)
        self._schedule_event(now)
        self._check_midnight(now)
        self.booted = True
        return grant

    def tick(self, now: float | None = None) -> float:
        """Advance one frame. Returns the currency accrued by production.

        Frames closer than ``max_frame_delta`` accrue ``rate * dt``. A longer
        gap means the process was suspended, so it is paid through the
        offline grant instead of at full rate.
        """
        now = self._now(now)
        dt = now - self._last_frame
        self._last_frame = now

        prune_expired(self.state, now)
        rate = self.pipeline.compute_rate(self.state)

        earned = 0.0
        if 0 < dt < self.config.max_frame_delta:
            earned = rate * dt
            self.state.currency += earned
            self.state.total_earned += earned
            self.state.time_played += dt
        elif dt >= self.config.max_frame_delta:
            self._apply_offline(now)

        self.scheduler.run_due(now)
        self.state.last_tick = now
        return earned

    def advance(self, seconds: float, step: float = 1.0) -> None:
        """Tick repeatedly through *seconds*; the clock must be a VirtualClock."""
        remaining = seconds
        while remaining > 1e-9:
            dt = min(step, remaining)
            self.clock.advance(dt)  # type: ignore[attr-defined]
            self.tick()
            remaining -= dt

    def save(self, now: float | None = None) -> bool:
        """Write the slot now; the autosave countdown restarts from here."""
        now = self._now(now)
        self.state.last_save = now
        if self._save_timer is not None:
            self.scheduler.reset(self._save_timer, now)
        if self.slot is None:
            return False
        return self.slot.write(dumps(self.state))

    def visibility_changed(self, hidden: bool, now: float | None = None) -> None:
        """Save when hidden; on return, pay the absence as offline progress."""
        now = self._now(now)
        if hidden:
            self.save(now)
            return
        self._apply_offline(now)
        self.pipeline.compute_rate(self.state)
        self._last_frame = now

    # ── Player actions ───────────────────────────────────────────────

    def click(self, now: float | None = None) -> float:
        """Process a click on the big emoji. Returns the amount added."""
        now = self._now(now)
        self._mark_activity(now)
        value = self.pipeline.compute_click_value(self.state, self.rng)
        self.state.currency += value
        self.state.total_earned += value
        self.state.total_clicks += 1

        if self.rng.random() < self.config.diamond_chance:
            self.state.diamond_count += 1
            self._unlock_secret("diamond")
            self._emit("notify", "Rare diamond found!")
            self._sound("bling")

        self._sound("pop")
        self._haptic(8)
        self._track_rapid_click(now)
        return value

    def buy_producer(
        self, producer_id: str, quantity: int | None = None, now: float | None = None
    ) -> PurchaseResult:
        """Buy *quantity* units; None uses the bulk selector, BUY_MAX buys all affordable."""
        if quantity is None:
            quantity = self.state.settings.bulk_buy
        if quantity == BUY_MAX and self.catalog.get_producer(producer_id) is not None:
            quantity = self.economy.max_affordable(self.state, producer_id)
        result = self.economy.purchase_producer(
            self.state, producer_id, quantity, self._now(now)
        )
        if result.success:
            self.pipeline.compute_rate(self.state)
            self._sound("pop")
            self._haptic(15)
        return result

    def buy_upgrade(self, upgrade_id: str) -> PurchaseResult:
        result = self.economy.purchase_upgrade(self.state, upgrade_id)
        if result.success:
            self.pipeline.compute_rate(self.state)
            self._sound("bling")
            self._haptic(20)
        return result

    def reboot(self, now: float | None = None) -> PrestigeResult:
        now = self._now(now)
        result = prestige.reboot(self.state, self.catalog, now)
        if not result.success:
            self._emit("notify", "Need at least 1 billion total emojis to reboot.")
            return result
        self.pipeline.compute_rate(self.state)
        self.save(now)
        self._emit("notify", f"Rebooted! Gained {result.gain} Aura!")
        self._sound("bling")
        return result

    def buy_prestige_node(self, node_id: str) -> PurchaseResult:
        result = prestige.purchase_node(self.state, self.catalog, node_id)
        if result.success:
            self.pipeline.compute_rate(self.state)
            self._sound("bling")
        return result

    def update_settings(self, **changes: Any) -> Settings:
        """Apply setting changes.

        Unknown names, non-boolean toggles or a bad bulk selector raise
        ValueError and leave every setting unchanged.
        """
        settings = self.state.settings
        checked: dict[str, Any] = {}
        for name, value in changes.items():
            if not hasattr(settings, name):
                raise ValueError(f"Unknown setting: {name!r}")
            if name == "volume":
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError("volume must be a number")
                value = min(1.0, max(0.0, float(value)))
            elif name == "bulk_buy":
                if isinstance(value, bool) or not isinstance(value, int) or (
                    value < 1 and value != BUY_MAX
                ):
                    raise ValueError("bulk_buy must be a positive integer or BUY_MAX")
            elif not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false")
            checked[name] = value
        for name, value in checked.items():
            setattr(settings, name, value)
        return settings

    def set_save_name(self, name: str) -> None:
        self.state.save_name = name
        if name.lower() in SPECIAL_SAVE_NAMES:
            self._unlock_secret("namegame")
            self._emit("notify", "Special name detected!")

    def select_skin(self, skin: str) -> bool:
        if skin not in self.state.unlocked_skins:
            return False
        self.state.active_skin = skin
        return True

    def seasons_unlocked(self) -> bool:
        return any(
            isinstance(e, UnlockFlag) and e.flag == prestige.SEASONS_FLAG
            for e in self.catalog.node_effects(self.state)
        )

    def select_season(self, season_id: str | None) -> bool:
        """Pick a cosmetic season, or None to clear it."""
        if season_id is None:
            self.state.season = None
            return True
        if not self.seasons_unlocked() or self.catalog.get_season(season_id) is None:
            return False
        self.state.season = season_id
        return True

    # ── Random events ────────────────────────────────────────────────

    def _schedule_event(self, now: float) -> None:
        delay = self.events.next_delay(self.state)
        self._event_timer = self.scheduler.call_later(delay, self._spawn_event, now)

    def _spawn_event(self, now: float) -> None:
        self._event_timer = None
        if self.pending_event is not None:
            return
        event = self.events.spawn(self.state, now)
        self.pending_event = event
        self._expiry_timer = self.scheduler.call_at(event.expires, self._expire_event)
        self._emit("event_spawned", event)

    def _expire_event(self, now: float) -> None:
        self._expiry_timer = None
        self._remove_event(now)

    def _remove_event(self, now: float) -> None:
        event = self.pending_event
        self.pending_event = None
        if event is not None:
            self._emit("event_removed", event)
        self._schedule_event(now)

    def claim_event(self, now: float | None = None) -> ClaimResult:
        """Click the on-screen event before it expires."""
        now = self._now(now)
        event = self.pending_event
        if event is None:
            return ClaimResult(success=False, reason="No event on screen")
        if self._expiry_timer is not None:
            self._expiry_timer.cancel()
            self._expiry_timer = None

        result = self.events.fire(self.state, event, now)
        if result.kind is EventKind.VOID:
            self.awaiting_void = True
            self._emit("notify", "A rift in emoji-space opens before you...")
        elif result.effect is not None:
            self._show_golden(result.effect, now)

        self._sound("bling")
        self._haptic(30)
        self._remove_event(now)
        self.pipeline.compute_rate(self.state)
        return result

    def _show_golden(self, effect: GoldenEffect, now: float) -> None:
        """Start the runtime-side part of a golden effect and announce it."""
        if effect.action is GoldenAction.RAIN:
            self.rain_until = now + effect.duration
            self._emit("visual", "rain")
        elif effect.action is GoldenAction.GLITCH:
            self._emit("visual", "glitch")
        self._emit("notify", f"{effect.name}: {effect.description}")

    def resolve_void(self, accept: bool, now: float | None = None) -> VoidResult:
        """Answer a claimed void event's offer."""
        now = self._now(now)
        if not self.awaiting_void:
            return VoidResult(accepted=False)
        self.awaiting_void = False
        result = self.events.resolve_void(self.state, accept, now)
        if result.accepted:
            self._check_achievements()
            if result.empowered:
                self._emit("notify", "The Void empowers you! +5000% EPS for 30s!")
            else:
                self._emit("notify", f"The Void takes {result.loss:.0f} emojis from you!")
        self.pipeline.compute_rate(self.state)
        return result

    def catch_rain_emoji(self, now: float | None = None) -> float:
        """Catch one falling emoji during Emoji Rain: worth two clicks."""
        now = self._now(now)
        if now >= self.rain_until:
            return 0.0
        value = self.pipeline.compute_click_value(self.state, self.rng) * 2
        self.state.currency += value
        self.state.total_earned += value
        self._sound("pop")
        return value

    # ── Secrets ──────────────────────────────────────────────────────

    def _unlock_secret(self, flag: str) -> None:
        if self.state.unlock_secret(flag):
            self._check_achievements()

    def _mark_activity(self, now: float) -> None:
        self._last_activity = now
        self._idle_checked = False

    def _track_rapid_click(self, now: float) -> None:
        window = self.config.rapid_click_window
        self._rapid_clicks.append(now)
        self._rapid_clicks = [t for t in self._rapid_clicks if now - t < window]
        if len(self._rapid_clicks) >= self.config.rapid_click_count:
            self._rapid_clicks = []
            self._unlock_secret("speed50")
            effect = self.events.choose_effect()
            self.events.apply_effect(self.state, effect, now)
            self._show_golden(effect, now)
            self.pipeline.compute_rate(self.state)

    def _check_idle(self, now: float) -> None:
        if not self._idle_checked and now - self._last_activity > self.config.idle_secret_seconds:
            self._unlock_secret("idle60")
            self._idle_checked = True

    def _check_midnight(self, now: float) -> None:
        local = time.localtime(now)
        if local.tm_hour == 0 and local.tm_min == 0:
            self._unlock_secret("midnight")
            self._emit("visual", "midnight")

    def konami_key(self, code: int) -> bool:
        """Feed one key code; True when the sequence completes."""
        self._konami.append(code)
        self._konami = self._konami[-len(KONAMI_CODE):]
        if tuple(self._konami) != KONAMI_CODE:
            return False
        self._konami = []
        self._unlock_secret("konami")
        if KONAMI_SKIN not in self.state.unlocked_skins:
            self.state.unlocked_skins.append(KONAMI_SKIN)
        self._emit("notify", f"Konami Code! Unlocked {KONAMI_SKIN} skin!")
        self._sound("bling")
        return True

    def hold(self, seconds: float, now: float | None = None) -> bool:
        """Report a press held for *seconds*; long holds overcharge clicks."""
        if seconds < self.config.overcharge_hold:
            return False
        now = self._now(now)
        self._unlock_secret("overcharge")
        add_buff(
            self.state, BuffKind.CLICK_MULT, OVERCHARGE_MULT, OVERCHARGE_SECONDS, now, "Overcharge"
        )
        self._emit("notify", "Overcharge! 5x clicks for 5s!")
        self._sound("bling")
        return True

    def toggle_retro(self) -> bool:
        self.retro = not self.retro
        self._unlock_secret("retro")
        self._emit("visual", "retro")
        return self.retro

    def open_dev_notes(self) -> None:
        self._unlock_secret("devnotes")

    # ── Save transfer ────────────────────────────────────────────────

    def export_save(self, now: float | None = None) -> str:
        self.save(now)
        return export_text(self.state)

    def import_save(self, text: str, now: float | None = None) -> ImportResult:
        """Replace the game with an exported save and restart from it.

        On any decoding failure the current state is left untouched.
        """
        try:
            imported = import_text(text, self.catalog)
        except InvalidSaveError as exc:
            logger.warning("Rejected save import: %s", exc)
            self._emit("notify", "Invalid save data. Please check and try again.")
            return ImportResult(success=False, reason=str(exc))

        now = self._now(now)
        if self.slot is not None:
            self.slot.write(dumps(imported))
        self._start(imported, now)
        return ImportResult(success=True)

    def hard_reset(self, now: float | None = None) -> None:
        if self.slot is not None:
            self.slot.clear()
        self._start(None, self._now(now))

    # ── Read surface ─────────────────────────────────────────────────

    def producer_statuses(self) -> list[ProducerStatus]:
        return self.economy.producer_statuses(self.state)

    def upgrade_statuses(self) -> list[UpgradeStatus]:
        return self.economy.upgrade_statuses(self.state)

    def achievement_statuses(self) -> list[AchievementStatus]:
        return self.achievements.statuses(self.state)

    def prestige_node_statuses(self) -> list[PrestigeNodeStatus]:
        return prestige.node_statuses(self.state, self.catalog)

    def buff_statuses(self, now: float | None = None) -> list[BuffStatus]:
        return buff_statuses(self.state, self._now(now))

    def prestige_gain(self) -> int:
        return prestige.prestige_gain(self.state, self.config)

    def click_value(self) -> float:
        return self.pipeline.compute_click_value(self.state)

    # ── Internal ─────────────────────────────────────────────────────

    def _now(self, now: float | None) -> float:
        return self.clock.now() if now is None else now

    def _apply_offline(self, now: float) -> OfflineGrant:
        grant = apply_offline_progress(self.state, self.catalog, self.pipeline, now)
        if grant.amount > 0:
            self._emit(
                "notify",
                f"Welcome back! Earned {grant.amount:.0f} emojis while away.",
            )
        return grant

    def _autosave(self, now: float) -> None:
        self.save(now)

    def _periodic_checks(self, now: float) -> None:
        self._check_achievements()
        self._check_idle(now)

    def _check_achievements(self) -> list[str]:
        return self.achievements.evaluate(self.state, on_earned=self._on_achievement)

    def _on_achievement(self, achievement: AchievementDef) -> None:
        self._emit("achievement_earned", achievement)
        self._sound("achieve")

    def _tick_news(self, now: float) -> None:
        lines = self.catalog.news_lines
        if not lines:
            return
        self._emit("ticker", lines[self.news_index % len(lines)])
        self.news_index += 1

    def _sound(self, cue: str) -> None:
        if self.state.settings.sound:
            self._emit("play_sound", cue)

    def _haptic(self, ms: int) -> None:
        if self.state.settings.haptics:
            self._emit("haptic", ms)

    def _emit(self, hook: str, *args: Any) -> None:
        try:
            getattr(self.listener, hook)(*args)
        except Exception:
            logger.debug("Listener hook %s failed", hook, exc_info=True)
