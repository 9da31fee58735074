from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from emojiclicker.achievement import AchievementDef
    from emojiclicker.events import PendingEvent


class EngineListener:
    """Receives presentation side effects from the runtime.

    Rendering, audio and haptics live outside the engine. Subclass and
    override what you need; every hook defaults to doing nothing. The
    runtime swallows exceptions raised here, so a missing sound device
    never interrupts play.
    """

    def notify(self, text: str) -> None:
        pass

    def achievement_earned(self, achievement: AchievementDef) -> None:
        pass

    def play_sound(self, cue: str) -> None:
        pass

    def haptic(self, ms: int) -> None:
        pass

    def visual(self, effect: str) -> None:
        pass

    def ticker(self, line: str) -> None:
        pass

    def event_spawned(self, event: PendingEvent) -> None:
        pass

    def event_removed(self, event: PendingEvent) -> None:
        pass
