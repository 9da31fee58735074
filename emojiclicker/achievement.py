from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from emojiclicker.requirement import Requirement, _SecretRequirement

if TYPE_CHECKING:
    from emojiclicker.definition import Catalog
    from emojiclicker.state import GameState


@dataclass(frozen=True)
class AchievementDef:
    """A one-shot badge granted when its requirement is first met."""

    id: str
    requirement: Requirement
    display_name: str = ""
    icon: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)

    @property
    def secret(self) -> bool:
        return isinstance(self.requirement, _SecretRequirement)


@dataclass(frozen=True)
class AchievementStatus:
    id: str
    display_name: str
    description: str
    earned: bool
    secret: bool


class AchievementEngine:
    """Grants achievements whose requirements the current state satisfies."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    def evaluate(
        self,
        state: GameState,
        on_earned: Callable[[AchievementDef], None] | None = None,
    ) -> list[str]:
        """Grant every newly satisfied achievement, in catalog order.

        Earned ids are appended as they are found, so an achievement-count
        requirement later in the catalog sees grants made earlier in the
        same pass. Already-earned ids are skipped, which makes a second call
        on an unchanged state return nothing.
        """
        earned = set(state.achievements)
        new_ids: list[str] = []
        for adef in self.catalog.achievements:
            if adef.id in earned:
                continue
            if not adef.requirement.evaluate(state):
                continue
            state.achievements.append(adef.id)
            earned.add(adef.id)
            new_ids.append(adef.id)
            if on_earned is not None:
                on_earned(adef)
        return new_ids

    def statuses(self, state: GameState) -> list[AchievementStatus]:
        earned = set(state.achievements)
        return [
            AchievementStatus(
                id=a.id,
                display_name=a.display_name,
                description=a.description,
                earned=a.id in earned,
                secret=a.secret,
            )
            for a in self.catalog.achievements
        ]
