from __future__ import annotations

from dataclasses import dataclass

from emojiclicker.effect import UpgradeEffect
from emojiclicker.requirement import Requirement


@dataclass(frozen=True)
class UpgradeDef:
    """Static definition of a one-time upgrade, cleared on reboot."""

    id: str
    cost: float
    effect: UpgradeEffect
    requirement: Requirement
    display_name: str = ""
    icon: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)


@dataclass(frozen=True)
class UpgradeStatus:
    """Read-only snapshot of an upgrade for the upgrades panel."""

    id: str
    display_name: str
    cost: float
    purchased: bool
    visible: bool
    unlocked: bool
    affordable: bool
