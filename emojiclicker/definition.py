from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from emojiclicker.achievement import AchievementDef
from emojiclicker.effect import (
    PRESTIGE_EFFECTS,
    UPGRADE_EFFECTS,
    PrestigeEffect,
    ProducerMult,
    Synergy,
    UpgradeEffect,
)
from emojiclicker.prestige import PrestigeNodeDef
from emojiclicker.producer import ProducerDef
from emojiclicker.requirement import _ProducerCountRequirement
from emojiclicker.upgrade import UpgradeDef

if TYPE_CHECKING:
    from emojiclicker.state import GameState


@dataclass
class GameConfig:
    """Tunable constants of the economy, the loop and the random events."""

    name: str = "Emoji Clicker"
    base_click_power: float = 1.0
    cost_growth: float = 1.15
    max_discount: float = 0.5
    max_affordable_scan: int = 10_000
    prestige_threshold: float = 1e9
    prestige_bonus_per_point: float = 0.01
    achievement_base_bonus: float = 0.001
    offline_min_seconds: float = 30.0
    offline_default_hours: float = 4.0
    offline_efficiency: float = 0.5
    max_frame_delta: float = 10.0
    save_interval: float = 10.0
    achievement_interval: float = 1.0
    ticker_interval: float = 8.0
    midnight_interval: float = 60.0
    event_min_delay: float = 60.0
    event_max_delay: float = 180.0
    event_min_lifetime: float = 8.0
    event_max_lifetime: float = 12.0
    high_risk_chance: float = 0.05
    milestone_log_limit: int = 100
    idle_secret_seconds: float = 60.0
    diamond_chance: float = 0.001
    rapid_click_window: float = 5.0
    rapid_click_count: int = 50
    overcharge_hold: float = 3.0


@dataclass(frozen=True)
class SeasonDef:
    """Cosmetic theme selectable once the seasons flag is unlocked."""

    id: str
    display_name: str
    icon: str = ""
    emojis: tuple[str, ...] = ()


@dataclass
class Catalog:
    """Complete static definition of the game."""

    config: GameConfig = field(default_factory=GameConfig)
    producers: list[ProducerDef] = field(default_factory=list)
    upgrades: list[UpgradeDef] = field(default_factory=list)
    achievements: list[AchievementDef] = field(default_factory=list)
    prestige_nodes: list[PrestigeNodeDef] = field(default_factory=list)
    all_skins: list[str] = field(default_factory=list)
    default_skins: list[str] = field(default_factory=list)
    seasons: list[SeasonDef] = field(default_factory=list)
    news_lines: list[str] = field(default_factory=list)

    # Lookup dicts built in __post_init__
    _producers_by_id: dict[str, ProducerDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _upgrades_by_id: dict[str, UpgradeDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _achievements_by_id: dict[str, AchievementDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _nodes_by_id: dict[str, PrestigeNodeDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _seasons_by_id: dict[str, SeasonDef] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._producers_by_id = {p.id: p for p in self.producers}
        self._upgrades_by_id = {u.id: u for u in self.upgrades}
        self._achievements_by_id = {a.id: a for a in self.achievements}
        self._nodes_by_id = {n.id: n for n in self.prestige_nodes}
        self._seasons_by_id = {s.id: s for s in self.seasons}

    def get_producer(self, id: str) -> ProducerDef | None:
        return self._producers_by_id.get(id)

    def get_upgrade(self, id: str) -> UpgradeDef | None:
        return self._upgrades_by_id.get(id)

    def get_achievement(self, id: str) -> AchievementDef | None:
        return self._achievements_by_id.get(id)

    def get_prestige_node(self, id: str) -> PrestigeNodeDef | None:
        return self._nodes_by_id.get(id)

    def get_season(self, id: str) -> SeasonDef | None:
        return self._seasons_by_id.get(id)

    def upgrade_effects(self, state: GameState) -> Iterator[UpgradeEffect]:
        """Effects of the upgrades *state* has purchased, in purchase order."""
        for uid in state.upgrades:
            udef = self._upgrades_by_id.get(uid)
            if udef is not None:
                yield udef.effect

    def node_effects(self, state: GameState) -> Iterator[PrestigeEffect]:
        """Effects of the prestige nodes *state* has purchased."""
        for nid in state.prestige_nodes:
            node = self._nodes_by_id.get(nid)
            if node is not None:
                yield node.effect

    def validate(self) -> list[str]:
        """Check for common definition errors. Returns list of error messages."""
        errors: list[str] = []
        producer_ids = {p.id for p in self.producers}

        for label, items in (
            ("producer", self.producers),
            ("upgrade", self.upgrades),
            ("achievement", self.achievements),
            ("prestige node", self.prestige_nodes),
            ("season", self.seasons),
        ):
            seen: set[str] = set()
            for item in items:
                if item.id in seen:
                    errors.append(f"Duplicate {label} ID: {item.id!r}")
                seen.add(item.id)

        for p in self.producers:
            if p.base_cost <= 0 or p.base_rate < 0:
                errors.append(f"Producer {p.id!r} has non-positive cost or negative rate")

        for u in self.upgrades:
            if not isinstance(u.effect, UPGRADE_EFFECTS):
                errors.append(
                    f"Upgrade {u.id!r} has effect {type(u.effect).__name__} "
                    "not allowed on upgrades"
                )
            if isinstance(u.effect, ProducerMult) and u.effect.producer not in producer_ids:
                errors.append(
                    f"Upgrade {u.id!r} targets unknown producer {u.effect.producer!r}"
                )
            if isinstance(u.effect, Synergy):
                for pid in (u.effect.source, u.effect.target):
                    if pid not in producer_ids:
                        errors.append(f"Upgrade {u.id!r} references unknown producer {pid!r}")

        for node in self.prestige_nodes:
            if not isinstance(node.effect, PRESTIGE_EFFECTS):
                errors.append(
                    f"Prestige node {node.id!r} has effect {type(node.effect).__name__} "
                    "not allowed on prestige nodes"
                )
            if node.cost < 0:
                errors.append(f"Prestige node {node.id!r} has negative cost")

        for item in [*self.upgrades, *self.achievements]:
            req = item.requirement
            if isinstance(req, _ProducerCountRequirement) and req.producer_id not in producer_ids:
                errors.append(
                    f"{item.id!r} requires unknown producer {req.producer_id!r}"
                )

        for skin in self.default_skins:
            if skin not in self.all_skins:
                errors.append(f"Default skin {skin!r} is not in the skin list")
        if not self.default_skins:
            errors.append("At least one default skin is required")

        return errors
