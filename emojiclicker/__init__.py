# emojiclicker — Emoji Clicker incremental game engine & headless simulation

from emojiclicker._types import RandomSource, compare
from emojiclicker.requirement import Requirement, Req
from emojiclicker.cost_scaling import CostScaling
from emojiclicker.effect import EffectType, describe_effect
from emojiclicker.producer import ProducerDef, ProducerStatus
from emojiclicker.upgrade import UpgradeDef, UpgradeStatus
from emojiclicker.achievement import AchievementDef, AchievementEngine, AchievementStatus
from emojiclicker.buffs import Buff, BuffKind, BuffStatus
from emojiclicker.state import BUY_MAX, GameState, Settings
from emojiclicker.definition import Catalog, GameConfig, SeasonDef
from emojiclicker.economy import Economy, PurchaseResult
from emojiclicker.prestige import PrestigeNodeDef, PrestigeNodeStatus, PrestigeResult
from emojiclicker.pipeline import ProductionPipeline
from emojiclicker.offline import OfflineGrant
from emojiclicker.persistence import InvalidSaveError, SaveSlot
from emojiclicker.scheduler import SystemClock, TaskScheduler, VirtualClock
from emojiclicker.events import EventKind, EventScheduler, GoldenEffect
from emojiclicker.listener import EngineListener
from emojiclicker.runtime import GameRuntime
from emojiclicker.content import define_game
from emojiclicker.strategy import Strategy, ClickProfile, GreedyCheapest, IdleOnly
from emojiclicker.metrics import MetricsCollector
from emojiclicker.simulation import Simulation
from emojiclicker.report import SimulationReport, build_report
from emojiclicker.formatting import fmt_num, fmt_time, format_text_report

__all__ = [
    # Types
    "RandomSource",
    "compare",
    # Requirements
    "Requirement",
    "Req",
    # Cost
    "CostScaling",
    # Effects
    "EffectType",
    "describe_effect",
    # Data model
    "ProducerDef",
    "ProducerStatus",
    "UpgradeDef",
    "UpgradeStatus",
    "AchievementDef",
    "AchievementEngine",
    "AchievementStatus",
    "Buff",
    "BuffKind",
    "BuffStatus",
    "PrestigeNodeDef",
    "PrestigeNodeStatus",
    "PrestigeResult",
    # Catalog
    "Catalog",
    "GameConfig",
    "SeasonDef",
    "define_game",
    # State
    "BUY_MAX",
    "GameState",
    "Settings",
    # Engine
    "Economy",
    "PurchaseResult",
    "ProductionPipeline",
    "OfflineGrant",
    "InvalidSaveError",
    "SaveSlot",
    "SystemClock",
    "TaskScheduler",
    "VirtualClock",
    "EventKind",
    "EventScheduler",
    "GoldenEffect",
    "EngineListener",
    "GameRuntime",
    # Simulation
    "Strategy",
    "ClickProfile",
    "GreedyCheapest",
    "IdleOnly",
    "MetricsCollector",
    "Simulation",
    "SimulationReport",
    "build_report",
    # Formatting
    "fmt_num",
    "fmt_time",
    "format_text_report",
]
