from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from emojiclicker.effect import OfflineCap, OfflineMult

if TYPE_CHECKING:
    from emojiclicker.definition import Catalog
    from emojiclicker.pipeline import ProductionPipeline
    from emojiclicker.state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OfflineGrant:
    amount: float = 0.0
    away: float = 0.0
    capped_away: float = 0.0


def offline_cap_hours(state: GameState, catalog: Catalog) -> float:
    """Largest configured cap; caps never stack."""
    hours = catalog.config.offline_default_hours
    for effect in catalog.node_effects(state):
        if isinstance(effect, OfflineCap):
            hours = max(hours, effect.hours)
    return hours


def offline_efficiency(state: GameState, catalog: Catalog) -> float:
    eff = catalog.config.offline_efficiency
    for effect in catalog.node_effects(state):
        if isinstance(effect, OfflineMult):
            eff *= effect.mult
    return eff


def offline_grant(
    state: GameState,
    catalog: Catalog,
    pipeline: ProductionPipeline,
    now: float,
) -> OfflineGrant:
    """Currency owed for the time since ``state.last_tick``. Does not mutate totals."""
    away = now - state.last_tick
    if away < catalog.config.offline_min_seconds:
        return OfflineGrant(away=max(0.0, away))

    capped = min(away, offline_cap_hours(state, catalog) * 3600)
    rate = pipeline.compute_rate(state)
    amount = rate * capped * offline_efficiency(state, catalog)
    return OfflineGrant(amount=max(0.0, amount), away=away, capped_away=capped)


def apply_offline_progress(
    state: GameState,
    catalog: Catalog,
    pipeline: ProductionPipeline,
    now: float,
) -> OfflineGrant:
    """Credit the offline grant once and move ``last_tick`` to *now*."""
    grant = offline_grant(state, catalog, pipeline, now)
    if grant.amount > 0:
        state.currency += grant.amount
        state.total_earned += grant.amount
        logger.info(
            "Offline grant %.1f for %.0fs away (%.0fs counted)",
            grant.amount, grant.away, grant.capped_away,
        )
    state.last_tick = now
    return grant
