"""MCP server wrapping GameRuntime for interactive AI playtesting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mcp.server.fastmcp import FastMCP

from emojiclicker.definition import Catalog
from emojiclicker.effect import describe_effect
from emojiclicker.runtime import GameRuntime
from emojiclicker.scheduler import VirtualClock
from emojiclicker.state import BUY_MAX

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Maximum clicks per click() call
_MAX_CLICKS = 1000


@dataclass
class _GameHolder:
    """Holds the catalog, the virtual clock and the active runtime."""

    catalog: Catalog
    clock: VirtualClock = field(default_factory=VirtualClock)
    runtime: GameRuntime | None = None

    def __post_init__(self) -> None:
        if self.runtime is None:
            self.runtime = self._new_runtime()

    def _new_runtime(self) -> GameRuntime:
        runtime = GameRuntime(self.catalog, clock=self.clock)
        runtime.boot()
        return runtime


def _r(value: float) -> float:
    return round(value, 2)


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    catalog = holder.catalog
    return {
        "name": catalog.config.name,
        "producers": [
            {"id": p.id, "display_name": p.display_name, "icon": p.icon,
             "base_cost": p.base_cost, "base_rate": p.base_rate}
            for p in catalog.producers
        ],
        "upgrade_count": len(catalog.upgrades),
        "achievement_count": len(catalog.achievements),
        "prestige_nodes": [n.id for n in catalog.prestige_nodes],
        "prestige_threshold": catalog.config.prestige_threshold,
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    runtime = holder.runtime
    state = runtime.state
    event = runtime.pending_event
    return {
        "currency": _r(state.currency),
        "rate": _r(state.rate),
        "click_value": _r(runtime.click_value()),
        "total_earned": _r(state.total_earned),
        "total_clicks": state.total_clicks,
        "time_played": _r(state.time_played),
        "producers": {k: v for k, v in state.producers.items() if v},
        "upgrades": len(state.upgrades),
        "achievements": len(state.achievements),
        "prestige_available": state.prestige_available,
        "prestige_lifetime": state.prestige_lifetime,
        "reboot_gain": runtime.prestige_gain(),
        "buffs": [
            {"label": b.label, "kind": b.kind.value, "value": b.value,
             "remaining": _r(b.remaining)}
            for b in runtime.buff_statuses()
        ],
        "pending_event": None if event is None else {
            "kind": event.kind.value,
            "expires_in": _r(event.expires - holder.clock.now()),
        },
        "awaiting_void": runtime.awaiting_void,
    }


def _tool_get_store(holder: _GameHolder) -> dict[str, Any]:
    return {
        "producers": [
            {
                "id": p.id,
                "display_name": p.display_name,
                "count": p.count,
                "next_cost": _r(p.next_cost),
                "bulk_quantity": p.bulk_quantity,
                "bulk_cost": _r(p.bulk_cost),
                "affordable": p.affordable,
            }
            for p in holder.runtime.producer_statuses()
        ]
    }


def _tool_get_upgrades(holder: _GameHolder) -> dict[str, Any]:
    result = []
    for u in holder.runtime.upgrade_statuses():
        if not u.visible:
            continue
        udef = holder.catalog.get_upgrade(u.id)
        result.append({
            "id": u.id,
            "display_name": u.display_name,
            "cost": _r(u.cost),
            "purchased": u.purchased,
            "affordable": u.affordable,
            "effect": describe_effect(udef.effect),
        })
    return {"upgrades": result}


def _tool_get_achievements(holder: _GameHolder) -> dict[str, Any]:
    result = []
    for a in holder.runtime.achievement_statuses():
        hidden = a.secret and not a.earned
        result.append({
            "id": a.id,
            "display_name": "???" if hidden else a.display_name,
            "description": "???" if hidden else a.description,
            "earned": a.earned,
        })
    return {"achievements": result}


def _tool_get_prestige_nodes(holder: _GameHolder) -> dict[str, Any]:
    return {
        "available": holder.runtime.state.prestige_available,
        "nodes": [
            {
                "id": n.id,
                "display_name": n.display_name,
                "cost": n.cost,
                "purchased": n.purchased,
                "affordable": n.affordable,
            }
            for n in holder.runtime.prestige_node_statuses()
        ],
    }


def _tool_buy_producer(
    holder: _GameHolder, producer_id: str, quantity: int = 1
) -> dict[str, Any]:
    if holder.catalog.get_producer(producer_id) is None:
        return {"error": f"Unknown producer: {producer_id!r}"}
    if quantity < 1 and quantity != BUY_MAX:
        return {"error": "Quantity must be at least 1, or -1 for max"}

    result = holder.runtime.buy_producer(producer_id, quantity)
    if not result.success:
        return {"success": False, "reason": result.reason}
    return {
        "success": True,
        "producer_id": producer_id,
        "quantity": result.quantity,
        "cost": _r(result.cost),
        "new_count": holder.runtime.state.producer_count(producer_id),
    }


def _tool_buy_upgrade(holder: _GameHolder, upgrade_id: str) -> dict[str, Any]:
    if holder.catalog.get_upgrade(upgrade_id) is None:
        return {"error": f"Unknown upgrade: {upgrade_id!r}"}
    result = holder.runtime.buy_upgrade(upgrade_id)
    if not result.success:
        return {"success": False, "reason": result.reason}
    return {"success": True, "upgrade_id": upgrade_id, "cost": _r(result.cost)}


def _tool_click(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_CLICKS:
        return {"error": f"Count cannot exceed {_MAX_CLICKS}"}

    total = 0.0
    for _ in range(count):
        total += holder.runtime.click()
    return {
        "clicks": count,
        "total_earned": _r(total),
        "new_balance": _r(holder.runtime.state.currency),
    }


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    runtime = holder.runtime
    before = set(runtime.state.achievements)
    runtime.advance(seconds, step=1.0)

    state = runtime.state
    result: dict[str, Any] = {
        "waited": seconds,
        "currency": _r(state.currency),
        "rate": _r(state.rate),
    }
    new_achievements = [a for a in state.achievements if a not in before]
    if new_achievements:
        result["new_achievements"] = new_achievements
    if runtime.pending_event is not None:
        result["pending_event"] = runtime.pending_event.kind.value
    return result


def _tool_claim_event(holder: _GameHolder) -> dict[str, Any]:
    result = holder.runtime.claim_event()
    if not result.success:
        return {"success": False, "reason": result.reason}
    out: dict[str, Any] = {"success": True, "kind": result.kind.value}
    if result.effect is not None:
        out["effect"] = result.effect.name
        out["description"] = result.effect.description
        out["amount"] = _r(result.amount)
    if holder.runtime.awaiting_void:
        out["awaiting_void"] = True
    return out


def _tool_resolve_void(holder: _GameHolder, accept: bool) -> dict[str, Any]:
    if not holder.runtime.awaiting_void:
        return {"error": "No void offer is pending"}
    result = holder.runtime.resolve_void(accept)
    return {
        "accepted": result.accepted,
        "empowered": result.empowered,
        "loss": _r(result.loss),
    }


def _tool_reboot(holder: _GameHolder) -> dict[str, Any]:
    result = holder.runtime.reboot()
    if not result.success:
        return {"success": False, "reason": result.reason}
    return {
        "success": True,
        "gain": result.gain,
        "start_bonus": _r(result.start_bonus),
        "prestige_available": holder.runtime.state.prestige_available,
    }


def _tool_buy_prestige_node(holder: _GameHolder, node_id: str) -> dict[str, Any]:
    if holder.catalog.get_prestige_node(node_id) is None:
        return {"error": f"Unknown node: {node_id!r}"}
    result = holder.runtime.buy_prestige_node(node_id)
    if not result.success:
        return {"success": False, "reason": result.reason}
    return {"success": True, "node_id": node_id, "cost": int(result.cost)}


def _tool_update_settings(holder: _GameHolder, changes: dict[str, Any]) -> dict[str, Any]:
    try:
        settings = holder.runtime.update_settings(**changes)
    except ValueError as exc:
        return {"error": str(exc)}
    return {"settings": vars(settings).copy()}


def _tool_export_save(holder: _GameHolder) -> dict[str, Any]:
    return {"save": holder.runtime.export_save()}


def _tool_import_save(holder: _GameHolder, text: str) -> dict[str, Any]:
    result = holder.runtime.import_save(text)
    if not result.success:
        return {"success": False, "reason": result.reason}
    return {"success": True, "currency": _r(holder.runtime.state.currency)}


def _tool_new_game(holder: _GameHolder) -> dict[str, Any]:
    holder.runtime = holder._new_runtime()
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(catalog: Catalog) -> FastMCP:
    """Create an MCP server wrapping a GameRuntime on a virtual clock."""
    holder = _GameHolder(catalog=catalog)

    mcp = FastMCP(
        name=f"EmojiClicker: {catalog.config.name}",
    )

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get static game overview: producers, content counts, prestige threshold."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get current state: currency, EPS, click value, buffs, pending event."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def get_store() -> dict[str, Any]:
        """List producers with owned count, next cost and bulk cost."""
        return _tool_get_store(holder)

    @mcp.tool()
    def get_upgrades() -> dict[str, Any]:
        """List visible upgrades with cost, effect and purchase state."""
        return _tool_get_upgrades(holder)

    @mcp.tool()
    def get_achievements() -> dict[str, Any]:
        """List achievements; unearned secrets are masked."""
        return _tool_get_achievements(holder)

    @mcp.tool()
    def get_prestige_nodes() -> dict[str, Any]:
        """List Aura tree nodes and available Aura."""
        return _tool_get_prestige_nodes(holder)

    @mcp.tool()
    def buy_producer(producer_id: str, quantity: int = 1) -> dict[str, Any]:
        """Buy producers. quantity=-1 buys as many as affordable."""
        return _tool_buy_producer(holder, producer_id, quantity)

    @mcp.tool()
    def buy_upgrade(upgrade_id: str) -> dict[str, Any]:
        """Buy an upgrade. Returns success/failure with reason."""
        return _tool_buy_upgrade(holder, upgrade_id)

    @mcp.tool()
    def click(count: int = 1) -> dict[str, Any]:
        """Click the big emoji N times (max 1000). Returns total earned."""
        return _tool_click(holder, count)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance game time by the given seconds (max 86400) in 1s ticks."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def claim_event() -> dict[str, Any]:
        """Click the golden or void emoji currently on screen."""
        return _tool_claim_event(holder)

    @mcp.tool()
    def resolve_void(accept: bool) -> dict[str, Any]:
        """Accept or decline the Void's offer after claiming a void event."""
        return _tool_resolve_void(holder, accept)

    @mcp.tool()
    def reboot() -> dict[str, Any]:
        """Reset the run for Aura. Needs 1e9 total emojis earned."""
        return _tool_reboot(holder)

    @mcp.tool()
    def buy_prestige_node(node_id: str) -> dict[str, Any]:
        """Spend Aura on a tree node."""
        return _tool_buy_prestige_node(holder, node_id)

    @mcp.tool()
    def update_settings(changes: dict[str, Any]) -> dict[str, Any]:
        """Change settings, e.g. {"bulk_buy": 10, "sound": false}."""
        return _tool_update_settings(holder, changes)

    @mcp.tool()
    def export_save() -> dict[str, Any]:
        """Export the current game as portable text."""
        return _tool_export_save(holder)

    @mcp.tool()
    def import_save(text: str) -> dict[str, Any]:
        """Replace the current game with exported save text."""
        return _tool_import_save(holder, text)

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Reset the game to initial state."""
        return _tool_new_game(holder)

    return mcp
