"""Tests for MCP server tool functions."""
import pytest

from emojiclicker.mcp.server import (
    _GameHolder,
    _tool_buy_prestige_node,
    _tool_buy_producer,
    _tool_buy_upgrade,
    _tool_claim_event,
    _tool_click,
    _tool_export_save,
    _tool_get_achievements,
    _tool_get_game_info,
    _tool_get_game_state,
    _tool_get_prestige_nodes,
    _tool_get_store,
    _tool_get_upgrades,
    _tool_import_save,
    _tool_new_game,
    _tool_reboot,
    _tool_resolve_void,
    _tool_update_settings,
    _tool_wait,
)


@pytest.fixture
def holder(catalog):
    return _GameHolder(catalog=catalog)


def test_game_info(holder):
    info = _tool_get_game_info(holder)
    assert info["name"] == "Emoji Clicker"
    assert len(info["producers"]) == 12
    assert info["upgrade_count"] == 56
    assert info["achievement_count"] == 106


def test_initial_state(holder):
    state = _tool_get_game_state(holder)
    assert state["currency"] == 0
    assert state["click_value"] == 1.0
    assert state["pending_event"] is None
    assert state["reboot_gain"] == 0


def test_click(holder):
    assert "error" in _tool_click(holder, 0)
    assert "error" in _tool_click(holder, 1001)
    result = _tool_click(holder, 20)
    assert result["clicks"] == 20
    assert result["total_earned"] == 20
    assert result["new_balance"] == 20


def test_buy_producer(holder):
    assert "error" in _tool_buy_producer(holder, "nope")
    assert "error" in _tool_buy_producer(holder, "tap_buddy", 0)
    fail = _tool_buy_producer(holder, "tap_buddy")
    assert fail == {"success": False, "reason": "Cannot afford"}

    holder.runtime.state.currency = 60
    result = _tool_buy_producer(holder, "tap_buddy", -1)
    assert result["success"]
    assert result["quantity"] == 3
    assert result["new_count"] == 3


def test_store_and_upgrades(holder):
    store = _tool_get_store(holder)["producers"]
    assert store[0]["id"] == "tap_buddy"
    assert store[0]["next_cost"] == 15
    assert _tool_get_upgrades(holder)["upgrades"] == []

    _tool_click(holder, 10)
    holder.runtime.state.currency = 150
    upgrades = {u["id"]: u for u in _tool_get_upgrades(holder)["upgrades"]}
    assert upgrades["stronger_fingers"]["affordable"]
    assert upgrades["stronger_fingers"]["effect"] == {"type": "CLICK_FLAT", "add": 1}
    assert "error" in _tool_buy_upgrade(holder, "nope")
    assert _tool_buy_upgrade(holder, "stronger_fingers")["success"]


def test_wait(holder):
    assert "error" in _tool_wait(holder, 0)
    assert "error" in _tool_wait(holder, 86401)
    _tool_click(holder, 15)
    _tool_buy_producer(holder, "tap_buddy")
    result = _tool_wait(holder, 10)
    assert result["waited"] == 10
    assert result["rate"] > 0
    assert result["currency"] > 0
    assert "clicks_1" in result["new_achievements"]


def test_achievements_mask_secrets(holder):
    achievements = {a["id"]: a for a in _tool_get_achievements(holder)["achievements"]}
    assert achievements["secret_konami"]["display_name"] == "???"
    assert achievements["clicks_1"]["display_name"] == "1 Taps"


def test_events_and_void(holder):
    assert _tool_claim_event(holder)["success"] is False
    assert "error" in _tool_resolve_void(holder, True)


def test_reboot_and_nodes(holder):
    assert _tool_reboot(holder)["success"] is False
    holder.runtime.state.total_earned = 4e9
    result = _tool_reboot(holder)
    assert result["success"]
    assert result["gain"] == 2
    assert "error" in _tool_buy_prestige_node(holder, "nope")
    assert _tool_buy_prestige_node(holder, "aura_click1")["success"]
    nodes = _tool_get_prestige_nodes(holder)
    assert nodes["available"] == 0
    assert any(n["purchased"] for n in nodes["nodes"])


def test_update_settings(holder):
    assert "error" in _tool_update_settings(holder, {"bogus": 1})
    assert "error" in _tool_update_settings(holder, {"sound": "false"})
    result = _tool_update_settings(holder, {"bulk_buy": 10, "sound": False})
    assert result["settings"]["bulk_buy"] == 10
    assert result["settings"]["sound"] is False


def test_export_import_and_new_game(holder, catalog):
    _tool_click(holder, 30)
    text = _tool_export_save(holder)["save"]

    _tool_new_game(holder)
    assert _tool_get_game_state(holder)["currency"] == 0

    assert _tool_import_save(holder, "garbage")["success"] is False
    result = _tool_import_save(holder, text)
    assert result["success"]
    assert result["currency"] == 30
