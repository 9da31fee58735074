"""Tests for prestige module."""
from emojiclicker import prestige
from emojiclicker.buffs import BuffKind, add_buff
from emojiclicker.state import GameState


def test_gain_thresholds(catalog):
    state = GameState(catalog, now=0)
    config = catalog.config
    state.total_earned = 9.99e8
    assert prestige.prestige_gain(state, config) == 0
    state.total_earned = 1e9
    assert prestige.prestige_gain(state, config) == 1
    state.total_earned = 3.9e9
    assert prestige.prestige_gain(state, config) == 1
    state.total_earned = 4e9
    assert prestige.prestige_gain(state, config) == 2
    state.total_earned = 1e11
    assert prestige.prestige_gain(state, config) == 10


def test_reboot_below_threshold_changes_nothing(catalog):
    state = GameState(catalog, now=0)
    state.total_earned = 5e8
    state.currency = 123
    result = prestige.reboot(state, catalog, now=10)
    assert not result.success
    assert state.currency == 123
    assert state.reboots == 0


def test_reboot_resets_cycle(catalog):
    state = GameState(catalog, now=0)
    state.total_earned = 4e9
    state.currency = 1e9
    state.total_clicks = 500
    state.producers["tap_buddy"] = 40
    state.upgrades = ["optimism"]
    state.achievements = ["clicks_1"]
    state.prestige_nodes = ["aura_start"]
    state.prestige = 5
    state.prestige_spent = 2
    add_buff(state, BuffKind.RATE_MULT, 8, 20, now=0)

    result = prestige.reboot(state, catalog, now=10)

    assert result.success
    assert result.gain == 2
    assert result.start_bonus == 100
    assert state.prestige == 7
    assert state.prestige_available == 5
    assert state.prestige_lifetime == 2
    assert state.reboots == 1
    assert state.currency == 100
    assert state.total_earned == 100
    assert state.total_clicks == 0
    assert state.producer_count("tap_buddy") == 0
    assert state.upgrades == []
    assert state.buffs == []
    assert state.achievements == ["clicks_1"]
    assert state.prestige_nodes == ["aura_start"]
    assert state.milestones[-1].text == "Reboot #1 (+2 Aura)"


def test_start_bonus_stacks(catalog):
    state = GameState(catalog, now=0)
    state.prestige_nodes = ["aura_start", "aura_start2"]
    assert prestige.start_bonus(state, catalog) == 10100


def test_purchase_node(catalog):
    state = GameState(catalog, now=0)
    state.prestige = 3
    result = prestige.purchase_node(state, catalog, "aura_prod1")
    assert result.success
    assert state.prestige_available == 2
    assert prestige.purchase_node(state, catalog, "aura_prod1").reason == "Already purchased"
    assert prestige.purchase_node(state, catalog, "aura_prod3").reason == "Cannot afford"
    assert prestige.purchase_node(state, catalog, "nope").reason == "Unknown node"
    assert state.prestige_nodes == ["aura_prod1"]


def test_node_unlocks_skins_and_pet(catalog):
    state = GameState(catalog, now=0)
    state.prestige = 10
    prestige.purchase_node(state, catalog, "aura_skin")
    prestige.purchase_node(state, catalog, "aura_pet")
    assert {"🤯", "👻", "🤖"} <= set(state.unlocked_skins)
    assert state.pet_hatched


def test_node_statuses(catalog):
    state = GameState(catalog, now=0)
    state.prestige = 2
    statuses = {s.id: s for s in prestige.node_statuses(state, catalog)}
    assert len(statuses) == 20
    assert statuses["aura_click1"].affordable
    assert not statuses["aura_prod2"].affordable
