"""Tests for state module."""
from emojiclicker.definition import GameConfig
from emojiclicker.state import GameState


def test_initial_state(catalog):
    state = GameState(catalog, now=100.0)
    assert state.currency == 0
    assert state.click_power == 1.0
    assert set(state.producers) == {p.id for p in catalog.producers}
    assert all(c == 0 for c in state.producers.values())
    assert state.unlocked_skins == list(catalog.default_skins)
    assert state.active_skin == catalog.default_skins[0]
    assert state.start_time == state.last_tick == 100.0
    assert state.buffs == []


def test_prestige_available(catalog):
    state = GameState(catalog, now=0)
    state.prestige = 10
    state.prestige_spent = 3
    assert state.prestige_available == 7


def test_unlock_secret_once(catalog):
    state = GameState(catalog, now=0)
    assert state.unlock_secret("retro")
    assert not state.unlock_secret("retro")
    assert state.secrets == ["retro"]


def test_milestone_log_is_capped(catalog):
    catalog.config = GameConfig(milestone_log_limit=3)
    state = GameState(catalog, now=0)
    for i in range(5):
        state.add_milestone(f"m{i}", float(i))
    assert [m.text for m in state.milestones] == ["m2", "m3", "m4"]


def test_lookups(catalog):
    state = GameState(catalog, now=0)
    state.upgrades.append("optimism")
    state.prestige_nodes.append("aura_prod1")
    state.achievements.append("clicks_1")
    assert state.has_upgrade("optimism")
    assert state.has_node("aura_prod1")
    assert state.has_achievement("clicks_1")
    assert state.producer_count("nope") == 0
