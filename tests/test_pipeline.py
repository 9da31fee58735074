"""Tests for pipeline module."""
import pytest

from emojiclicker.buffs import BuffKind, add_buff
from emojiclicker.definition import Catalog
from emojiclicker.effect import (
    AchievementDouble,
    AchievementScale,
    ClickFlat,
    ClickMult,
    CritChance,
    GlobalMult,
    ProducerMult,
    Synergy,
)
from emojiclicker.pipeline import ProductionPipeline
from emojiclicker.prestige import PrestigeNodeDef
from emojiclicker.producer import ProducerDef
from emojiclicker.requirement import Req
from emojiclicker.state import GameState
from emojiclicker.upgrade import UpgradeDef


def _catalog() -> Catalog:
    always = Req.clicks(0)
    return Catalog(
        producers=[
            ProducerDef("farm", 100, 10.0),
            ProducerDef("factory", 1000, 50.0),
        ],
        upgrades=[
            UpgradeDef("farm_x2", 1, ProducerMult("farm", 2), always),
            UpgradeDef("syn", 1, Synergy("farm", "factory", 0.05), always),
            UpgradeDef("global", 1, GlobalMult(1.5), always),
            UpgradeDef("ach", 1, AchievementScale(0.01), always),
            UpgradeDef("flat", 1, ClickFlat(1), always),
            UpgradeDef("tap_x2", 1, ClickMult(2), always),
        ],
        prestige_nodes=[
            PrestigeNodeDef("n_global", 1, GlobalMult(2)),
            PrestigeNodeDef("n_click", 1, ClickMult(3)),
            PrestigeNodeDef("n_double", 1, AchievementDouble()),
            PrestigeNodeDef("crit_small", 1, CritChance(0.05, 10)),
            PrestigeNodeDef("crit_big", 1, CritChance(0.10, 20)),
        ],
        all_skins=["😀"],
        default_skins=["😀"],
    )


def _setup():
    catalog = _catalog()
    return ProductionPipeline(catalog), GameState(catalog, now=0)


def test_base_rate():
    pipe, state = _setup()
    state.producers["farm"] = 3
    assert pipe.compute_rate(state) == pytest.approx(30.0)
    assert state.rate == pytest.approx(30.0)


def test_producer_mult_and_synergy():
    pipe, state = _setup()
    state.producers["farm"] = 10
    state.producers["factory"] = 1
    state.upgrades = ["farm_x2", "syn"]
    # farm 10*10*2 = 200, factory 50 * (1 + 10*0.05) = 75
    assert pipe.compute_rate(state) == pytest.approx(275.0)


def test_global_achievement_and_prestige_multipliers():
    pipe, state = _setup()
    state.producers["farm"] = 1
    state.upgrades = ["global", "ach"]
    state.achievements = ["a"] * 10
    state.prestige = 10
    state.prestige_nodes = ["n_global"]
    expected = 10 * 1.5 * (1 + 10 * 0.01) * (1 + 10 * 0.001) * (1.1 * 2)
    assert pipe.compute_rate(state) == pytest.approx(expected)


def test_achievement_doubler():
    pipe, state = _setup()
    state.producers["farm"] = 1
    state.upgrades = ["ach"]
    state.achievements = ["a"] * 10
    state.prestige_nodes = ["n_double"]
    expected = 10 * (1 + 10 * 0.01 * 2) * (1 + 10 * 0.001 * 2)
    assert pipe.compute_rate(state) == pytest.approx(expected)


def test_rate_buff_and_best_rate():
    pipe, state = _setup()
    state.producers["farm"] = 1
    add_buff(state, BuffKind.RATE_MULT, 8, 20, now=0)
    assert pipe.compute_rate(state) == pytest.approx(80.0)
    state.buffs = []
    assert pipe.compute_rate(state) == pytest.approx(10.0)
    assert state.best_rate == pytest.approx(80.0)


def test_click_value():
    pipe, state = _setup()
    assert pipe.compute_click_value(state) == 1.0
    state.upgrades = ["flat", "tap_x2"]
    state.prestige_nodes = ["n_click"]
    state.prestige = 50
    assert pipe.compute_click_value(state) == pytest.approx((1 + 1) * 2 * 3 * 1.5)


def test_click_buff():
    pipe, state = _setup()
    add_buff(state, BuffKind.CLICK_MULT, 20, 10, now=0)
    assert pipe.compute_click_value(state) == 20.0


def test_crit_rolls(scripted):
    pipe, state = _setup()
    state.prestige_nodes = ["crit_small", "crit_big"]
    assert pipe.compute_click_value(state) == 1.0
    assert pipe.compute_click_value(state, scripted([0.99, 0.99])) == 1.0
    assert pipe.compute_click_value(state, scripted([0.0, 0.99])) == 10.0
    # both succeed: the larger multiplier wins, they do not stack
    assert pipe.compute_click_value(state, scripted([0.0, 0.0])) == 20.0
