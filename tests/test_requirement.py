"""Tests for requirement module."""
import pytest

from emojiclicker._types import compare
from emojiclicker.requirement import Req
from emojiclicker.state import GameState


def test_compare_operators():
    assert compare(5, ">=", 5)
    assert compare(4, "<", 5)
    assert not compare(4, "==", 5)
    assert compare(4, "!=", 5)


def test_compare_unknown_operator():
    with pytest.raises(ValueError):
        compare(1, "=>", 1)


def test_clicks(tiny_catalog):
    state = GameState(tiny_catalog, now=0)
    req = Req.clicks(10)
    assert not req.evaluate(state)
    state.total_clicks = 10
    assert req.evaluate(state)


def test_visible_at_half_threshold(tiny_catalog):
    state = GameState(tiny_catalog, now=0)
    req = Req.clicks(10)
    state.total_clicks = 4
    assert not req.is_visible(state)
    state.total_clicks = 5
    assert req.is_visible(state)
    assert not req.evaluate(state)


def test_total_earned_and_rate(tiny_catalog):
    state = GameState(tiny_catalog, now=0)
    state.total_earned = 1000
    state.rate = 9.5
    assert Req.total_earned(1000).evaluate(state)
    assert not Req.rate(10).evaluate(state)


def test_producer_count(tiny_catalog):
    state = GameState(tiny_catalog, now=0)
    req = Req.count("miner", 25)
    state.producers["miner"] = 24
    assert not req.evaluate(state)
    state.producers["miner"] = 25
    assert req.evaluate(state)


def test_count_of_unknown_producer_is_zero(tiny_catalog):
    state = GameState(tiny_catalog, now=0)
    assert not Req.count("nope", 1).evaluate(state)


def test_golden_reboots_achievements(tiny_catalog):
    state = GameState(tiny_catalog, now=0)
    state.golden_clicks = 5
    state.reboots = 1
    state.achievements = ["a", "b"]
    assert Req.golden_clicks(5).evaluate(state)
    assert Req.reboots(1).evaluate(state)
    assert Req.achievements(2).evaluate(state)
    assert not Req.achievements(3).evaluate(state)


def test_secret(tiny_catalog):
    state = GameState(tiny_catalog, now=0)
    req = Req.secret("konami")
    assert not req.evaluate(state)
    assert not req.is_visible(state)
    state.unlock_secret("konami")
    assert req.evaluate(state)


def test_describe():
    assert Req.clicks(10).describe() == "clicks >= 10"
    assert Req.count("miner", 5).describe() == "miner >= 5"
    assert Req.secret("void").describe() == "secret void"
