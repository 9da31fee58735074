"""Tests for buffs module."""
import pytest

from emojiclicker.buffs import (
    BuffKind,
    add_buff,
    buff_multiplier,
    buff_statuses,
    prune_expired,
)
from emojiclicker.state import GameState


def test_add_and_multiplier(tiny_catalog):
    state = GameState(tiny_catalog, now=0)
    assert buff_multiplier(state, BuffKind.RATE_MULT) == 1.0
    buff = add_buff(state, BuffKind.RATE_MULT, 8, 20, now=100, label="Hype Rush")
    assert buff.expires == 120
    assert buff_multiplier(state, BuffKind.RATE_MULT) == 8
    assert buff_multiplier(state, BuffKind.CLICK_MULT) == 1.0


def test_same_kind_stacks_multiplicatively(tiny_catalog):
    state = GameState(tiny_catalog, now=0)
    add_buff(state, BuffKind.RATE_MULT, 8, 20, now=0)
    add_buff(state, BuffKind.RATE_MULT, 51, 30, now=0)
    assert buff_multiplier(state, BuffKind.RATE_MULT) == 408


def test_prune_expired(tiny_catalog):
    state = GameState(tiny_catalog, now=0)
    short = add_buff(state, BuffKind.CLICK_MULT, 20, 10, now=0)
    add_buff(state, BuffKind.RATE_MULT, 8, 20, now=0)
    assert prune_expired(state, 9.9) == []
    assert prune_expired(state, 10) == [short]
    assert len(state.buffs) == 1


def test_statuses(tiny_catalog):
    state = GameState(tiny_catalog, now=0)
    add_buff(state, BuffKind.CLICK_MULT, 20, 10, now=0, label="Tap Frenzy")
    (status,) = buff_statuses(state, 4)
    assert status.label == "Tap Frenzy"
    assert status.remaining == pytest.approx(6)
    assert buff_statuses(state, 10) == []
