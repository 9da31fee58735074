"""Tests for effect module."""
import dataclasses

import pytest

from emojiclicker.effect import (
    PRESTIGE_EFFECTS,
    UPGRADE_EFFECTS,
    AchievementDouble,
    ClickFlat,
    CostDiscount,
    EffectType,
    GlobalMult,
    Synergy,
    UnlockSkins,
    describe_effect,
)


def test_type_tags():
    assert ClickFlat(1).type is EffectType.CLICK_FLAT
    assert Synergy("a", "b", 0.05).type is EffectType.SYNERGY
    assert AchievementDouble().type is EffectType.ACHIEVEMENT_DOUBLE


def test_effects_are_frozen():
    effect = GlobalMult(1.1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        effect.mult = 2.0


def test_allowed_kinds():
    assert isinstance(GlobalMult(1.1), UPGRADE_EFFECTS)
    assert isinstance(GlobalMult(1.1), PRESTIGE_EFFECTS)
    assert not isinstance(CostDiscount(0.05), UPGRADE_EFFECTS)
    assert not isinstance(Synergy("a", "b", 0.1), PRESTIGE_EFFECTS)


def test_describe_effect():
    assert describe_effect(Synergy("farm", "factory", 0.05)) == {
        "type": "SYNERGY",
        "source": "farm",
        "target": "factory",
        "pct": 0.05,
    }
    assert describe_effect(UnlockSkins(("👻", "🤖"))) == {
        "type": "UNLOCK_SKINS",
        "skins": ["👻", "🤖"],
    }
    assert describe_effect(AchievementDouble()) == {"type": "ACHIEVEMENT_DOUBLE"}
