"""Tests for the built-in catalog and definition validation."""
from emojiclicker.achievement import AchievementDef
from emojiclicker.content import define_game
from emojiclicker.definition import Catalog, GameConfig
from emojiclicker.effect import CostDiscount, ProducerMult, Synergy
from emojiclicker.producer import ProducerDef
from emojiclicker.requirement import Req
from emojiclicker.upgrade import UpgradeDef


def test_catalog_is_valid(catalog):
    assert catalog.validate() == []


def test_catalog_sizes(catalog):
    assert len(catalog.producers) == 12
    assert len(catalog.upgrades) == 56
    assert len(catalog.achievements) == 106
    assert len(catalog.prestige_nodes) == 20
    assert len(catalog.seasons) == 4
    assert len(catalog.news_lines) == 20
    assert sum(1 for a in catalog.achievements if a.secret) == 10


def test_producer_curve(catalog):
    costs = [p.base_cost for p in catalog.producers]
    rates = [p.base_rate for p in catalog.producers]
    assert costs == sorted(costs)
    assert rates == sorted(rates)
    assert catalog.producers[0].display_name == "Tap Buddy"


def test_tiered_upgrades(catalog):
    better = catalog.get_upgrade("better_tap_buddy")
    assert better.cost == 150
    assert better.effect == ProducerMult("tap_buddy", 2)
    assert catalog.get_upgrade("ultra_multiverse").cost == 1.7e13 * 50000


def test_custom_config():
    catalog = define_game(GameConfig(cost_growth=1.2))
    assert catalog.config.cost_growth == 1.2


def test_lookups(catalog):
    assert catalog.get_producer("emoji_farm").icon == "🌾"
    assert catalog.get_achievement("secret_void").display_name == "Void Walker"
    assert catalog.get_prestige_node("aura_pet").cost == 3
    assert catalog.get_season("spooky").display_name == "Spooky Week"
    assert catalog.get_producer("nope") is None


def _base(**kwargs) -> Catalog:
    fields = dict(
        producers=[ProducerDef("a", 10, 1)],
        all_skins=["😀"],
        default_skins=["😀"],
    )
    fields.update(kwargs)
    return Catalog(**fields)


def test_validate_duplicates():
    errors = _base(producers=[ProducerDef("a", 10, 1), ProducerDef("a", 20, 2)]).validate()
    assert any("Duplicate producer" in e for e in errors)


def test_validate_effect_placement():
    errors = _base(upgrades=[UpgradeDef("u", 1, CostDiscount(0.1), Req.clicks(1))]).validate()
    assert any("not allowed on upgrades" in e for e in errors)


def test_validate_unknown_producers():
    errors = _base(
        upgrades=[
            UpgradeDef("u1", 1, ProducerMult("ghost", 2), Req.clicks(1)),
            UpgradeDef("u2", 1, Synergy("a", "ghost", 0.1), Req.count("phantom", 1)),
        ],
        achievements=[AchievementDef("x", Req.count("ghost", 1))],
    ).validate()
    assert len([e for e in errors if "ghost" in e or "phantom" in e]) == 4


def test_validate_skins():
    assert _base(default_skins=[]).validate() == ["At least one default skin is required"]
    errors = _base(default_skins=["🐙"]).validate()
    assert any("not in the skin list" in e for e in errors)
