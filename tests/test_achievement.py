"""Tests for achievement module."""
from emojiclicker.achievement import AchievementDef, AchievementEngine
from emojiclicker.definition import Catalog
from emojiclicker.requirement import Req
from emojiclicker.state import GameState


def _catalog(*achievements) -> Catalog:
    return Catalog(achievements=list(achievements), all_skins=["😀"], default_skins=["😀"])


def test_grants_once(catalog):
    engine = AchievementEngine(catalog)
    state = GameState(catalog, now=0)
    state.total_clicks = 1
    assert engine.evaluate(state) == ["clicks_1"]
    assert engine.evaluate(state) == []
    assert state.achievements == ["clicks_1"]


def test_catalog_order_within_one_pass(catalog):
    engine = AchievementEngine(catalog)
    state = GameState(catalog, now=0)
    state.total_clicks = 10
    state.total_earned = 100
    assert engine.evaluate(state) == ["clicks_1", "clicks_10", "earned_100"]


def test_later_entries_see_earlier_grants():
    cat = _catalog(
        AchievementDef("first", Req.clicks(1)),
        AchievementDef("collector", Req.achievements(1)),
    )
    state = GameState(cat, now=0)
    state.total_clicks = 1
    assert AchievementEngine(cat).evaluate(state) == ["first", "collector"]


def test_earlier_entries_wait_for_next_pass():
    cat = _catalog(
        AchievementDef("collector", Req.achievements(1)),
        AchievementDef("first", Req.clicks(1)),
    )
    engine = AchievementEngine(cat)
    state = GameState(cat, now=0)
    state.total_clicks = 1
    assert engine.evaluate(state) == ["first"]
    assert engine.evaluate(state) == ["collector"]


def test_callback_receives_definitions(catalog):
    engine = AchievementEngine(catalog)
    state = GameState(catalog, now=0)
    state.unlock_secret("retro")
    seen = []
    engine.evaluate(state, on_earned=seen.append)
    assert [a.id for a in seen] == ["secret_retro"]


def test_never_revoked(catalog):
    engine = AchievementEngine(catalog)
    state = GameState(catalog, now=0)
    state.total_clicks = 1
    engine.evaluate(state)
    state.total_clicks = 0
    engine.evaluate(state)
    assert "clicks_1" in state.achievements


def test_statuses_mark_secrets(catalog):
    engine = AchievementEngine(catalog)
    state = GameState(catalog, now=0)
    statuses = {s.id: s for s in engine.statuses(state)}
    assert statuses["secret_konami"].secret
    assert not statuses["clicks_1"].secret
    assert not statuses["clicks_1"].earned
