"""Shared fixtures: scripted randomness and small catalogs."""
import pytest

from emojiclicker.content import define_game
from emojiclicker.definition import Catalog, GameConfig
from emojiclicker.producer import ProducerDef


class ScriptedRandom:
    """Replays fixed draws; once exhausted, random() returns *default*.

    The default 0.99 never crits, never finds a diamond and spawns golden
    (not void) events. uniform() always returns the low bound.
    """

    def __init__(self, draws=(), default=0.99):
        self.draws = list(draws)
        self.default = default

    def random(self):
        if self.draws:
            return self.draws.pop(0)
        return self.default

    def uniform(self, a, b):
        return a


@pytest.fixture
def rng():
    return ScriptedRandom()


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def catalog():
    return define_game()


@pytest.fixture
def tiny_catalog():
    """One producer, no upgrades or achievements: rates come out exact."""
    return Catalog(
        config=GameConfig(name="Tiny"),
        producers=[ProducerDef("miner", 10, 2.0, "Miner")],
        all_skins=["😀"],
        default_skins=["😀"],
    )
