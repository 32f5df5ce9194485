from random import Random

import pytest
from pydantic import ValidationError

from opentable.rules_schema import EngineConfig, load_config
from opentable.store import InMemoryStore
from opentable.turns import TurnEngine


def test_defaults():
    config = load_config()
    assert config.hand_size == 4
    assert config.result_channel == "game-result"
    assert config.default_save_label == "Saved Game"
    assert config.seed is None


@pytest.mark.parametrize("hand_size", [0, 14])
def test_hand_size_bounds(hand_size):
    with pytest.raises(ValidationError):
        load_config({"hand_size": hand_size})


def test_blank_channel_rejected():
    with pytest.raises(ValidationError):
        EngineConfig(result_channel="  ")


def test_custom_hand_size_is_dealt():
    engine = TurnEngine(InMemoryStore(), config=load_config({"hand_size": 6}), rng=Random(5))
    view = engine.view(engine.deal().id)
    assert len(view.player_hand) == 6
    assert view.opponent_hand_size == 6
    assert view.stock_size == 40


def test_seed_makes_deals_repeatable():
    config = EngineConfig(seed=99)
    first = TurnEngine(InMemoryStore(), config=config)
    second = TurnEngine(InMemoryStore(), config=config)
    assert first.view(first.deal().id).player_hand == second.view(second.deal().id).player_hand
