from random import Random
from typing import Sequence

import pytest

from opentable.cards import build_catalog
from opentable.deck import DeckRole
from opentable.match import Match
from opentable.store import InMemoryStore
from opentable.turns import TurnEngine


@pytest.fixture
def engine() -> TurnEngine:
    return TurnEngine(InMemoryStore(), rng=Random(11))


@pytest.fixture
def rig(engine):
    """Store a match with chosen piles; unused cards go to the back of the stock."""

    def build(
        *,
        player: Sequence[int],
        opponent: Sequence[int],
        stock_front: Sequence[int] = (),
        discard: Sequence[int] = (),
        fill_stock: bool = True,
        round_number: int = 1,
    ) -> Match:
        placed = list(player) + list(opponent) + list(stock_front) + list(discard)
        stock = list(stock_front)
        if fill_stock:
            stock += [card_id for card_id in build_catalog().ids() if card_id not in placed]
        else:
            # Unused cards sit at the bottom of the open table instead.
            discard = [card_id for card_id in build_catalog().ids() if card_id not in placed] + list(discard)
        decks = engine.decks
        match = Match(
            stock_id=decks.create(DeckRole.STOCK.value, stock).id,
            discard_id=decks.create(DeckRole.DISCARD.value, discard).id,
            player_hand_id=decks.create(DeckRole.PLAYER_HAND.value, player).id,
            opponent_hand_id=decks.create(DeckRole.OPPONENT_HAND.value, opponent).id,
            round_number=round_number,
        )
        return engine.store.save(match)

    return build
