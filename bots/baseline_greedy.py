"""Baseline greedy bot: keep the lowest-scoring cards in hand."""

from __future__ import annotations

from typing import List, Optional, Tuple

from opentable.cards import Card, deserialize_card
from opentable.scoring import score, worst_card
from opentable.turns import TurnView

from .base import BotStrategy


def _hand(view: TurnView) -> List[Card]:
    return [deserialize_card(payload) for payload in view.player_hand]


class GreedyBot(BotStrategy):
    name = "Greedy"

    def choose_source(self, view: TurnView) -> str:
        if view.discard_top is None:
            return "stock"
        _, _, worst_score = worst_card(_hand(view))
        top = deserialize_card(view.discard_top)
        if worst_score is not None and score(top) < worst_score:
            return "discard"
        return "stock"

    def decide(self, view: TurnView, revealed: dict) -> Tuple[bool, Optional[int]]:
        index, _, worst_score = worst_card(_hand(view))
        if index is not None and score(deserialize_card(revealed)) < worst_score:
            return True, index
        return False, None
