"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional, Tuple

from opentable.turns import TurnView

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None, swap_rate: float = 0.5) -> None:
        self._rng = random.Random(seed)
        self.swap_rate = swap_rate

    def choose_source(self, view: TurnView) -> str:
        if view.discard_top is None or self._rng.random() < 0.5:
            return "stock"
        return "discard"

    def decide(self, view: TurnView, revealed: dict) -> Tuple[bool, Optional[int]]:
        if not view.player_hand or self._rng.random() >= self.swap_rate:
            return False, None
        return True, self._rng.randrange(len(view.player_hand))


class PassiveBot(BotStrategy):
    """Always draws from the stock and throws the card away."""

    name = "Passive"
