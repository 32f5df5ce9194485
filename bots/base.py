"""Common player strategy interfaces."""

from __future__ import annotations

from typing import Optional, Tuple

from opentable.turns import TurnView


class BotStrategy:
    """Base class for scripted players sitting in the player's seat."""

    name: str = "BaseBot"

    def on_match_start(self, view: TurnView) -> None:
        """Optional hook invoked once a match has been dealt."""
        return None

    def choose_source(self, view: TurnView) -> str:
        """Return 'stock' or 'discard'."""
        return "stock"

    def decide(self, view: TurnView, revealed: dict) -> Tuple[bool, Optional[int]]:
        """Return (swap, hand index to swap out) for the revealed card."""
        return False, None
