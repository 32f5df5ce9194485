"""Card scoring and winner helpers."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

from .cards import Card, Suit

# Tens of these suits are the best cards in the game.
RED_TENS = frozenset({Suit.DIAMONDS, Suit.HEARTS})

ACE_SCORE = -5
KING_SCORE = 0
RED_TEN_SCORE = -10
HIGH_CARD_SCORE = 10


class Outcome(Enum):
    PLAYER = "PLAYER"
    COMPUTER = "COMPUTER"
    TIE = "TIE"


def score(card: Card) -> int:
    """Return the points a card adds to its holder's total; first match wins."""
    if card.rank == 1:
        return ACE_SCORE
    if card.rank == 13:
        return KING_SCORE
    if card.rank == 10 and card.suit in RED_TENS:
        return RED_TEN_SCORE
    if 2 <= card.rank <= 9:
        return card.rank
    return HIGH_CARD_SCORE


def hand_score(cards: Iterable[Card]) -> int:
    return sum(score(card) for card in cards)


def worst_card(cards: Sequence[Card]) -> Tuple[Optional[int], Optional[Card], Optional[int]]:
    """Return ``(index, card, score)`` of the highest-scoring card.

    Ties keep the first card found in hand order. An empty hand yields
    ``(None, None, None)``.
    """
    worst_index: Optional[int] = None
    worst: Optional[Card] = None
    worst_score: Optional[int] = None
    for index, card in enumerate(cards):
        card_score = score(card)
        if worst_score is None or card_score > worst_score:
            worst_index, worst, worst_score = index, card, card_score
    return worst_index, worst, worst_score


def decide_winner(player_score: int, computer_score: int) -> Outcome:
    """Lower total wins."""
    if player_score < computer_score:
        return Outcome.PLAYER
    if computer_score < player_score:
        return Outcome.COMPUTER
    return Outcome.TIE
