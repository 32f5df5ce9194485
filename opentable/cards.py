"""Card-related data structures and the fixed 52-card catalog."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from .errors import NotFound


class Suit(Enum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        return self.value


RANKS = range(1, 14)

# Named ranks; the rest are shown as numerals.
RANK_NAMES: dict[int, str] = {
    1: "ace",
    11: "jack",
    12: "queen",
    13: "king",
}

CATALOG_SIZE = len(Suit) * len(RANKS)


def rank_name(rank: int) -> str:
    return RANK_NAMES.get(rank, str(rank))


@dataclass(frozen=True)
class Card:
    """Immutable playing card as stored in the catalog."""

    id: int
    rank: int
    suit: Suit

    @property
    def label(self) -> str:
        return f"{rank_name(self.rank)} of {self.suit.value}"

    @property
    def filename(self) -> str:
        return f"{rank_name(self.rank)}_of_{self.suit.value}.svg"


def card_id_for(rank: int, suit: Suit) -> int:
    """Return the catalog id of the card with the given rank and suit."""
    suit_index = list(Suit).index(suit)
    return suit_index * len(RANKS) + rank


class CardCatalog:
    """Process-wide, read-only lookup of the 52 cards."""

    def __init__(self) -> None:
        self._cards: Dict[int, Card] = {}

    def build(self) -> "CardCatalog":
        if len(self._cards) == CATALOG_SIZE:
            return self
        cards = {}
        for suit in Suit:
            for rank in RANKS:
                card = Card(id=card_id_for(rank, suit), rank=rank, suit=suit)
                cards[card.id] = card
        self._cards = cards
        return self

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(sorted(self._cards.values(), key=lambda card: card.id))

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

    def get(self, card_id: int) -> Card:
        try:
            return self._cards[card_id]
        except KeyError:
            raise NotFound(f"Card not found with id: {card_id}") from None

    def find(self, card_id: int) -> Optional[Card]:
        return self._cards.get(card_id)

    def ids(self) -> List[int]:
        return [card.id for card in self]


_CATALOG = CardCatalog()


def build_catalog() -> CardCatalog:
    """Populate the shared catalog once and return it."""
    return _CATALOG.build()


def serialize_card(card: Card) -> dict:
    return {
        "id": card.id,
        "rank": card.rank,
        "suit": card.suit.value,
        "label": card.label,
        "filename": card.filename,
    }


def deserialize_card(payload: Mapping[str, object], catalog: Optional[CardCatalog] = None) -> Card:
    catalog = catalog or build_catalog()
    if "id" in payload:
        return catalog.get(int(payload["id"]))
    suit = Suit(str(payload["suit"]).lower())
    return catalog.get(card_id_for(int(payload["rank"]), suit))


def card_labels(cards: Iterable[Card]) -> list[str]:
    return [card.label for card in cards]
