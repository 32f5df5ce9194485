"""Deck entity and the store-backed deck operations."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import ClassVar, List, Optional, Sequence

from .cards import Card, CardCatalog, build_catalog
from .errors import DataIntegrity, InvalidArgument
from .store import Store


class DeckRole(str, Enum):
    STOCK = "mainDeck"
    DISCARD = "openTableDeck"
    PLAYER_HAND = "playerHand"
    OPPONENT_HAND = "computerHand"


@dataclass
class Deck:
    """Ordered pile of card ids.

    The same structure serves the stock (drawn from the front), the discard
    pile (added to and peeked at the back) and both hands (addressed by index).
    """

    kind: ClassVar[str] = "deck"

    name: str
    card_ids: List[int] = field(default_factory=list)
    id: Optional[str] = None
    # Materialised view of ``card_ids``; rebuilt on load, never stored.
    cards: List[Card] = field(default_factory=list, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.card_ids)

    def is_empty(self) -> bool:
        return not self.card_ids

    def shuffle(self, rng: Random) -> None:
        rng.shuffle(self.card_ids)

    def draw_front(self, count: int) -> List[int]:
        if count < 0:
            raise InvalidArgument("Cannot draw a negative number of cards.")
        drawn = self.card_ids[:count]
        del self.card_ids[: len(drawn)]
        return drawn

    def add_back(self, card_id: int) -> None:
        if card_id in self.card_ids:
            raise DataIntegrity(f"Card {card_id} is already in deck {self.name}.")
        self.card_ids.append(card_id)

    def remove_by_id(self, card_id: int) -> bool:
        try:
            self.card_ids.remove(card_id)
        except ValueError:
            return False
        return True

    def remove_at(self, index: int) -> int:
        return self.card_ids.pop(index)

    def peek_front(self) -> Optional[int]:
        return self.card_ids[0] if self.card_ids else None

    def peek_back(self) -> Optional[int]:
        return self.card_ids[-1] if self.card_ids else None

    def materialize(self, catalog: CardCatalog) -> List[Card]:
        cards = []
        for card_id in self.card_ids:
            card = catalog.find(card_id)
            if card is None:
                raise DataIntegrity(f"Deck {self.name} references unknown card id {card_id}.")
            cards.append(card)
        self.cards = cards
        return cards


class DeckService:
    """Store-backed deck operations addressed by deck id."""

    def __init__(self, store: Store, catalog: Optional[CardCatalog] = None, rng: Optional[Random] = None) -> None:
        self.store = store
        self.catalog = catalog or build_catalog()
        self.rng = rng or Random()

    def create(self, name: str, initial_ids: Sequence[int] = ()) -> Deck:
        deck = Deck(name=name, card_ids=list(initial_ids))
        return self.save(deck)

    def get(self, deck_id: str) -> Deck:
        deck: Deck = self.store.load(Deck.kind, deck_id)
        deck.materialize(self.catalog)
        return deck

    def save(self, deck: Deck) -> Deck:
        stored = self.store.save(dataclasses.replace(deck, cards=[]))
        deck.id = stored.id
        deck.materialize(self.catalog)
        return deck

    def delete(self, deck_id: str) -> None:
        self.store.delete(Deck.kind, deck_id)

    def shuffle(self, deck_id: str) -> Deck:
        deck = self.get(deck_id)
        deck.shuffle(self.rng)
        return self.save(deck)

    def draw_front(self, deck_id: str, count: int) -> List[int]:
        deck = self.get(deck_id)
        drawn = deck.draw_front(count)
        self.save(deck)
        return drawn

    def add_back(self, deck_id: str, card: Card) -> Deck:
        deck = self.get(deck_id)
        deck.add_back(card.id)
        return self.save(deck)

    def remove_by_id(self, deck_id: str, card_id: int) -> Deck:
        deck = self.get(deck_id)
        if deck.remove_by_id(card_id):
            self.save(deck)
        return deck

    def peek_front(self, deck_id: str) -> Optional[int]:
        return self.get(deck_id).peek_front()

    def peek_back(self, deck_id: str) -> Optional[int]:
        return self.get(deck_id).peek_back()

    def card_at(self, deck_id: str, index: int) -> Card:
        deck = self.get(deck_id)
        if index < 0 or index >= len(deck):
            raise InvalidArgument(f"Invalid card index: {index}")
        return deck.cards[index]

    def clone(self, deck_id: str) -> Deck:
        """Copy a deck's contents into a new deck with its own identity."""
        original = self.get(deck_id)
        return self.create(original.name, original.card_ids)
