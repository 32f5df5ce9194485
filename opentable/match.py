"""Match aggregate and the loaded working set the engine mutates."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, Dict, List, Optional

from .deck import Deck, DeckRole
from .errors import DataIntegrity, InvalidArgument


class MatchPhase(Enum):
    AWAITING_DRAW = auto()
    AWAITING_DECISION = auto()
    OVER = auto()


class DrawSource(str, Enum):
    STOCK = "stock"
    DISCARD = "discard"

    @classmethod
    def parse(cls, value: object) -> "DrawSource":
        if isinstance(value, DrawSource):
            return value
        if isinstance(value, str):
            normalized = SOURCE_ALIASES.get(value, value.lower())
            for source in cls:
                if source.value == normalized:
                    return source
        raise InvalidArgument(f"Invalid draw source {value!r}! Must be 'stock' or 'discard'.")


# Spellings used by the original HTTP API.
SOURCE_ALIASES: Dict[str, str] = {
    "mainDeck": "stock",
    "openTable": "discard",
}


@dataclass(frozen=True)
class PendingReveal:
    """The card a reveal showed, bound to the token a commit must present."""

    token: str
    source: DrawSource
    card_id: int


@dataclass
class Match:
    kind: ClassVar[str] = "match"

    stock_id: str
    discard_id: str
    player_hand_id: str
    opponent_hand_id: str
    player_score: int = 0
    opponent_score: int = 0
    round_number: int = 1
    is_over: bool = False
    pending: Optional[PendingReveal] = None
    id: Optional[str] = None

    @property
    def phase(self) -> MatchPhase:
        if self.is_over:
            return MatchPhase.OVER
        if self.pending is not None:
            return MatchPhase.AWAITING_DECISION
        return MatchPhase.AWAITING_DRAW

    def deck_ids(self) -> Dict[DeckRole, str]:
        return {
            DeckRole.STOCK: self.stock_id,
            DeckRole.DISCARD: self.discard_id,
            DeckRole.PLAYER_HAND: self.player_hand_id,
            DeckRole.OPPONENT_HAND: self.opponent_hand_id,
        }


@dataclass
class SavedMatch(Match):
    """Match copy owned by a save record, stored apart from live matches."""

    kind: ClassVar[str] = "saved_match"


@dataclass
class Table:
    """A match together with copies of its four decks."""

    match: Match
    stock: Deck
    discard: Deck
    player_hand: Deck
    opponent_hand: Deck
    notes: List[str] = field(default_factory=list)

    def decks(self) -> List[Deck]:
        return [self.stock, self.discard, self.player_hand, self.opponent_hand]

    def pile(self, source: DrawSource) -> Deck:
        return self.stock if source is DrawSource.STOCK else self.discard

    def all_card_ids(self) -> List[int]:
        ids: List[int] = []
        for deck in self.decks():
            ids.extend(deck.card_ids)
        return ids

    def check_partition(self, universe: List[int]) -> None:
        """Raise DataIntegrity unless the decks split ``universe`` exactly."""
        ids = self.all_card_ids()
        if len(ids) != len(set(ids)):
            raise DataIntegrity(f"Match {self.match.id} holds a card in more than one place.")
        if set(ids) != set(universe):
            raise DataIntegrity(f"Match {self.match.id} does not hold the full deck.")
