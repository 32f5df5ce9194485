"""Turn orchestration for Open Table matches."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from random import Random
from typing import Optional

from .cards import Card, CardCatalog, build_catalog, serialize_card
from .deck import DeckRole, DeckService
from .errors import DataIntegrity, DeckExhausted, EmptyPile, InvalidArgument, InvalidState
from .match import DrawSource, Match, PendingReveal, Table
from .opponent import play_opponent_turn
from .rules_schema import EngineConfig
from .scoring import decide_winner, hand_score
from .store import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reveal:
    token: str
    source: DrawSource
    card: Card


@dataclass
class TurnView:
    match_id: str
    phase: str
    player_hand: list[dict]
    player_hand_labels: list[str]
    opponent_hand_size: int
    drawn_card: Optional[dict]
    discard_top: Optional[dict]
    stock_size: int
    discard_size: int
    round_number: int
    is_over: bool
    player_score: int
    opponent_score: int
    winner: Optional[str]
    message: str
    notes: list[str] = field(default_factory=list)


class TurnEngine:
    """Deal matches and run the reveal/commit cycle against a store."""

    def __init__(
        self,
        store: Store,
        *,
        catalog: Optional[CardCatalog] = None,
        config: Optional[EngineConfig] = None,
        rng: Optional[Random] = None,
    ) -> None:
        self.store = store
        self.catalog = catalog or build_catalog()
        self.config = config or EngineConfig()
        self.rng = rng or Random(self.config.seed)
        self.decks = DeckService(store, self.catalog, self.rng)

    # Match lifecycle ---------------------------------------------------

    def deal(self) -> Match:
        stock = self.decks.create(DeckRole.STOCK.value, self.catalog.ids())
        self.decks.shuffle(stock.id)

        player_ids = self.decks.draw_front(stock.id, self.config.hand_size)
        player_hand = self.decks.create(DeckRole.PLAYER_HAND.value, player_ids)
        opponent_ids = self.decks.draw_front(stock.id, self.config.hand_size)
        opponent_hand = self.decks.create(DeckRole.OPPONENT_HAND.value, opponent_ids)
        discard = self.decks.create(DeckRole.DISCARD.value, [])

        match = Match(
            stock_id=stock.id,
            discard_id=discard.id,
            player_hand_id=player_hand.id,
            opponent_hand_id=opponent_hand.id,
        )
        self.store.save(match)
        logger.info("Dealt match %s", match.id)
        return match

    def load_match(self, match_id: str) -> Match:
        return self.store.load(Match.kind, match_id)

    def load_table(self, match_id: str) -> Table:
        return self.table_for(self.load_match(match_id))

    def table_for(self, match: Match) -> Table:
        return Table(
            match=match,
            stock=self.decks.get(match.stock_id),
            discard=self.decks.get(match.discard_id),
            player_hand=self.decks.get(match.player_hand_id),
            opponent_hand=self.decks.get(match.opponent_hand_id),
        )

    def discard_match(self, match_id: str) -> None:
        match = self.load_match(match_id)
        for deck_id in match.deck_ids().values():
            self.decks.delete(deck_id)
        self.store.delete(Match.kind, match_id)
        logger.info("Deleted match %s", match_id)

    # Turn protocol -----------------------------------------------------

    def reveal(self, match_id: str, source) -> Reveal:
        table = self.load_table(match_id)
        match = table.match
        if match.is_over:
            raise InvalidState("Game is already over!")
        draw_source = DrawSource.parse(source)

        if draw_source is DrawSource.DISCARD:
            card_id = table.discard.peek_back()
            if card_id is None:
                raise EmptyPile("Open table is empty!")
        else:
            card_id = table.stock.peek_front()
            if card_id is None:
                raise DeckExhausted("Game over - no more cards in deck!")

        card = self.catalog.get(card_id)
        match.pending = PendingReveal(token=uuid.uuid4().hex, source=draw_source, card_id=card.id)
        self.store.save(match)
        return Reveal(token=match.pending.token, source=draw_source, card=card)

    def commit(
        self,
        match_id: str,
        token: str,
        player_swaps: bool = False,
        swap_index: Optional[int] = None,
    ) -> TurnView:
        table = self.load_table(match_id)
        match = table.match
        if match.is_over:
            raise InvalidState("Game is already over!")
        pending = match.pending
        if pending is None:
            raise InvalidState("No card has been revealed this round.")
        if token != pending.token:
            raise InvalidArgument("Reveal token does not match the card revealed for this match.")

        revealed = self.catalog.get(pending.card_id)
        self._take_revealed(table, pending)
        message = f"Player drew {revealed.label}. "

        hand = table.player_hand
        if player_swaps:
            if swap_index is not None and 0 <= swap_index < len(hand):
                swapped = self.catalog.get(hand.remove_at(swap_index))
                table.discard.add_back(swapped.id)
                hand.add_back(revealed.id)
                message += f"Swapped out: {swapped.label}. "
            else:
                note = "Invalid swap index! Card discarded. "
                logger.warning("Match %s: swap index %r is out of range, discarding", match.id, swap_index)
                table.notes.append(note)
                table.discard.add_back(revealed.id)
                message += note
        else:
            table.discard.add_back(revealed.id)
            message += "Card discarded to open table. "
        match.pending = None
        message += play_opponent_turn(table, self.catalog).message

        if table.stock.is_empty():
            match.is_over = True
            self._finalize_scores(table)
            logger.info("Match %s is over after round %d", match.id, match.round_number)
        else:
            match.round_number += 1

        table.check_partition(self.catalog.ids())
        self._save_table(table)
        return self.build_view(table, drawn=revealed, message=message)

    def view(self, match_id: str) -> TurnView:
        return self.build_view(self.load_table(match_id), message="Current game state")

    def end_manually(self, match_id: str) -> TurnView:
        table = self.load_table(match_id)
        table.match.is_over = True
        table.match.pending = None
        self._finalize_scores(table)
        self.store.save(table.match)
        logger.info("Match %s ended manually", match_id)
        return self.build_view(table, message="Game ended manually.")

    # Helpers -----------------------------------------------------------

    def _take_revealed(self, table: Table, pending: PendingReveal) -> None:
        pile = table.pile(pending.source)
        if pending.source is DrawSource.STOCK:
            if pile.peek_front() != pending.card_id:
                raise DataIntegrity("Revealed card is no longer on top of the main deck.")
            pile.draw_front(1)
        elif not pile.remove_by_id(pending.card_id):
            raise DataIntegrity("Revealed card is no longer on the open table.")

    def _finalize_scores(self, table: Table) -> None:
        table.match.player_score = hand_score(table.player_hand.materialize(self.catalog))
        table.match.opponent_score = hand_score(table.opponent_hand.materialize(self.catalog))

    def _save_table(self, table: Table) -> None:
        for deck in table.decks():
            self.decks.save(deck)
        self.store.save(table.match)

    def build_view(self, table: Table, *, drawn: Optional[Card] = None, message: str = "") -> TurnView:
        match = table.match
        player_cards = table.player_hand.materialize(self.catalog)
        opponent_cards = table.opponent_hand.materialize(self.catalog)
        player_score = hand_score(player_cards)
        opponent_score = hand_score(opponent_cards)

        top_id = table.discard.peek_back()
        discard_top = serialize_card(self.catalog.get(top_id)) if top_id is not None else None

        winner: Optional[str] = None
        if match.is_over:
            outcome = decide_winner(player_score, opponent_score)
            winner = outcome.value
            message += "\n--- GAME OVER ---\n"
            message += f"Final Scores: Player = {player_score}, Computer = {opponent_score}\n"
            message += _OUTCOME_LINES[winner]

        return TurnView(
            match_id=match.id,
            phase=match.phase.name.lower(),
            player_hand=[serialize_card(card) for card in player_cards],
            player_hand_labels=[card.label for card in player_cards],
            opponent_hand_size=len(opponent_cards),
            drawn_card=serialize_card(drawn) if drawn is not None else None,
            discard_top=discard_top,
            stock_size=len(table.stock),
            discard_size=len(table.discard),
            round_number=match.round_number,
            is_over=match.is_over,
            player_score=player_score,
            opponent_score=opponent_score,
            winner=winner,
            message=message,
            notes=list(table.notes),
        )


_OUTCOME_LINES = {
    "PLAYER": "Player wins!",
    "COMPUTER": "Computer wins!",
    "TIE": "It's a tie!",
}
