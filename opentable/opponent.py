"""The computer's turn: take a useful discard or draw, then maybe swap."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .cards import Card, CardCatalog
from .match import DrawSource, Table
from .scoring import score, worst_card

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpponentMove:
    source: Optional[DrawSource]
    drawn: Optional[Card]
    swapped_out: Optional[Card]
    message: str

    @property
    def skipped(self) -> bool:
        return self.drawn is None


def _hand(table: Table, catalog: CardCatalog) -> list[Card]:
    return table.opponent_hand.materialize(catalog)


def play_opponent_turn(table: Table, catalog: CardCatalog) -> OpponentMove:
    """Run the opponent's draw and decision against ``table`` in place."""
    drawn: Optional[Card] = None
    source: Optional[DrawSource] = None

    top_id = table.discard.peek_back()
    if top_id is not None:
        top_card = catalog.get(top_id)
        _, _, worst_score = worst_card(_hand(table, catalog))
        if worst_score is not None and score(top_card) < worst_score:
            table.discard.remove_by_id(top_id)
            drawn = top_card
            source = DrawSource.DISCARD

    if drawn is None:
        drawn_ids = table.stock.draw_front(1)
        if not drawn_ids:
            note = "Computer cannot draw - deck empty. "
            logger.info("Opponent skipped its turn in match %s: stock is empty", table.match.id)
            table.notes.append(note)
            return OpponentMove(source=None, drawn=None, swapped_out=None, message=note)
        drawn = catalog.get(drawn_ids[0])
        source = DrawSource.STOCK

    origin = "open table" if source is DrawSource.DISCARD else "main deck"
    message = f"Computer drew {drawn.label} from {origin}. "

    worst_index, worst, worst_score = worst_card(_hand(table, catalog))
    if worst is not None and worst_index is not None and score(drawn) < worst_score:
        table.opponent_hand.remove_at(worst_index)
        table.discard.add_back(worst.id)
        table.opponent_hand.add_back(drawn.id)
        message += f"Computer swapped out {worst.label}."
        return OpponentMove(source=source, drawn=drawn, swapped_out=worst, message=message)

    table.discard.add_back(drawn.id)
    message += "Computer discarded the card."
    return OpponentMove(source=source, drawn=drawn, swapped_out=None, message=message)
