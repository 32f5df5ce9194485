"""Save records: frozen copies of in-progress matches."""

from __future__ import annotations

import itertools
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import ClassVar, List, Optional, Type

from .errors import InvalidState
from .match import Match, SavedMatch, Table
from .turns import TurnEngine

logger = logging.getLogger(__name__)

# Breaks ties between saves stamped within the same clock tick.
_SAVE_SEQUENCE = itertools.count()


@dataclass(frozen=True)
class SaveRecord:
    kind: ClassVar[str] = "save"

    id: str
    owner_name: str
    label: str
    saved_at: datetime
    saved_match_id: str
    sequence: int = 0


@dataclass
class SaveSummary:
    id: str
    player_name: str
    save_name: str
    saved_at: str
    round_number: int
    player_score: int
    computer_score: int


class Archive:
    """Snapshot, list, restore and delete saved matches.

    A save owns a ``SavedMatch`` copy. It is stored under its own kind, so the
    turn engine cannot load, play or delete it as a live match.
    """

    def __init__(self, engine: TurnEngine) -> None:
        self.engine = engine
        self.store = engine.store

    def clone_match(self, original: Match, into: Type[Match] = Match) -> Match:
        """Copy a match and its four decks under fresh identities."""
        decks = self.engine.decks
        clone = into(
            stock_id=decks.clone(original.stock_id).id,
            discard_id=decks.clone(original.discard_id).id,
            player_hand_id=decks.clone(original.player_hand_id).id,
            opponent_hand_id=decks.clone(original.opponent_hand_id).id,
            player_score=original.player_score,
            opponent_score=original.opponent_score,
            round_number=original.round_number,
            is_over=original.is_over,
        )
        return self.store.save(clone)

    def snapshot(self, match_id: str, owner: str, label: Optional[str] = None) -> SaveRecord:
        match = self.engine.load_match(match_id)
        if match.is_over:
            raise InvalidState("Cannot save a game that is already over!")

        saved = self.clone_match(match, into=SavedMatch)
        if label is None or not label.strip():
            label = self.engine.config.default_save_label
        record = SaveRecord(
            id=uuid.uuid4().hex,
            owner_name=owner,
            label=label,
            saved_at=datetime.now(timezone.utc),
            saved_match_id=saved.id,
            sequence=next(_SAVE_SEQUENCE),
        )
        self.store.save(record)
        logger.info("Saved match %s for %s as %s", match_id, owner, record.id)
        return record

    def get(self, save_id: str) -> SaveRecord:
        return self.store.load(SaveRecord.kind, save_id)

    def saved_match(self, record: SaveRecord) -> SavedMatch:
        return self.store.load(SavedMatch.kind, record.saved_match_id)

    def saved_table(self, record: SaveRecord) -> Table:
        return self.engine.table_for(self.saved_match(record))

    def restore(self, save_id: str) -> str:
        record = self.get(save_id)
        restored = self.clone_match(self.saved_match(record))
        logger.info("Restored save %s into match %s", save_id, restored.id)
        return restored.id

    def list(self, owner: Optional[str] = None) -> List[SaveRecord]:
        records: List[SaveRecord] = self.store.all(SaveRecord.kind)
        if owner is not None and owner.strip():
            records = [record for record in records if record.owner_name == owner]
        return sorted(records, key=lambda record: (record.saved_at, record.sequence), reverse=True)

    def delete(self, save_id: str) -> None:
        record = self.get(save_id)
        saved = self.saved_match(record)
        for deck_id in saved.deck_ids().values():
            self.engine.decks.delete(deck_id)
        self.store.delete(SavedMatch.kind, saved.id)
        self.store.delete(SaveRecord.kind, save_id)
        logger.info("Deleted save %s", save_id)

    def summarize(self, record: SaveRecord) -> SaveSummary:
        view = self.engine.build_view(self.saved_table(record))
        return SaveSummary(
            id=record.id,
            player_name=record.owner_name,
            save_name=record.label,
            saved_at=record.saved_at.isoformat(),
            round_number=view.round_number,
            player_score=view.player_score,
            computer_score=view.opponent_score,
        )
