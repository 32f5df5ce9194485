"""Convenience service layer for UI, server and scripted players."""

from __future__ import annotations

import threading
import weakref
from contextlib import contextmanager
from dataclasses import dataclass
from random import Random
from typing import Iterator, List, Optional

from .archive import Archive, SaveSummary
from .cards import CardCatalog, build_catalog, serialize_card
from .results import InMemoryResultChannel, ResultChannel, ResultReporter
from .rules_schema import EngineConfig
from .store import InMemoryStore, Store
from .turns import TurnEngine, TurnView


@dataclass
class RevealView:
    match_id: str
    token: str
    source: str
    card: dict
    label: str


class GameService:
    """Facade around TurnEngine, Archive and ResultReporter."""

    def __init__(
        self,
        store: Optional[Store] = None,
        *,
        config: Optional[EngineConfig] = None,
        channel: Optional[ResultChannel] = None,
        catalog: Optional[CardCatalog] = None,
        rng: Optional[Random] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.store = store or InMemoryStore()
        self.catalog = catalog or build_catalog()
        self.engine = TurnEngine(self.store, catalog=self.catalog, config=self.config, rng=rng)
        self.archive = Archive(self.engine)
        self.channel = channel or InMemoryResultChannel()
        self.reporter = ResultReporter(self.channel, self.config.result_channel)
        # Entries vanish once no operation holds the lock.
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    # Locking -----------------------------------------------------------

    @contextmanager
    def locked(self, match_id: str) -> Iterator[None]:
        """Serialise operations on one match id."""
        with self._locks_guard:
            lock = self._locks.get(match_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[match_id] = lock
        with lock:
            yield

    # Match lifecycle ---------------------------------------------------

    def start_match(self) -> TurnView:
        match = self.engine.deal()
        return self.engine.view(match.id)

    def get_view(self, match_id: str) -> TurnView:
        return self.engine.view(match_id)

    def end_match(self, match_id: str) -> TurnView:
        with self.locked(match_id):
            return self.engine.end_manually(match_id)

    def discard_match(self, match_id: str) -> None:
        with self.locked(match_id):
            self.engine.discard_match(match_id)

    # Turn actions ------------------------------------------------------

    def reveal(self, match_id: str, source: str) -> RevealView:
        with self.locked(match_id):
            reveal = self.engine.reveal(match_id, source)
        return RevealView(
            match_id=match_id,
            token=reveal.token,
            source=reveal.source.value,
            card=serialize_card(reveal.card),
            label=reveal.card.label,
        )

    def commit(self, match_id: str, token: str, swap: bool = False, swap_index: Optional[int] = None) -> TurnView:
        with self.locked(match_id):
            return self.engine.commit(match_id, token, player_swaps=swap, swap_index=swap_index)

    # Saves -------------------------------------------------------------

    def save_match(self, match_id: str, player_name: str, save_name: Optional[str] = None) -> SaveSummary:
        with self.locked(match_id):
            record = self.archive.snapshot(match_id, player_name, save_name)
        return self.archive.summarize(record)

    def list_saves(self, player_name: Optional[str] = None) -> List[SaveSummary]:
        return [self.archive.summarize(record) for record in self.archive.list(player_name)]

    def load_save(self, save_id: str) -> TurnView:
        match_id = self.archive.restore(save_id)
        return self.engine.view(match_id)

    def delete_save(self, save_id: str) -> None:
        self.archive.delete(save_id)

    # Results -----------------------------------------------------------

    def report_result(self, match_id: str, player_name: Optional[str]) -> bool:
        return self.reporter.report_match(self.engine, match_id, player_name)

    def list_cards(self) -> List[dict]:
        return [serialize_card(card) for card in self.catalog]
