"""Storage contract consumed by the engine, plus an in-memory backend."""

from __future__ import annotations

import copy
import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Protocol, TypeVar

from .errors import NotFound


class Entity(Protocol):
    kind: str
    id: Optional[str]


E = TypeVar("E", bound=Entity)


class Store(ABC):
    """Load/save/delete whole entities by kind and id."""

    @abstractmethod
    def load(self, kind: str, entity_id: str):
        raise NotImplementedError

    @abstractmethod
    def save(self, entity: E) -> E:
        raise NotImplementedError

    @abstractmethod
    def delete(self, kind: str, entity_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def all(self, kind: str) -> list:
        raise NotImplementedError


class InMemoryStore(Store):
    """Dictionary-backed store.

    Entities are copied on the way in and on the way out, so a caller holding
    a loaded entity never shares state with what is stored.
    """

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, object]] = {}

    def load(self, kind: str, entity_id: str):
        bucket = self._data.get(kind, {})
        if entity_id not in bucket:
            raise NotFound(f"{kind} not found with id: {entity_id}")
        return copy.deepcopy(bucket[entity_id])

    def save(self, entity: E) -> E:
        if entity.id is None:
            entity.id = uuid.uuid4().hex
        self._data.setdefault(entity.kind, {})[entity.id] = copy.deepcopy(entity)
        return entity

    def delete(self, kind: str, entity_id: str) -> None:
        bucket = self._data.get(kind, {})
        if entity_id not in bucket:
            raise NotFound(f"{kind} not found with id: {entity_id}")
        del bucket[entity_id]

    def all(self, kind: str) -> List[object]:
        return [copy.deepcopy(entity) for entity in self._data.get(kind, {}).values()]

    def count(self, kind: str) -> int:
        return len(self._data.get(kind, {}))
