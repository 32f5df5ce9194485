import pytest

from opentable.deck import Deck
from opentable.errors import NotFound
from opentable.store import InMemoryStore, Store


def test_incomplete_backend_fails_on_creation():
    class LoadOnlyStore(Store):
        def load(self, kind, entity_id):
            return None

    with pytest.raises(TypeError):
        LoadOnlyStore()


def test_saved_and_loaded_entities_are_copies():
    store = InMemoryStore()
    deck = store.save(Deck(name="mainDeck", card_ids=[1, 2, 3]))
    assert deck.id is not None

    deck.card_ids.append(4)
    loaded = store.load(Deck.kind, deck.id)
    assert loaded.card_ids == [1, 2, 3]
    loaded.card_ids.clear()
    assert store.load(Deck.kind, deck.id).card_ids == [1, 2, 3]


def test_unknown_ids_raise_not_found():
    store = InMemoryStore()
    with pytest.raises(NotFound, match="deck not found with id: nope"):
        store.load(Deck.kind, "nope")
    with pytest.raises(NotFound):
        store.delete(Deck.kind, "nope")
    assert store.all(Deck.kind) == []
