import itertools
from collections import Counter
from random import Random

import pytest

from opentable.cards import build_catalog
from opentable.deck import Deck, DeckService
from opentable.errors import DataIntegrity, InvalidArgument, NotFound
from opentable.store import InMemoryStore


def make_service(seed: int = 1) -> DeckService:
    return DeckService(InMemoryStore(), build_catalog(), Random(seed))


def test_create_and_get_materializes_cards_in_order():
    service = make_service()
    deck = service.create("playerHand", [5, 1, 40])
    loaded = service.get(deck.id)
    assert loaded.card_ids == [5, 1, 40]
    assert [card.id for card in loaded.cards] == [5, 1, 40]


def test_unknown_deck_id_is_not_found():
    service = make_service()
    with pytest.raises(NotFound):
        service.get("missing")
    with pytest.raises(NotFound):
        service.draw_front("missing", 1)
    with pytest.raises(NotFound):
        service.shuffle("missing")


def test_unknown_card_id_is_a_data_integrity_fault():
    service = make_service()
    deck = service.create("mainDeck", [1, 2])
    raw = service.store.load(Deck.kind, deck.id)
    raw.card_ids.append(99)
    service.store.save(raw)
    with pytest.raises(DataIntegrity):
        service.get(deck.id)


def test_draw_front_takes_ids_in_order_and_stops_when_empty():
    service = make_service()
    deck = service.create("mainDeck", [10, 11, 12])
    assert service.draw_front(deck.id, 2) == [10, 11]
    assert service.draw_front(deck.id, 5) == [12]
    assert service.draw_front(deck.id, 1) == []
    assert service.get(deck.id).card_ids == []


def test_add_back_peek_and_remove():
    catalog = build_catalog()
    service = make_service()
    deck = service.create("openTableDeck", [])
    assert service.peek_back(deck.id) is None
    assert service.peek_front(deck.id) is None

    service.add_back(deck.id, catalog.get(3))
    service.add_back(deck.id, catalog.get(7))
    assert service.peek_back(deck.id) == 7
    assert service.peek_front(deck.id) == 3
    # Peeking does not consume.
    assert service.get(deck.id).card_ids == [3, 7]

    service.remove_by_id(deck.id, 3)
    service.remove_by_id(deck.id, 30)
    assert service.get(deck.id).card_ids == [7]


def test_add_back_rejects_duplicates():
    deck = Deck(name="playerHand", card_ids=[1, 2])
    with pytest.raises(DataIntegrity):
        deck.add_back(2)


def test_card_at_addresses_by_index():
    service = make_service()
    deck = service.create("playerHand", [4, 8, 15])
    assert service.card_at(deck.id, 1).id == 8
    with pytest.raises(InvalidArgument):
        service.card_at(deck.id, 3)


def test_clone_has_new_identity_and_same_contents():
    service = make_service()
    deck = service.create("mainDeck", [1, 2, 3])
    clone = service.clone(deck.id)
    assert clone.id != deck.id
    assert clone.card_ids == [1, 2, 3]
    service.draw_front(clone.id, 1)
    assert service.get(deck.id).card_ids == [1, 2, 3]


def test_shuffle_keeps_the_multiset():
    service = make_service(seed=3)
    deck = service.create("mainDeck", list(range(1, 53)))
    shuffled = service.shuffle(deck.id)
    assert sorted(shuffled.card_ids) == list(range(1, 53))
    assert service.get(deck.id).card_ids == shuffled.card_ids


def test_shuffle_reaches_every_permutation_uniformly():
    rng = Random(2024)
    ids = [1, 2, 3, 4]
    trials = 12000
    counts = Counter()
    for _ in range(trials):
        deck = Deck(name="mainDeck", card_ids=list(ids))
        deck.shuffle(rng)
        counts[tuple(deck.card_ids)] += 1

    permutations = list(itertools.permutations(ids))
    assert set(counts) == set(permutations)
    expected = trials / len(permutations)
    chi_square = sum((counts[perm] - expected) ** 2 / expected for perm in permutations)
    # 23 degrees of freedom; 49.7 is the 0.1% critical value.
    assert chi_square < 49.7
