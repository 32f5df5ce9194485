import gc
from random import Random

from opentable.service import GameService


def test_lock_registry_does_not_outlive_operations():
    service = GameService(rng=Random(4))
    match_id = service.start_match().match_id
    for _ in range(3):
        reveal = service.reveal(match_id, "stock")
        service.commit(match_id, reveal.token)
    service.end_match(match_id)
    gc.collect()
    assert len(service._locks) == 0


def test_same_match_shares_one_lock_while_held():
    service = GameService(rng=Random(4))
    with service.locked("m1"):
        held = service._locks["m1"]
        assert held.locked()
        assert "m2" not in service._locks
    gc.collect()
    assert "m1" not in service._locks


def test_saves_round_trip_through_the_facade():
    service = GameService(rng=Random(4))
    match_id = service.start_match().match_id
    summary = service.save_match(match_id, "lee", "checkpoint")
    assert [entry.id for entry in service.list_saves("lee")] == [summary.id]

    loaded = service.load_save(summary.id)
    assert loaded.match_id != match_id
    service.discard_match(loaded.match_id)
    assert service.list_saves()[0].round_number == 1

    service.delete_save(summary.id)
    assert service.list_saves() == []
