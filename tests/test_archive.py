import pytest

from opentable.archive import Archive
from opentable.errors import InvalidState, NotFound
from opentable.match import SavedMatch


def deck_contents(engine, match_id):
    table = engine.load_table(match_id)
    return [list(deck.card_ids) for deck in table.decks()]


def saved_contents(archive, record):
    return [list(deck.card_ids) for deck in archive.saved_table(record).decks()]


def deck_identities(engine, match_id):
    return set(engine.load_match(match_id).deck_ids().values())


def play_round(engine, match_id):
    reveal = engine.reveal(match_id, "stock")
    return engine.commit(match_id, reveal.token, player_swaps=True, swap_index=0)


def test_snapshot_is_independent_of_the_live_match(engine):
    archive = Archive(engine)
    match = engine.deal()
    play_round(engine, match.id)

    record = archive.snapshot(match.id, "alice", "before lunch")
    saved = saved_contents(archive, record)
    assert saved == deck_contents(engine, match.id)
    saved_decks = set(archive.saved_match(record).deck_ids().values())
    assert saved_decks.isdisjoint(deck_identities(engine, match.id))

    play_round(engine, match.id)
    assert saved_contents(archive, record) == saved
    assert archive.saved_match(record).round_number == 2


def test_saved_copy_cannot_be_played_or_deleted_as_a_live_match(engine):
    archive = Archive(engine)
    match = engine.deal()
    record = archive.snapshot(match.id, "alice")
    saved = saved_contents(archive, record)

    with pytest.raises(NotFound):
        engine.reveal(record.saved_match_id, "stock")
    with pytest.raises(NotFound):
        engine.commit(record.saved_match_id, "any")
    with pytest.raises(NotFound):
        engine.end_manually(record.saved_match_id)
    with pytest.raises(NotFound):
        engine.discard_match(record.saved_match_id)

    assert saved_contents(archive, record) == saved
    saved_match = archive.saved_match(record)
    assert isinstance(saved_match, SavedMatch)
    assert (saved_match.round_number, saved_match.is_over, saved_match.pending) == (1, False, None)


def test_snapshot_drops_a_pending_reveal(engine):
    archive = Archive(engine)
    match = engine.deal()
    engine.reveal(match.id, "stock")

    record = archive.snapshot(match.id, "alice")
    restored_id = archive.restore(record.id)
    assert engine.view(restored_id).phase == "awaiting_draw"
    with pytest.raises(InvalidState):
        engine.commit(restored_id, "any")


def test_repeated_restores_are_independent(engine):
    archive = Archive(engine)
    match = engine.deal()
    record = archive.snapshot(match.id, "bob")

    first = archive.restore(record.id)
    second = archive.restore(record.id)
    assert len({first, second, match.id, record.saved_match_id}) == 4
    assert deck_identities(engine, first).isdisjoint(deck_identities(engine, second))
    assert deck_contents(engine, first) == deck_contents(engine, second)

    play_round(engine, first)
    assert deck_contents(engine, second) == saved_contents(archive, record)
    assert deck_contents(engine, second) == deck_contents(engine, match.id)
    assert engine.load_match(second).round_number == 1


def test_cannot_snapshot_a_finished_match(engine):
    archive = Archive(engine)
    match = engine.deal()
    engine.end_manually(match.id)
    with pytest.raises(InvalidState):
        archive.snapshot(match.id, "carol", "too late")


def test_blank_label_gets_the_default(engine):
    archive = Archive(engine)
    match = engine.deal()
    assert archive.snapshot(match.id, "dave", "   ").label == "Saved Game"
    assert archive.snapshot(match.id, "dave").label == "Saved Game"


def test_list_is_newest_first_and_filters_by_owner(engine):
    archive = Archive(engine)
    match = engine.deal()
    first = archive.snapshot(match.id, "erin", "one")
    second = archive.snapshot(match.id, "frank", "two")
    third = archive.snapshot(match.id, "erin", "three")

    assert [record.id for record in archive.list()] == [third.id, second.id, first.id]
    assert [record.id for record in archive.list("erin")] == [third.id, first.id]
    assert [record.id for record in archive.list("  ")] == [third.id, second.id, first.id]
    assert archive.list("nobody") == []


def test_delete_keeps_previously_restored_matches(engine):
    archive = Archive(engine)
    match = engine.deal()
    record = archive.snapshot(match.id, "gina")
    restored = archive.restore(record.id)
    contents = deck_contents(engine, restored)
    saved_decks = archive.saved_match(record).deck_ids().values()

    archive.delete(record.id)

    with pytest.raises(NotFound):
        archive.get(record.id)
    with pytest.raises(NotFound):
        archive.saved_match(record)
    with pytest.raises(NotFound):
        archive.restore(record.id)
    for deck_id in saved_decks:
        with pytest.raises(NotFound):
            engine.decks.get(deck_id)
    assert deck_contents(engine, restored) == contents
    assert archive.list() == []


def test_summary_reports_live_scores(engine):
    archive = Archive(engine)
    match = engine.deal()
    record = archive.snapshot(match.id, "hank", "mid game")
    summary = archive.summarize(record)
    view = engine.view(match.id)

    assert summary.player_name == "hank"
    assert summary.save_name == "mid game"
    assert summary.round_number == 1
    assert (summary.player_score, summary.computer_score) == (view.player_score, view.opponent_score)
    assert not hasattr(summary, "match_id")
