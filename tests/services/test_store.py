"""Tests for the master/displayed record store."""

import pytest

from userlist.domain.ids import counter_ids
from userlist.domain.records import UserCandidate, UserRecord
from userlist.services.store import RecordStore


@pytest.fixture
def store(records: list[UserRecord]) -> RecordStore:
    s = RecordStore(counter_ids())
    s.replace_all(records)
    return s


def _assert_consistent(store: RecordStore) -> None:
    master_ids = [r.id for r in store.master]
    assert len(set(master_ids)) == len(master_ids)
    assert set(r.id for r in store.displayed) <= set(master_ids)
    if not store.search_term:
        assert store.displayed == store.master


class TestAdd:
    def test_valid_add_prepends_to_both(
        self, store: RecordStore, valid_candidate: UserCandidate
    ) -> None:
        outcome = store.add(valid_candidate)
        assert outcome.ok
        assert outcome.errors == {}
        assert len(store.master) == 3
        assert len(store.displayed) == 3
        assert store.master[0] == outcome.record
        assert store.displayed[0] == outcome.record
        assert outcome.record is not None
        assert outcome.record.id == "local-1"
        _assert_consistent(store)

    def test_invalid_add_changes_nothing(self, store: RecordStore) -> None:
        before = (store.master, store.displayed)
        outcome = store.add(
            UserCandidate(
                first_name="Jane2", last_name="Doe", company_name="Acme", role="Eng", country="US"
            )
        )
        assert not outcome.ok
        assert outcome.record is None
        assert outcome.errors == {"firstName": "First name should not contain numbers"}
        assert (store.master, store.displayed) == before

    def test_add_while_filtered_keeps_new_record_visible(
        self, store: RecordStore, valid_candidate: UserCandidate
    ) -> None:
        store.apply_search("acme")
        outcome = store.add(valid_candidate)
        assert [r.first_name for r in store.displayed] == ["Ada", "John"]
        assert [r.first_name for r in store.master] == ["Ada", "John", "Jane"]
        assert store.search_term == "acme"
        assert outcome.ok

    def test_generated_id_collision_is_skipped(self, valid_candidate: UserCandidate) -> None:
        ids = iter(["1", "1", "fresh"])
        store = RecordStore(lambda: next(ids))
        store.replace_all(
            [
                UserRecord.model_validate(
                    {
                        "id": 1,
                        "firstName": "John",
                        "lastName": "Doe",
                        "company": {"name": "Acme", "title": "Engineer"},
                        "address": {"country": "USA"},
                    }
                )
            ]
        )
        outcome = store.add(valid_candidate)
        assert outcome.record is not None
        assert outcome.record.id == "fresh"

    def test_exhausted_generator_raises(self, valid_candidate: UserCandidate) -> None:
        store = RecordStore(lambda: "same")
        store.add(valid_candidate)
        with pytest.raises(RuntimeError, match="already in use"):
            store.add(valid_candidate)


class TestDelete:
    def test_removes_from_both(self, store: RecordStore) -> None:
        assert store.delete("1") is True
        assert [r.id for r in store.master] == ["2"]
        assert [r.id for r in store.displayed] == ["2"]

    def test_idempotent(self, store: RecordStore) -> None:
        assert store.delete("1") is True
        assert store.delete("1") is False
        assert len(store.master) == 1

    def test_unknown_id_is_noop(self, store: RecordStore) -> None:
        before = store.master
        assert store.delete("missing") is False
        assert store.master == before

    def test_delete_hidden_record_while_filtered(self, store: RecordStore) -> None:
        store.apply_search("acme")
        assert store.delete("2") is True
        assert [r.id for r in store.master] == ["1"]
        assert [r.id for r in store.displayed] == ["1"]

    def test_delete_while_filtered_keeps_hidden_records(self, store: RecordStore) -> None:
        store.apply_search("acme")
        store.delete("1")
        assert [r.id for r in store.master] == ["2"]
        assert store.displayed == ()

    def test_add_then_delete_restores_contents(
        self, store: RecordStore, valid_candidate: UserCandidate
    ) -> None:
        before = (store.master, store.displayed)
        outcome = store.add(valid_candidate)
        assert outcome.record is not None
        store.delete(outcome.record.id)
        assert (store.master, store.displayed) == before


class TestReplaceAll:
    def test_clears_search_term(self, store: RecordStore, records: list[UserRecord]) -> None:
        store.apply_search("acme")
        store.replace_all(records)
        assert store.search_term == ""
        assert store.displayed == store.master == tuple(records)

    def test_round_trip_keeps_order(self, records: list[UserRecord]) -> None:
        store = RecordStore()
        store.replace_all(records)
        assert list(store.apply_search("")) == records

    def test_duplicate_ids_rejected(self, records: list[UserRecord]) -> None:
        store = RecordStore()
        with pytest.raises(ValueError, match="Duplicate"):
            store.replace_all([records[0], records[0]])
        assert store.master == ()

    def test_snapshots_are_detached(self, store: RecordStore) -> None:
        snapshot = store.master
        store.delete("1")
        assert len(snapshot) == 2


class TestApplySearch:
    def test_recomputes_from_master(self, store: RecordStore) -> None:
        store.apply_search("acme")
        # A term that only Jane matches must still find her after a narrower filter.
        assert [r.first_name for r in store.apply_search("globex")] == ["Jane"]

    def test_empty_term_restores_master(self, store: RecordStore) -> None:
        store.apply_search("acme")
        store.apply_search("")
        assert store.displayed == store.master
        _assert_consistent(store)

    def test_get(self, store: RecordStore) -> None:
        record = store.get("2")
        assert record is not None
        assert record.first_name == "Jane"
        assert store.get("nope") is None
