"""RecordStore — the master and displayed collections of one session.

``master`` holds every known record; ``displayed`` is what the listing
shows. The four mutators below are the only way either collection
changes, so the consistency rules live here and nowhere else:

- every displayed record is also in master;
- with an empty search term, displayed equals master;
- ids are unique within master.

Newly added records go to the front of both collections and stay visible
even when they do not match an active search term. ``replace_all`` clears
the search term.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from userlist.domain.ids import IdGenerator, uuid_ids
from userlist.domain.records import UserCandidate, UserRecord
from userlist.domain.search import filter_records
from userlist.domain.validation import FieldErrorSet, validate

_MAX_ID_ATTEMPTS = 100


@dataclass(frozen=True)
class AddOutcome:
    """Result of :meth:`RecordStore.add`: the new record, or the field errors."""

    record: UserRecord | None = None
    errors: FieldErrorSet = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.record is not None


class RecordStore:
    """In-memory user collections for a single logical view."""

    def __init__(self, id_generator: IdGenerator | None = None) -> None:
        self._next_id = id_generator or uuid_ids()
        self._master: list[UserRecord] = []
        self._displayed: list[UserRecord] = []
        self._search_term = ""

    @property
    def master(self) -> tuple[UserRecord, ...]:
        return tuple(self._master)

    @property
    def displayed(self) -> tuple[UserRecord, ...]:
        return tuple(self._displayed)

    @property
    def search_term(self) -> str:
        return self._search_term

    def get(self, record_id: str) -> UserRecord | None:
        for record in self._master:
            if record.id == record_id:
                return record
        return None

    # --- mutators ---

    def add(self, candidate: UserCandidate) -> AddOutcome:
        """Validate *candidate* and, if valid, prepend it to both collections.

        Invalid candidates leave the store untouched.
        """
        ok, errors = validate(candidate)
        if not ok:
            return AddOutcome(errors=errors)

        record = candidate.to_record(self._fresh_id())
        self._master.insert(0, record)
        self._displayed.insert(0, record)
        return AddOutcome(record=record)

    def delete(self, record_id: str) -> bool:
        """Remove *record_id* from both collections.

        Returns False (and changes nothing) if the id is not present.
        """
        before = len(self._master)
        self._master = [r for r in self._master if r.id != record_id]
        self._displayed = [r for r in self._displayed if r.id != record_id]
        return len(self._master) != before

    def replace_all(self, records: Iterable[UserRecord]) -> None:
        """Overwrite both collections with *records* and clear the search term."""
        incoming = list(records)
        ids = [r.id for r in incoming]
        if len(set(ids)) != len(ids):
            msg = "Duplicate record ids in replacement set"
            raise ValueError(msg)
        self._master = incoming
        self._displayed = list(incoming)
        self._search_term = ""

    def apply_search(self, term: str) -> tuple[UserRecord, ...]:
        """Recompute displayed from master for *term*."""
        self._search_term = term
        self._displayed = filter_records(self._master, term)
        return self.displayed

    # --- internals ---

    def _fresh_id(self) -> str:
        taken = {r.id for r in self._master}
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate_id = self._next_id()
            if candidate_id not in taken:
                return candidate_id
        msg = f"ID generator produced {_MAX_ID_ATTEMPTS} ids already in use"
        raise RuntimeError(msg)
