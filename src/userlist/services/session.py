"""UserSession — one logical user-list view.

Owns a :class:`RecordStore`, an :class:`AddUserForm`, and a loader, and
drives the load lifecycle (IDLE -> LOADING -> LOADED | LOAD_FAILED).

Every load is tagged with a generation token. Completions carrying an
out-of-date token are dropped, so the most recently *issued* refresh
always determines the final state.

Failures never escape as exceptions: they come back as ``ok=False``
results and the store keeps its previous contents.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from userlist.domain.lifecycle import LoadState, can_transition
from userlist.domain.records import UserCandidate, UserRecord
from userlist.domain.validation import validate
from userlist.infrastructure.loader import LoadError
from userlist.services.form import AddUserForm
from userlist.services.result import ServiceResult, failure
from userlist.services.store import RecordStore
from userlist.services.telemetry import traced

if TYPE_CHECKING:
    from collections.abc import Sequence

    from userlist.domain.ids import IdGenerator

logger = logging.getLogger(__name__)


class Loader(Protocol):
    endpoint: str

    def load(self) -> list[UserRecord]: ...


def _items(records: Sequence[UserRecord]) -> list[dict[str, Any]]:
    return [r.to_wire() for r in records]


class UserSession:
    """Single-owner state for browsing and curating users."""

    def __init__(self, loader: Loader, *, id_generator: IdGenerator | None = None) -> None:
        self._loader = loader
        self.store = RecordStore(id_generator)
        self.form = AddUserForm()
        self._state = LoadState.IDLE
        self._generation = 0
        self.last_error: str | None = None

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    # --- load lifecycle ---

    def begin_load(self) -> int:
        """Enter LOADING and return the token for this load."""
        self._transition(LoadState.LOADING)
        self._generation += 1
        logger.debug("load.start endpoint=%s token=%d", self._loader.endpoint, self._generation)
        return self._generation

    def complete_load(self, token: int, records: Sequence[UserRecord]) -> bool:
        """Apply a successful load. Returns False if *token* is stale."""
        if token != self._generation:
            logger.debug("load.stale token=%d current=%d", token, self._generation)
            return False
        self._require(LoadState.LOADED)
        self.store.replace_all(records)
        self._transition(LoadState.LOADED)
        self.last_error = None
        logger.debug("load.ok count=%d token=%d", len(records), token)
        return True

    def fail_load(self, token: int, error: Exception) -> bool:
        """Record a failed load, leaving the store as it was."""
        if token != self._generation:
            logger.debug("load.stale token=%d current=%d", token, self._generation)
            return False
        self._transition(LoadState.LOAD_FAILED)
        self.last_error = str(error)
        logger.warning("load.failed endpoint=%s error=%s", self._loader.endpoint, error)
        return True

    @traced
    def refresh(self) -> ServiceResult:
        """Fetch the remote listing and replace both collections with it."""
        op = "refresh"
        token = self.begin_load()
        try:
            records = self._loader.load()
            self.complete_load(token, records)
        except LoadError as exc:
            self.fail_load(token, exc)
            return failure(op, "LOAD_FAILED", str(exc), endpoint=exc.endpoint)
        return self._listing(op)

    # --- listing ---

    @traced
    def list_users(self) -> ServiceResult:
        return self._listing("list_users")

    @traced
    def search(self, term: str) -> ServiceResult:
        """Show the master records matching *term* (empty term shows all)."""
        self.store.apply_search(term)
        return self._listing("search")

    # --- mutations ---

    @traced
    def add_user(self, candidate: UserCandidate) -> ServiceResult:
        """Validate and prepend *candidate*; on success hide and reset the form."""
        op = "add_user"
        outcome = self.store.add(candidate)
        if not outcome.ok:
            self.form.set_errors(outcome.errors)
            logger.info("user.rejected fields=%s", ",".join(sorted(outcome.errors)))
            return failure(
                op,
                "VALIDATION",
                "; ".join(outcome.errors.values()),
                errors=outcome.errors,
            )

        assert outcome.record is not None
        self.form.cancel()
        logger.info("user.added id=%s", outcome.record.id)
        return ServiceResult(
            ok=True,
            op=op,
            data={**outcome.record.to_wire(), "count": len(self.store.master)},
        )

    @traced
    def submit_form(self) -> ServiceResult:
        """Add the user currently entered in the form."""
        return self.add_user(self.form.candidate())

    @traced
    def delete_user(self, record_id: str) -> ServiceResult:
        """Remove *record_id*; an unknown id is a successful no-op."""
        removed = self.store.delete(record_id)
        logger.info("user.deleted id=%s removed=%s", record_id, removed)
        return ServiceResult(
            ok=True,
            op="delete_user",
            data={"id": record_id, "removed": removed, "count": len(self.store.master)},
        )

    # --- internals ---

    def _require(self, target: LoadState) -> None:
        if not can_transition(self._state, target):
            msg = f"Cannot move load state from {self._state} to {target}"
            raise RuntimeError(msg)

    def _transition(self, target: LoadState) -> None:
        self._require(target)
        self._state = target

    def _listing(self, op: str) -> ServiceResult:
        displayed = self.store.displayed
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "items": _items(displayed),
                "count": len(displayed),
                "total": len(self.store.master),
                "search": self.store.search_term,
                "state": str(self._state),
            },
        )


@traced
def validate_candidate(candidate: UserCandidate) -> ServiceResult:
    """Run the add-form rules on *candidate* without touching any store."""
    ok, errors = validate(candidate)
    if not ok:
        return failure("validate", "VALIDATION", "; ".join(errors.values()), errors=errors)
    return ServiceResult(
        ok=True,
        op="validate",
        data={"candidate": candidate.model_dump(by_alias=True)},
    )
