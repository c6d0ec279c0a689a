"""Client-side identifier generation for locally added records.

Two strategies, selected by ``[ids] strategy``:
- ``uuid``: random UUID4 hex string.
- ``counter``: ``{prefix}{n}`` with a per-session monotonic counter.

Generators are injected into the record store so tests can assert
ids and ordering deterministically.

INVARIANT: IDs are permanent. Once assigned, a record's ID never changes.
"""

from __future__ import annotations

import itertools
import uuid
from collections.abc import Callable
from enum import StrEnum

IdGenerator = Callable[[], str]


class IdStrategy(StrEnum):
    """Available ID generation strategies."""

    UUID = "uuid"
    COUNTER = "counter"


def uuid_ids() -> IdGenerator:
    """Generator yielding random UUID hex strings."""

    def _next() -> str:
        return uuid.uuid4().hex

    return _next


def counter_ids(prefix: str = "local-", start: int = 1) -> IdGenerator:
    """Generator yielding ``prefix1``, ``prefix2``, ... in order."""
    counter = itertools.count(start)

    def _next() -> str:
        return f"{prefix}{next(counter)}"

    return _next


def make_id_generator(strategy: str, *, prefix: str = "local-") -> IdGenerator:
    """Build a generator for a configured *strategy* name."""
    match IdStrategy(strategy):
        case IdStrategy.COUNTER:
            return counter_ids(prefix)
        case IdStrategy.UUID:
            return uuid_ids()
