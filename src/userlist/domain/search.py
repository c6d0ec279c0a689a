"""Free-text search over user records.

A record matches when any searched field contains the case-folded term
as a plain substring. The filter is always computed from the full
collection it is given; it never narrows a previous result.
"""

from __future__ import annotations

from collections.abc import Iterable

from userlist.domain.records import UserRecord


def searchable_fields(record: UserRecord) -> tuple[str, str, str, str]:
    """First name, company name, role, and country, in that order."""
    return (
        record.first_name,
        record.company.name,
        record.company.title,
        record.address.country,
    )


def normalize_term(term: str) -> str:
    return term.casefold()


def matches(record: UserRecord, term: str) -> bool:
    """True if any searched field of *record* contains *term* (case-insensitive)."""
    needle = normalize_term(term)
    if not needle:
        return True
    return any(needle in value.casefold() for value in searchable_fields(record))


def filter_records(master: Iterable[UserRecord], term: str) -> list[UserRecord]:
    """Records of *master* matching *term*, preserving order.

    An empty term returns every record.
    """
    return [record for record in master if matches(record, term)]
