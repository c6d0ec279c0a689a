"""RemoteLoader — fetch the authoritative user list over HTTP.

Issues a single ``GET`` to the configured endpoint and parses the
``users`` collection of the JSON body. A bare JSON array is accepted as
the collection too, since the document-store listing service returns one.

Every failure (transport error, non-2xx status, undecodable body, wrong
shape, duplicate ids) is raised as :class:`LoadError`. There is no retry.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from userlist.domain.records import UserRecord

DEFAULT_ENDPOINT = "https://dummyjson.com/users"
DEFAULT_TIMEOUT = 10.0

_RECORDS = TypeAdapter(list[UserRecord])


class LoadError(Exception):
    """The remote listing could not be fetched or understood."""

    def __init__(self, message: str, *, endpoint: str) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class RemoteLoader:
    """Read-only client for the user listing endpoint.

    Args:
        endpoint: Absolute URL returning ``{"users": [...]}``.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    def load(self) -> list[UserRecord]:
        """Fetch and parse the listing. Raises LoadError on any failure."""
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(self.endpoint)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            msg = f"Listing service returned HTTP {exc.response.status_code}"
            raise LoadError(msg, endpoint=self.endpoint) from exc
        except httpx.HTTPError as exc:
            msg = f"Request to listing service failed: {exc}"
            raise LoadError(msg, endpoint=self.endpoint) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError (non-UTF-8 bytes) are both ValueErrors.
            msg = "Listing service returned a body that is not JSON"
            raise LoadError(msg, endpoint=self.endpoint) from exc

        return parse_users(payload, endpoint=self.endpoint)


def parse_users(payload: Any, *, endpoint: str = DEFAULT_ENDPOINT) -> list[UserRecord]:
    """Extract and validate the user collection from a decoded JSON payload."""
    if isinstance(payload, dict):
        if "users" not in payload:
            msg = "Listing payload has no 'users' collection"
            raise LoadError(msg, endpoint=endpoint)
        payload = payload["users"]

    try:
        records = _RECORDS.validate_python(payload)
    except ValidationError as exc:
        msg = f"Listing payload is malformed ({exc.error_count()} errors)"
        raise LoadError(msg, endpoint=endpoint) from exc

    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            msg = f"Listing payload repeats id {record.id!r}"
            raise LoadError(msg, endpoint=endpoint)
        seen.add(record.id)
    return records
