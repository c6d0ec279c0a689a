"""User record models.

Two shapes from the add/list flow:
- ``UserRecord``: the canonical nested record held by the store and
  returned by the listing service (``company.name``, ``address.country``).
- ``UserCandidate``: the flat add-form payload (``companyName``, ``role``,
  ``country``) that must pass validation before it becomes a record.

Both use camelCase aliases on the wire and snake_case attributes in Python.

INVARIANT: Records are immutable. No record is mutated after creation.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_WIRE = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class Company(BaseModel):
    """``company`` sub-document."""

    model_config = _WIRE

    name: str
    title: str


class Address(BaseModel):
    """``address`` sub-document."""

    model_config = _WIRE

    country: str


class UserRecord(BaseModel):
    """A single user entity.

    The identifier is accepted as ``id`` or as the document-database ``_id``
    and is always normalised to a string.
    """

    model_config = _WIRE

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    first_name: str
    last_name: str
    company: Company
    address: Address

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return str(value)
        return value

    def to_wire(self) -> dict[str, Any]:
        """Serialise with camelCase keys, as the listing service shapes it."""
        return self.model_dump(by_alias=True)


class UserCandidate(BaseModel):
    """Flat add-form payload. Every field defaults to the empty string."""

    model_config = _WIRE

    first_name: str = ""
    last_name: str = ""
    company_name: str = ""
    role: str = ""
    country: str = ""

    def to_record(self, record_id: str) -> UserRecord:
        """Build the canonical record (``role`` -> ``company.title``)."""
        return UserRecord(
            id=record_id,
            first_name=self.first_name,
            last_name=self.last_name,
            company=Company(name=self.company_name, title=self.role),
            address=Address(country=self.country),
        )


FORM_FIELDS: tuple[str, ...] = ("firstName", "lastName", "companyName", "role", "country")
