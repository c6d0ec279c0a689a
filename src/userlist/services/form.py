"""AddUserForm — state of the add-entry form.

Holds the five field values, the last validation errors, and whether the
form is shown. Editing a field clears that field's error only; a full
error set is recomputed on every submit.
"""

from __future__ import annotations

from userlist.domain.records import FORM_FIELDS, UserCandidate
from userlist.domain.validation import FieldErrorSet


class AddUserForm:
    """Mutable add-form state owned by a session."""

    def __init__(self) -> None:
        self.visible = False
        self._values: dict[str, str] = dict.fromkeys(FORM_FIELDS, "")
        self._errors: FieldErrorSet = {}

    @property
    def values(self) -> dict[str, str]:
        return dict(self._values)

    @property
    def errors(self) -> FieldErrorSet:
        return dict(self._errors)

    def open(self) -> None:
        self.visible = True

    def toggle(self) -> bool:
        self.visible = not self.visible
        return self.visible

    def cancel(self) -> None:
        """Hide the form and discard its contents."""
        self.clear()
        self.visible = False

    def clear(self) -> None:
        """Reset every value and error; visibility is unchanged."""
        self._values = dict.fromkeys(FORM_FIELDS, "")
        self._errors = {}

    def set_field(self, name: str, value: str) -> None:
        if name not in self._values:
            msg = f"Unknown form field: {name!r}"
            raise ValueError(msg)
        self._values[name] = value
        self._errors.pop(name, None)

    def set_errors(self, errors: FieldErrorSet) -> None:
        self._errors = dict(errors)

    def candidate(self) -> UserCandidate:
        return UserCandidate.model_validate(self._values)
