"""validate — check a candidate user against the add-form rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from userlist.commands._base import UserlistCommand
from userlist.domain.records import UserCandidate
from userlist.services.session import validate_candidate

if TYPE_CHECKING:
    from userlist.commands._context import AppContext


@click.command(
    cls=UserlistCommand,
    examples="""\
  userlist validate --first-name Jane --last-name Doe \\
      --company-name Acme --role Engineer --country US
  userlist --json validate --first-name Jane2""",
)
@click.option("--first-name", default="", help="First name (no digits).")
@click.option("--last-name", default="", help="Last name (no digits).")
@click.option("--company-name", default="", help="Company name.")
@click.option("--role", default="", help="Job title at the company.")
@click.option("--country", default="", help="Country.")
@click.pass_obj
def validate(
    app: AppContext,
    first_name: str,
    last_name: str,
    company_name: str,
    role: str,
    country: str,
) -> None:
    """Validate a user without adding it. Exits 1 when invalid."""
    candidate = UserCandidate(
        first_name=first_name,
        last_name=last_name,
        company_name=company_name,
        role=role,
        country=country,
    )
    app.emit(validate_candidate(candidate))
