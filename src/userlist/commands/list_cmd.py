"""list — fetch the remote user listing and print it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from userlist.commands._base import UserlistCommand

if TYPE_CHECKING:
    from userlist.commands._context import AppContext


@click.command(
    "list",
    cls=UserlistCommand,
    examples="""\
  userlist list
  userlist list --search acme
  userlist --json list --search canada
  userlist -q list""",
)
@click.option(
    "--search",
    "term",
    default="",
    help="Only show users whose first name, company, role, or country contains TERM.",
)
@click.pass_obj
def list_cmd(app: AppContext, term: str) -> None:
    """Fetch users from the listing service and display them."""
    session = app.session
    result = session.refresh()
    if result.ok and term:
        result = session.search(term)
    app.emit(result)
