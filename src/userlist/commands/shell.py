"""shell — an interactive user-list session.

One session lives for the whole loop: locally added and deleted users
persist until exit, and ``refresh`` replaces everything with the remote
listing again. Failures are printed and the loop carries on.
"""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING

import click

from userlist.commands._base import UserlistCommand
from userlist.domain.records import FORM_FIELDS

if TYPE_CHECKING:
    from userlist.commands._context import AppContext
    from userlist.services.session import UserSession

FIELD_LABELS: dict[str, str] = {
    "firstName": "First name",
    "lastName": "Last name",
    "companyName": "Company name",
    "role": "Role",
    "country": "Country",
}

SHELL_HELP = """\
Commands:
  list                 show the current users
  search [TERM]        filter by first name, company, role, or country
  refresh              reload users from the listing service
  add [FIRST LAST COMPANY ROLE COUNTRY]
                       add a user (prompts for fields when omitted)
  delete ID            remove a user
  form                 open the add form (same as add with no arguments)
  help                 show this message
  quit                 leave the shell"""


def _prompt_field(field: str) -> str:
    return click.prompt(FIELD_LABELS[field], default="", show_default=False)


def _interactive_add(app: AppContext, session: UserSession) -> None:
    """Open the add form and prompt until it closes.

    Every field is asked for once, then only the invalid ones. The form
    closes when the user is added or when a re-prompt is left blank.
    """
    form = session.form
    form.open()
    for field in FORM_FIELDS:
        form.set_field(field, _prompt_field(field))

    while form.visible:
        result = session.submit_form()
        app.emit(result, fatal=False)
        for field, message in list(form.errors.items()):
            value = click.prompt(
                f"{FIELD_LABELS[field]} ({message}; blank to cancel)",
                default="",
                show_default=False,
            )
            if not value:
                form.cancel()
                click.echo("Add cancelled.")
                break
            form.set_field(field, value)


def _add(app: AppContext, session: UserSession, args: list[str]) -> None:
    if args:
        if len(args) != len(FORM_FIELDS):
            click.echo("Usage: add FIRST LAST COMPANY ROLE COUNTRY", err=True)
            return
        for field, value in zip(FORM_FIELDS, args, strict=True):
            session.form.set_field(field, value)
        app.emit(session.submit_form(), fatal=False)
        return

    if app.settings.no_interact:
        click.echo("Usage: add FIRST LAST COMPANY ROLE COUNTRY (prompts disabled)", err=True)
        return
    _interactive_add(app, session)


def run_shell(app: AppContext, session: UserSession) -> None:
    """Read and execute shell commands until ``quit`` or end of input."""
    app.emit(session.refresh(), fatal=False)

    while True:
        try:
            line = click.prompt("userlist", prompt_suffix="> ", default="", show_default=False)
        except click.Abort:
            break

        try:
            words = shlex.split(line)
        except ValueError as exc:
            click.echo(f"Cannot parse command: {exc}", err=True)
            continue
        if not words:
            continue

        try:
            keep_going = _dispatch(app, session, words[0].lower(), words[1:])
        except click.Abort:
            session.form.cancel()
            break
        if not keep_going:
            break


def _dispatch(app: AppContext, session: UserSession, command: str, args: list[str]) -> bool:
    """Run one shell command. Returns False when the shell should exit."""
    if command in ("quit", "exit"):
        return False
    if command == "help":
        click.echo(SHELL_HELP)
    elif command == "list":
        app.emit(session.list_users(), fatal=False)
    elif command == "search":
        app.emit(session.search(" ".join(args)), fatal=False)
    elif command == "refresh":
        app.emit(session.refresh(), fatal=False)
    elif command == "add":
        _add(app, session, args)
    elif command == "delete":
        if len(args) == 1:
            app.emit(session.delete_user(args[0]), fatal=False)
        else:
            click.echo("Usage: delete ID", err=True)
    elif command == "form":
        _add(app, session, [])
    else:
        click.echo(f"Unknown command {command!r}. Type 'help' for commands.", err=True)
    return True


@click.command(
    cls=UserlistCommand,
    examples="""\
  userlist shell
  userlist --no-interact shell < commands.txt
  USERLIST_LOADER__ENDPOINT=http://localhost:3000/users userlist shell""",
)
@click.pass_obj
def shell(app: AppContext) -> None:
    """Browse, search, add, and delete users interactively."""
    run_shell(app, app.session)
