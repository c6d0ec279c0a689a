"""Subcommand modules for userlist.

Provides register_commands() which uses deferred imports to keep
``userlist --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from userlist.commands.list_cmd import list_cmd
    from userlist.commands.shell import shell
    from userlist.commands.validate import validate

    cli.add_command(list_cmd)
    cli.add_command(validate)
    cli.add_command(shell)
