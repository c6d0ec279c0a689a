"""Click command base class with ``--examples`` support.

Every userlist subcommand carries a short block of example invocations.
``--help`` stays concise and points at ``--examples``, which prints the
block and exits before the command body runs (so nothing is fetched).
"""

from __future__ import annotations

from typing import Any

import click

EXAMPLES_HINT = "Run with --examples to see sample invocations."


class UserlistCommand(click.Command):
    """Click Command that prints ``examples`` on ``--examples``."""

    def __init__(self, *args: Any, examples: str, **kwargs: Any) -> None:
        kwargs.setdefault("epilog", EXAMPLES_HINT)
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._show_examples,
                help="Show usage examples.",
            )
        )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)
