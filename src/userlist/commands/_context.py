"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy session construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from userlist.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from userlist.config.settings import UserlistSettings
    from userlist.services.result import ServiceResult
    from userlist.services.session import UserSession


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The session (and its HTTP loader) is created on first use so
    ``--help`` and ``--version`` never touch the network layer.
    """

    def __init__(self, settings: UserlistSettings) -> None:
        self.settings = settings
        self._session: UserSession | None = None

        from userlist.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from userlist.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def session(self) -> UserSession:
        """The user session (created lazily on first access)."""
        if self._session is None:
            from userlist.domain.ids import make_id_generator
            from userlist.infrastructure import loader as loader_mod
            from userlist.services.session import UserSession

            loader = loader_mod.RemoteLoader(
                self.settings.loader.endpoint,
                timeout=self.settings.loader.timeout,
            )
            ids = make_id_generator(self.settings.ids.strategy, prefix=self.settings.ids.prefix)
            self._session = UserSession(loader, id_generator=ids)
        return self._session

    def emit(self, result: ServiceResult, *, fatal: bool = True) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr and, when *fatal*, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            return

        click.echo(output, err=True)
        if fatal:
            raise SystemExit(1)
