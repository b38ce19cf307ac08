"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  Owns the config store for the invocation and the
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from devctl.config.settings import DevSettings
    from devctl.infrastructure.store import ConfigStore
    from devctl.services.result import ServiceResult


class AppContext:
    """State flowing through Click's command hierarchy.

    The store is created lazily, so ``--help`` and ``--version`` never
    touch the config file.
    """

    def __init__(self, settings: DevSettings) -> None:
        self.settings = settings
        self._store: ConfigStore | None = None

        from devctl.config.logging import bind_invocation, configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        bind_invocation(config=str(settings.config_path))

    @property
    def store(self) -> ConfigStore:
        """The config store (created on first access)."""
        if self._store is None:
            from devctl.config.discovery import resolve_config_path
            from devctl.infrastructure.store import ConfigStore

            path = self.settings.config_path or resolve_config_path(
                project_root=self.settings.project_root
            )
            self._store = ConfigStore(path)
        return self._store

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult with the right stream and exit code.

        * Success: stdout, returns normally; warnings go to stderr.
        * Failure: stderr, exits with code 1.
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
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
