"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Opens the remote store on demand and centralizes
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import click

from cmdsync.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cmdsync.config.settings import CmdsyncSettings
    from cmdsync.infrastructure.store import RemoteStore
    from cmdsync.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The remote store is only created inside a command run, so ``--help``
    and ``--version`` never need a token.
    """

    def __init__(self, settings: CmdsyncSettings) -> None:
        self.settings = settings

        from cmdsync.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from cmdsync.services.telemetry import enable_telemetry

            enable_telemetry()

    @asynccontextmanager
    async def open_store(self) -> AsyncIterator[RemoteStore]:
        """Yield a Discord store built from settings, closing it afterwards."""
        from cmdsync.infrastructure.discord_rest import DiscordRestStore

        try:
            store = DiscordRestStore.from_config(self.settings.discord)
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc
        try:
            yield store
        finally:
            await store.close()

    def run_pass(self, op: str, file: Path | None, guild_id: str | None) -> ServiceResult:
        """Load definitions and run ``SyncService.<op>`` against the resolved scope.

        *file* falls back to ``[sync] commands_file`` and *guild_id* to
        ``[sync] guild_id``.
        """
        from cmdsync.domain.errors import SyncError
        from cmdsync.infrastructure.loader import load_definitions
        from cmdsync.services.sync import SyncService, error_result

        path = file or Path(self.settings.sync.commands_file)
        scope = guild_id or self.settings.sync.guild_id
        try:
            definitions = load_definitions(path)
        except SyncError as exc:
            return error_result(op, exc)

        async def _run() -> ServiceResult:
            async with self.open_store() as store:
                service = SyncService(store)
                method = service.sync if op == "sync" else service.diff
                return await method(definitions, scope=scope, debug=self.settings.verbose)

        return asyncio.run(_run())

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
