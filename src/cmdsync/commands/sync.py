"""Command: reconcile registered commands with a definitions file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from cmdsync.commands._base import CmdsyncCommand

if TYPE_CHECKING:
    from cmdsync.commands._context import AppContext


@click.command(
    cls=CmdsyncCommand,
    examples="""\
  cmdsync sync
  cmdsync sync commands.toml
  cmdsync sync commands.json --guild 123456789012345678
  cmdsync --json sync""",
)
@click.argument("file", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--guild", "guild_id", default=None, help="Guild id (default: global commands).")
@click.pass_obj
def sync(app: AppContext, file: Path | None, guild_id: str | None) -> None:
    """Create, delete, and update commands until the remote matches FILE."""
    app.emit(app.run_pass("sync", file, guild_id))
