"""Command: show what a sync would change, without changing it."""

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
  cmdsync diff
  cmdsync diff commands.toml --guild 123456789012345678
  cmdsync -v diff""",
)
@click.argument("file", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--guild", "guild_id", default=None, help="Guild id (default: global commands).")
@click.pass_obj
def diff(app: AppContext, file: Path | None, guild_id: str | None) -> None:
    """Compare FILE with the registered commands (dry run)."""
    app.emit(app.run_pass("diff", file, guild_id))
