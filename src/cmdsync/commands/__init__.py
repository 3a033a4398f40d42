"""Subcommand modules for cmdsync.

Provides register_commands() which uses deferred imports to keep
``cmdsync --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from cmdsync.commands.diff import diff
    from cmdsync.commands.sync import sync

    cli.add_command(sync)
    cli.add_command(diff)
