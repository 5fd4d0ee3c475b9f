"""Subcommand modules for roomctl.

Provides register_commands() which uses deferred imports to keep
``roomctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from roomctl.commands.clear import clear
    from roomctl.commands.export import export
    from roomctl.commands.migrate import migrate
    from roomctl.commands.show import show

    cli.add_command(migrate)
    cli.add_command(show)
    cli.add_command(export)
    cli.add_command(clear)
