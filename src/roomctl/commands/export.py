"""Command: write a stored room to an interchange file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from roomctl.commands._base import RoomCommand

if TYPE_CHECKING:
    from roomctl.commands._context import AppContext


@click.command(
    cls=RoomCommand,
    examples="""\
  roomctl export IC --output "Inventory IC.txt"
  roomctl export IC --output /tmp/ic.txt""",
)
@click.argument("prefix")
@click.option(
    "--output",
    required=True,
    type=click.Path(dir_okay=False),
    help="Interchange file to write.",
)
@click.pass_obj
def export(app: AppContext, prefix: str, output: str) -> None:
    """Export the posts stored under PREFIX in interchange format."""
    from roomctl.services.inventory import InventoryService

    app.emit(InventoryService(app.connection_params).export(prefix, Path(output)))
