"""Command: list the posts stored for a room."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from roomctl.commands._base import RoomCommand

if TYPE_CHECKING:
    from roomctl.commands._context import AppContext


@click.command(
    cls=RoomCommand,
    examples="""\
  roomctl show IC
  roomctl -q show ic""",
)
@click.argument("prefix")
@click.pass_obj
def show(app: AppContext, prefix: str) -> None:
    """List every post stored under PREFIX."""
    from roomctl.services.inventory import InventoryService

    app.emit(InventoryService(app.connection_params).show(prefix))
