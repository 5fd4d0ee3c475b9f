"""Command: delete stored rows."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from roomctl.commands._base import RoomCommand

if TYPE_CHECKING:
    from roomctl.commands._context import AppContext


@click.command(
    cls=RoomCommand,
    examples="""\
  roomctl clear IC --yes
  roomctl clear --yes""",
)
@click.argument("prefix", required=False)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def clear(app: AppContext, prefix: str | None, yes: bool) -> None:
    """Delete the rows stored under PREFIX, or every row when omitted."""
    from roomctl.services.inventory import InventoryService

    if not yes:
        target = f"rows under '{prefix}'" if prefix else "ALL rows"
        click.confirm(f"Delete {target}?", abort=True)
    app.emit(InventoryService(app.connection_params).clear(prefix))
