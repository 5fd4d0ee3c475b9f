"""Command: import an interchange file into the store."""

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
  roomctl migrate "Inventory IC01.txt"
  roomctl migrate inventory.txt --replace
  roomctl --json migrate inventory.txt""",
)
@click.argument("source", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--replace",
    is_flag=True,
    help="Delete rows already stored under the file's prefix first.",
)
@click.pass_obj
def migrate(app: AppContext, source: str | None, replace: bool) -> None:
    """Import SOURCE (default: [interchange] default_file) into the store.

    Corrupt records are skipped. Rows are appended unless --replace is given.
    """
    from roomctl.services.migrate import MigrationService

    settings = app.settings
    path = Path(source) if source else settings.base_dir / settings.interchange.default_file
    service = MigrationService(
        app.connection_params,
        replace_existing=settings.store.replace_existing,
    )
    app.emit(service.migrate(path, replace=True if replace else None))
