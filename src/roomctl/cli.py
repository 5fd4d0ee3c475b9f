"""roomctl entry point: global output and logging flags, then one subcommand."""

from __future__ import annotations

import click

from roomctl import __version__
from roomctl.commands import register_commands
from roomctl.commands._context import AppContext
from roomctl.config.settings import RoomSettings


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, "-V", "--version", prog_name="roomctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the result lines.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and stage timings.")
@click.option("--log-json", is_flag=True, help="Write log records to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Use this roomctl.toml instead of searching for one.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """Keep the workstation directory of each classroom.

    Posts are imported from ##-delimited inventory files into a relational
    store, then listed, exported back, or cleared.
    """
    ctx.obj = AppContext(RoomSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
