"""RoomCommand — Click command with an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints sample invocations of the
command and exits before any argument is validated, so
``roomctl export --examples`` works without ``--output``.
"""

from __future__ import annotations

from typing import Any

import click


class RoomCommand(click.Command):
    """Command carrying sample invocations in :attr:`examples`."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    is_eager=True,
                    expose_value=False,
                    callback=self._print_examples,
                    help="Show sample invocations and exit.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
        ctx.exit()
