"""Click base classes for robotsim subcommands.

A command declared with ``examples="..."`` grows an eager ``--examples``
flag that prints those invocations and exits before any robot is built.
"""

from __future__ import annotations

from typing import Any

import click


class ExamplesOption(click.Option):
    """``--examples`` flag carrying the text it prints."""

    def __init__(self, text: str) -> None:
        super().__init__(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._print,
            help="Show example invocations and exit.",
        )
        self.text = text

    def _print(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.text}")
            ctx.exit(0)


class RobotCommand(click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if examples:
            self.params.append(ExamplesOption(examples))


class RobotGroup(click.Group):
    """Root group; ``@cli.command`` subcommands default to RobotCommand."""

    command_class = RobotCommand
