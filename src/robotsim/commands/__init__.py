"""Subcommand modules for robotsim.

Provides register_commands() which uses deferred imports to keep
``robotsim --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from robotsim.commands.exec_cmd import exec_cmd
    from robotsim.commands.list_cmd import list_cmd
    from robotsim.commands.run import run

    cli.add_command(run)
    cli.add_command(exec_cmd)
    cli.add_command(list_cmd)
