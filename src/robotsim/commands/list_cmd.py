"""Command: list the command keywords the session accepts."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from robotsim.commands._base import RobotCommand

if TYPE_CHECKING:
    from robotsim.commands._context import AppContext


@click.command("commands", cls=RobotCommand)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List registered command keywords (built-in and plugin-provided)."""
    types = app.factory.registered_types
    if app.settings.use_json_output:
        click.echo(json.dumps({"status": "success", "commands": types}))
        return
    for name in types:
        click.echo(name)
