"""Root CLI group for robotsim with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from robotsim import __version__
from robotsim.commands import register_commands
from robotsim.commands._base import RobotGroup
from robotsim.commands._context import AppContext
from robotsim.config.settings import RobotSettings


@click.group(cls=RobotGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="robotsim")
@click.option("--json", "json_output", is_flag=True, help="One JSON object per result line.")
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.option("-q", "--quiet", is_flag=True, help="Only print reports and errors.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--grid", "show_grid", is_flag=True, help="Draw the table after REPORT.")
@click.option("--width", type=click.IntRange(min=1), default=None, help="Table width.")
@click.option("--height", type=click.IntRange(min=1), default=None, help="Table height.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    no_color: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    show_grid: bool,
    width: int | None,
    height: int | None,
    config_path: str | None,
) -> None:
    """robotsim — drive a toy robot around a table."""
    ctx.ensure_object(dict)
    flags: dict[str, object] = {}
    if show_grid:
        flags["output"] = {"show_grid": True}
    try:
        settings = RobotSettings.from_cli(
            config_path=config_path,
            width=width,
            height=height,
            json_output=json_output,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
            **flags,
        )
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise click.ClickException(f"Invalid configuration for {location}: {first['msg']}") from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
