"""Command: execute command lines given as arguments."""

from __future__ import annotations

from typing import TYPE_CHECKING

import anyio
import click

from robotsim.commands._base import RobotCommand

if TYPE_CHECKING:
    from robotsim.commands._context import AppContext
    from robotsim.domain.result import ServiceResult


@click.command(
    "exec",
    cls=RobotCommand,
    examples="""\
  robotsim exec "PLACE 0,0,NORTH" MOVE REPORT
  robotsim exec --strict "PLACE 5,5,NORTH" REPORT
  robotsim --json exec "PLACE 1,2,EAST" REPORT""",
)
@click.argument("lines", nargs=-1, required=True)
@click.option("--strict", is_flag=True, help="Exit with status 1 if any command fails.")
@click.pass_obj
def exec_cmd(app: AppContext, lines: tuple[str, ...], strict: bool) -> None:
    """Execute each LINE as one command against a fresh robot."""
    from robotsim.infrastructure.session import EXIT_KEYWORD
    from robotsim.output.formatters import format_result

    async def _execute_all() -> list[ServiceResult]:
        results: list[ServiceResult] = []
        for line in lines:
            if line.strip().upper() == EXIT_KEYWORD:
                break
            results.append(await app.service.execute_command(line))
        return results

    output = app.output
    results = anyio.run(_execute_all)
    for result in results:
        if app.settings.quiet and result.ok and result.op != "report":
            continue
        click.echo(format_result(result, settings=output))

    if strict and any(not r.ok for r in results):
        raise SystemExit(1)
