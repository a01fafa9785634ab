"""Command: interactive (or piped) robot session."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import anyio
import click

from robotsim.commands._base import RobotCommand

if TYPE_CHECKING:
    from robotsim.commands._context import AppContext


@click.command(
    cls=RobotCommand,
    examples="""\
  robotsim run
  printf 'PLACE 0,0,NORTH\\nMOVE\\nREPORT\\n' | robotsim run
  robotsim run --input moves.txt
  robotsim --width 8 --height 8 run
  robotsim --json run --input moves.txt""",
)
@click.option(
    "-i",
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read commands from a file instead of stdin.",
)
@click.pass_obj
def run(app: AppContext, input_path: Path | None) -> None:
    """Start a session reading one command per line until EXIT or end of input."""
    from robotsim.infrastructure.session import ExitReason, Session
    from robotsim.infrastructure.streams import ClickOutputWriter, StreamLineReader

    reader = StreamLineReader.open(input_path) if input_path else StreamLineReader.stdin()
    session = Session(
        app.service,
        reader,
        ClickOutputWriter(),
        output=app.output,
        quiet=app.settings.quiet,
    )
    try:
        summary = anyio.run(session.run)
    except KeyboardInterrupt:
        session.stop()
        reader.close()
        click.echo(err=True)
        raise SystemExit(130) from None

    if summary.reason in (ExitReason.CRITICAL_ERROR, ExitReason.READ_ERRORS):
        raise SystemExit(1)
