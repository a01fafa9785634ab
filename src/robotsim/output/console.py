"""Rich Console factory and theme for robotsim output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ROBOT_THEME = Theme(
    {
        "robot.ok": "green",
        "robot.error": "red",
        "robot.report": "blue",
        "robot.robot": "bold yellow",
        "robot.cell": "dim",
        "robot.banner": "bold cyan",
    }
)


def create_console(*, colors: bool = True, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        colors: Emit ANSI styles. Forced on regardless of TTY detection,
            since the caller decides where the text goes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ROBOT_THEME,
        force_terminal=colors,
        no_color=not colors,
        color_system="standard" if colors else None,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
