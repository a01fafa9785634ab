"""Grid renderer — draws the table with the robot on it.

The top row printed is ``y = height - 1`` so north is up on screen.
"""

from __future__ import annotations

from rich.text import Text

from robotsim.domain import errors
from robotsim.domain.types import Direction, Position, TableBounds
from robotsim.output.console import create_console, get_output

ARROWS: dict[Direction, str] = {
    Direction.NORTH: "^",
    Direction.EAST: ">",
    Direction.SOUTH: "v",
    Direction.WEST: "<",
}

EMPTY_CELL = "[ ]"


def render_grid(position: Position | None, bounds: TableBounds, *, colors: bool = True) -> str:
    """Render the table as rows of ``[ ]`` cells with the robot drawn as an arrow."""
    console = create_console(colors=colors)

    for y in range(bounds.height - 1, -1, -1):
        line = Text()
        for x in range(bounds.width):
            if position is not None and (position.x, position.y) == (x, y):
                line.append(f"[{ARROWS[position.direction]}]", style="robot.robot")
            else:
                line.append(EMPTY_CELL, style="robot.cell")
        console.print(line, soft_wrap=True)

    if position is None:
        console.print(Text(errors.NOT_PLACED_REPORT), soft_wrap=True)
    else:
        summary = f"Robot is at ({position.x}, {position.y}) facing {position.direction}"
        console.print(Text(summary, style="robot.report"), soft_wrap=True)

    return get_output(console).rstrip("\n")
