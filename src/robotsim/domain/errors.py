"""Error codes and the canonical user-facing message set.

Every expected failure is reported through a ServiceResult carrying one
of these codes and messages. Nothing here is raised.
"""

from __future__ import annotations

from enum import StrEnum

from robotsim.domain.types import Direction


class ErrorCode(StrEnum):
    """Machine-readable failure codes."""

    ROBOT_NOT_PLACED = "ROBOT_NOT_PLACED"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    INVALID_COORDINATES = "INVALID_COORDINATES"
    NEGATIVE_COORDINATES = "NEGATIVE_COORDINATES"
    INVALID_DIRECTION = "INVALID_DIRECTION"
    INVALID_COMMAND = "INVALID_COMMAND"
    EXECUTION_ERROR = "EXECUTION_ERROR"


NOT_PLACED_MOVE = "Robot must be placed on the table before it can move"
NOT_PLACED_TURN = "Robot must be placed on the table before it can turn"
NOT_PLACED_REPORT = "Robot has not been placed on the table yet"
COORDINATES_NOT_INTEGERS = "Coordinates must be integers"
COORDINATES_NEGATIVE = "Coordinates must be non-negative"


def place_out_of_bounds(x: int, y: int) -> str:
    return f"Position ({x}, {y}) is outside the table bounds"


def move_out_of_bounds(x: int, y: int) -> str:
    return f"Cannot move to position ({x}, {y}) - outside the table bounds"


def invalid_direction(value: object) -> str:
    allowed = ", ".join(d.value for d in Direction)
    return f"Invalid direction: {value}. Must be one of: {allowed}"


def invalid_command(text: str) -> str:
    return f"Invalid command: {text}"


def execution_failed(text: str) -> str:
    return f"An error occurred while executing the command: {text}"
