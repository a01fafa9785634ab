"""Direction, Position, and TableBounds value types.

Coordinates follow one convention: x grows to the east, y grows to the
north, origin at (0, 0) in the south-west corner. A table of
``width x height`` accepts ``0 <= x < width`` and ``0 <= y < height``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class Direction(StrEnum):
    """Compass directions in clockwise order."""

    NORTH = "NORTH"
    EAST = "EAST"
    SOUTH = "SOUTH"
    WEST = "WEST"

    def turned_left(self) -> Direction:
        """Counter-clockwise neighbour."""
        order = list(Direction)
        return order[(order.index(self) - 1) % len(order)]

    def turned_right(self) -> Direction:
        """Clockwise neighbour."""
        order = list(Direction)
        return order[(order.index(self) + 1) % len(order)]

    @classmethod
    def parse(cls, value: object) -> Direction | None:
        """Case-insensitive lookup; None for anything that is not a direction."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


# Unit step (dx, dy) for a single forward move.
STEPS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}


def is_coordinate(value: object) -> bool:
    """Whether *value* is a usable grid coordinate type (bool excluded)."""
    return isinstance(value, int) and not isinstance(value, bool)


class Position(BaseModel):
    """Immutable robot placement: coordinates plus facing."""

    model_config = {"frozen": True}

    x: int
    y: int
    direction: Direction

    def stepped(self) -> Position:
        """The position one unit ahead, keeping the same facing."""
        dx, dy = STEPS[self.direction]
        return self.model_copy(update={"x": self.x + dx, "y": self.y + dy})

    def facing(self, direction: Direction) -> Position:
        """Same coordinates, new facing."""
        return self.model_copy(update={"direction": direction})

    def as_report(self) -> str:
        """``x,y,DIRECTION`` as printed by REPORT."""
        return f"{self.x},{self.y},{self.direction}"


class TableBounds(BaseModel):
    """Fixed table size. Both dimensions must be positive."""

    model_config = {"frozen": True}

    width: int = Field(default=5, gt=0)
    height: int = Field(default=5, gt=0)

    def contains(self, x: int, y: int) -> bool:
        """Bounds check for ``[0, width) x [0, height)``."""
        return 0 <= x < self.width and 0 <= y < self.height
