"""Robot — the single mutable entity of a session.

Two macro-states: UNPLACED (no position) and PLACED(x, y, direction).
``place`` moves UNPLACED -> PLACED or replaces an existing placement.
``move``, ``turn_left`` and ``turn_right`` are self-loops on PLACED and
return a ``ROBOT_NOT_PLACED`` failure from UNPLACED.

INVARIANT: whenever a position exists, it lies inside the table bounds.
Every operation either commits a complete new Position or leaves the old
one untouched.
"""

from __future__ import annotations

import logging

from robotsim.domain import errors
from robotsim.domain.errors import ErrorCode
from robotsim.domain.result import ServiceResult
from robotsim.domain.types import Direction, Position, TableBounds, is_coordinate

logger = logging.getLogger(__name__)


class Robot:
    """A robot confined to a rectangular table.

    The table bounds are fixed at construction. The robot starts unplaced.
    """

    def __init__(self, bounds: TableBounds | None = None) -> None:
        self._bounds = bounds or TableBounds()
        self._position: Position | None = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def position(self) -> Position | None:
        """Current placement, or None while unplaced.

        Position is frozen, so callers cannot mutate robot state through it.
        """
        return self._position

    @property
    def is_placed(self) -> bool:
        return self._position is not None

    @property
    def table_bounds(self) -> TableBounds:
        return self._bounds

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def place(self, x: int, y: int, direction: Direction | str) -> ServiceResult:
        """Place (or re-place) the robot.

        Rejected placements leave any prior placement untouched.
        """
        if not (is_coordinate(x) and is_coordinate(y)):
            return ServiceResult.failure(
                "place", ErrorCode.INVALID_COORDINATES, errors.COORDINATES_NOT_INTEGERS
            )
        facing = direction if isinstance(direction, Direction) else Direction.parse(direction)
        if facing is None:
            return ServiceResult.failure(
                "place", ErrorCode.INVALID_DIRECTION, errors.invalid_direction(direction)
            )
        if not self._bounds.contains(x, y):
            return ServiceResult.failure(
                "place",
                ErrorCode.OUT_OF_BOUNDS,
                errors.place_out_of_bounds(x, y),
                x=x,
                y=y,
            )

        self._position = Position(x=x, y=y, direction=facing)
        logger.debug("Robot placed at %s", self._position.as_report())
        return self._committed("place")

    def move(self) -> ServiceResult:
        """Step one unit forward; rejected without side effects at the edge."""
        if self._position is None:
            return ServiceResult.failure("move", ErrorCode.ROBOT_NOT_PLACED, errors.NOT_PLACED_MOVE)

        candidate = self._position.stepped()
        if not self._bounds.contains(candidate.x, candidate.y):
            return ServiceResult.failure(
                "move",
                ErrorCode.OUT_OF_BOUNDS,
                errors.move_out_of_bounds(candidate.x, candidate.y),
                x=candidate.x,
                y=candidate.y,
            )

        self._position = candidate
        return self._committed("move")

    def turn_left(self) -> ServiceResult:
        return self._turn("left", clockwise=False)

    def turn_right(self) -> ServiceResult:
        return self._turn("right", clockwise=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _turn(self, op: str, *, clockwise: bool) -> ServiceResult:
        if self._position is None:
            return ServiceResult.failure(op, ErrorCode.ROBOT_NOT_PLACED, errors.NOT_PLACED_TURN)

        current = self._position.direction
        new_direction = current.turned_right() if clockwise else current.turned_left()
        self._position = self._position.facing(new_direction)
        return self._committed(op)

    def _committed(self, op: str) -> ServiceResult:
        assert self._position is not None
        return ServiceResult.success(op, position=self._position.model_dump(mode="json"))
