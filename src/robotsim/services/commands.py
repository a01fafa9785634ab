"""Command objects — one executable unit per user request.

Each command is bound to a Robot at construction time (and, for PLACE, to
its x, y, and direction) and exposes a single async ``execute()`` that
returns a ServiceResult. Success carries a human-readable confirmation in
``data["message"]``; failure carries the cause in ``error.message``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from robotsim.domain import errors
from robotsim.domain.errors import ErrorCode
from robotsim.domain.result import ServiceResult
from robotsim.domain.types import Direction, is_coordinate

if TYPE_CHECKING:
    from robotsim.domain.robot import Robot


class Command(ABC):
    """Base class for robot commands."""

    #: Registry keyword; also used as ``ServiceResult.op``.
    name: str = ""

    def __init__(self, robot: Robot) -> None:
        self._robot = robot

    @abstractmethod
    async def execute(self) -> ServiceResult:
        """Run the command against the bound robot."""

    def _position_data(self) -> dict[str, Any]:
        position = self._robot.position
        return {"position": position.model_dump(mode="json")} if position else {}


class PlaceCommand(Command):
    """PLACE X,Y,DIRECTION — put the robot on the table.

    Coordinates and direction are checked here before the robot's own
    bounds check runs.
    """

    name = "place"

    def __init__(self, robot: Robot, x: Any, y: Any, direction: Any) -> None:
        super().__init__(robot)
        self.x = x
        self.y = y
        self.direction = direction

    async def execute(self) -> ServiceResult:
        if not (is_coordinate(self.x) and is_coordinate(self.y)):
            return ServiceResult.failure(
                self.name, ErrorCode.INVALID_COORDINATES, errors.COORDINATES_NOT_INTEGERS
            )
        if self.x < 0 or self.y < 0:
            return ServiceResult.failure(
                self.name, ErrorCode.NEGATIVE_COORDINATES, errors.COORDINATES_NEGATIVE
            )

        direction = self.direction
        if not isinstance(direction, Direction):
            direction = Direction.parse(direction)
        if direction is None:
            return ServiceResult.failure(
                self.name, ErrorCode.INVALID_DIRECTION, errors.invalid_direction(self.direction)
            )

        result = self._robot.place(self.x, self.y, direction)
        if not result.ok:
            return result
        return ServiceResult.success(
            self.name,
            f"Robot placed at ({self.x}, {self.y}) facing {direction}",
            **self._position_data(),
        )


class MoveCommand(Command):
    """MOVE — one unit forward in the current facing."""

    name = "move"

    async def execute(self) -> ServiceResult:
        if not self._robot.is_placed:
            return ServiceResult.failure(self.name, ErrorCode.ROBOT_NOT_PLACED, errors.NOT_PLACED_MOVE)

        result = self._robot.move()
        if not result.ok:
            return result
        position = self._robot.position
        assert position is not None
        return ServiceResult.success(
            self.name,
            f"Robot moved to ({position.x}, {position.y}) facing {position.direction}",
            **self._position_data(),
        )


class _TurnCommand(Command):
    side: str = ""

    async def execute(self) -> ServiceResult:
        if not self._robot.is_placed:
            return ServiceResult.failure(self.name, ErrorCode.ROBOT_NOT_PLACED, errors.NOT_PLACED_TURN)

        result = self._turn()
        if not result.ok:
            return result
        position = self._robot.position
        assert position is not None
        return ServiceResult.success(
            self.name,
            f"Robot turned {self.side}, now facing {position.direction}",
            **self._position_data(),
        )

    @abstractmethod
    def _turn(self) -> ServiceResult: ...


class LeftCommand(_TurnCommand):
    """LEFT — rotate 90 degrees counter-clockwise."""

    name = "left"
    side = "left"

    def _turn(self) -> ServiceResult:
        return self._robot.turn_left()


class RightCommand(_TurnCommand):
    """RIGHT — rotate 90 degrees clockwise."""

    name = "right"
    side = "right"

    def _turn(self) -> ServiceResult:
        return self._robot.turn_right()


class ReportCommand(Command):
    """REPORT — announce ``x,y,DIRECTION``."""

    name = "report"

    async def execute(self) -> ServiceResult:
        position = self._robot.position
        if position is None:
            return ServiceResult.failure(
                self.name, ErrorCode.ROBOT_NOT_PLACED, errors.NOT_PLACED_REPORT
            )
        report = position.as_report()
        return ServiceResult.success(
            self.name,
            f"Output: {report}",
            report=report,
            **self._position_data(),
        )
