"""RobotApplicationService — the one entry point the shell talks to.

Pipeline per input line: factory (parse + construct) -> execute -> log.
Expected failures pass through untouched and are logged at warning level.
Unexpected faults raised while executing are caught here, logged at error
level, and converted into a generic EXECUTION_ERROR result.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from robotsim.domain import errors
from robotsim.domain.errors import ErrorCode
from robotsim.domain.result import ServiceResult
from robotsim.services._helpers import safe_execute_async

if TYPE_CHECKING:
    from robotsim.domain.robot import Robot
    from robotsim.services.factory import CommandFactory

logger = structlog.get_logger(__name__)

ResultListener = Callable[[str, ServiceResult], None]


class RobotApplicationService:
    """Orchestrates command creation and execution against one Robot.

    Args:
        robot: The session's robot.
        factory: Builds commands from raw input.
        listener: Optional callback invoked with ``(input, result)`` after
            every command, e.g. plugin dispatch. Listener faults are logged
            and never change the returned result.
    """

    def __init__(
        self,
        robot: Robot,
        factory: CommandFactory,
        *,
        listener: ResultListener | None = None,
    ) -> None:
        self._robot = robot
        self._factory = factory
        self._listener = listener

    @property
    def robot(self) -> Robot:
        return self._robot

    async def execute_command(self, text: str) -> ServiceResult:
        logger.debug("Executing command", input=text)

        command = self._factory.create_command(text)
        if command is None:
            logger.warning("Invalid command", input=text)
            return self._finish(
                text,
                ServiceResult.failure(
                    "invalid_command", ErrorCode.INVALID_COMMAND, errors.invalid_command(text)
                ),
            )

        result = await safe_execute_async(
            command.execute,
            message="Error executing command",
            log=logger.bind(input=text),
        )
        if result is None:
            return self._finish(
                text,
                ServiceResult.failure(
                    command.name or "execute",
                    ErrorCode.EXECUTION_ERROR,
                    errors.execution_failed(text),
                ),
            )

        if result.ok:
            logger.debug("Command executed successfully", op=result.op, message=result.message)
        else:
            logger.warning(
                "Command execution failed",
                op=result.op,
                code=result.error.code if result.error else None,
                message=result.message,
            )
        return self._finish(text, result)

    def get_robot_state(self) -> str:
        position = self._robot.position
        if position is None:
            return errors.NOT_PLACED_REPORT
        return f"Robot is at position ({position.x}, {position.y}) facing {position.direction}"

    def _finish(self, text: str, result: ServiceResult) -> ServiceResult:
        if self._listener is not None:
            try:
                self._listener(text, result)
            except Exception:
                logger.warning("Result listener failed", input=text, exc_info=True)
        return result
