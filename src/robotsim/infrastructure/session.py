"""Session — the read-execute loop around RobotApplicationService.

One session owns one reader for its whole lifetime (acquired with
``async with`` and released on every exit path). The loop ends on EXIT,
end of input, a ``stop()`` request, or a critical fault. A ``stop()``
takes effect before the next read; a command already started always runs
to completion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from robotsim.output.formatters import OutputSettings, format_message, format_result
from robotsim.output.renderers import render_grid
from robotsim.services._helpers import format_error_for_user, is_critical_error

if TYPE_CHECKING:
    from robotsim.domain.result import ServiceResult
    from robotsim.infrastructure.streams import LineReader, OutputWriter
    from robotsim.services.application import RobotApplicationService

logger = logging.getLogger(__name__)

EXIT_KEYWORD = "EXIT"
PROMPT = "> "
MAX_CONSECUTIVE_READ_ERRORS = 3

WELCOME = (
    "Welcome to the robot simulator!\n"
    "Commands:\n"
    "  PLACE X,Y,DIRECTION   e.g. PLACE 1,2,EAST\n"
    "  MOVE\n"
    "  LEFT | RIGHT\n"
    "  REPORT\n"
    "  EXIT"
)
GOODBYE = "Goodbye!"


class ExitReason(StrEnum):
    """Why a session loop ended."""

    EXIT = "exit"
    END_OF_INPUT = "end_of_input"
    STOPPED = "stopped"
    CRITICAL_ERROR = "critical_error"
    READ_ERRORS = "read_errors"


@dataclass
class SessionSummary:
    """Counters for a finished session."""

    executed: int = 0
    failed: int = 0
    reason: ExitReason | None = None


class Session:
    """Drives one robot session from a line source to a line sink.

    Args:
        service: Application service bound to the session's robot.
        reader: Source of command lines.
        writer: Sink for results and faults.
        output: Rendering switches.
        quiet: Suppress banner, goodbye, and non-REPORT confirmations.
    """

    def __init__(
        self,
        service: RobotApplicationService,
        reader: LineReader,
        writer: OutputWriter,
        *,
        output: OutputSettings | None = None,
        quiet: bool = False,
    ) -> None:
        self._service = service
        self._reader = reader
        self._writer = writer
        self._output = output or OutputSettings()
        self._quiet = quiet
        self._stop_requested = False

    def stop(self) -> None:
        """Request termination before the next iteration."""
        self._stop_requested = True

    async def run(self) -> SessionSummary:
        summary = SessionSummary()
        async with self._reader:
            if not self._quiet:
                self._writer.write(format_message(WELCOME, settings=self._output))
            summary.reason = await self._loop(summary)
            if not self._quiet:
                self._writer.write(format_message(GOODBYE, settings=self._output))
        logger.debug(
            "Session ended: %s (%d executed, %d failed)",
            summary.reason,
            summary.executed,
            summary.failed,
        )
        return summary

    async def _loop(self, summary: SessionSummary) -> ExitReason:
        read_errors = 0
        while True:
            if self._stop_requested:
                return ExitReason.STOPPED

            if self._reader.interactive:
                self._writer.prompt(PROMPT)

            try:
                line = await self._reader.read_line()
            except Exception as exc:
                self._writer.write_error(f"Error: {format_error_for_user(exc)}")
                if is_critical_error(exc):
                    logger.error("Critical input fault, ending session", exc_info=True)
                    return ExitReason.CRITICAL_ERROR
                read_errors += 1
                logger.warning("Failed to read input", exc_info=True)
                if read_errors >= MAX_CONSECUTIVE_READ_ERRORS:
                    return ExitReason.READ_ERRORS
                continue
            read_errors = 0

            if line is None:
                return ExitReason.END_OF_INPUT
            text = line.strip()
            if not text:
                continue
            if text.upper() == EXIT_KEYWORD:
                return ExitReason.EXIT

            try:
                result = await self._service.execute_command(text)
            except Exception as exc:
                self._writer.write_error(f"Error: {format_error_for_user(exc)}")
                if is_critical_error(exc):
                    logger.error("Critical fault, ending session", exc_info=True)
                    return ExitReason.CRITICAL_ERROR
                logger.error("Unhandled fault executing %r", text, exc_info=True)
                summary.executed += 1
                summary.failed += 1
                continue

            summary.executed += 1
            if not result.ok:
                summary.failed += 1
            self._emit(result)

    def _emit(self, result: ServiceResult) -> None:
        if self._quiet and result.ok and result.op != "report":
            return
        self._writer.write(format_result(result, settings=self._output))

        if result.ok and result.op == "report" and self._output.show_grid and not self._output.json_output:
            robot = self._service.robot
            self._writer.write(
                render_grid(robot.position, robot.table_bounds, colors=self._output.colors)
            )
