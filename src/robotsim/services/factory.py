"""Command factory — parsed descriptor to Command instance.

The registry maps upper-cased command types to creator callables.
Registration overwrites, so the standard set can be customised or
extended without touching existing command classes.

INVARIANT: ``create_command`` never raises. Parser faults, unknown types,
and creator faults all yield None.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from robotsim.services._helpers import safe_execute
from robotsim.services.commands import (
    Command,
    LeftCommand,
    MoveCommand,
    PlaceCommand,
    ReportCommand,
    RightCommand,
)
from robotsim.services.parser import InputParser, ParsedCommand, RegexInputParser

if TYPE_CHECKING:
    from robotsim.domain.robot import Robot

logger = logging.getLogger(__name__)

CommandCreator = Callable[[Mapping[str, Any] | None], Command]


class CommandFactory:
    """Parses input and builds commands through an extensible registry."""

    def __init__(self, parser: InputParser | None = None) -> None:
        self._parser: InputParser = parser or RegexInputParser()
        self._registry: dict[str, CommandCreator] = {}

    @classmethod
    def with_default_commands(
        cls, robot: Robot, parser: InputParser | None = None
    ) -> CommandFactory:
        """Factory pre-wired with PLACE, MOVE, LEFT, RIGHT and REPORT."""
        factory = cls(parser)

        def create_place(params: Mapping[str, Any] | None) -> Command:
            if not params or not {"x", "y", "direction"} <= params.keys():
                raise ValueError("Invalid PLACE parameters")
            return PlaceCommand(robot, params["x"], params["y"], params["direction"])

        factory.register_command("PLACE", create_place)
        factory.register_command("MOVE", lambda _params: MoveCommand(robot))
        factory.register_command("LEFT", lambda _params: LeftCommand(robot))
        factory.register_command("RIGHT", lambda _params: RightCommand(robot))
        factory.register_command("REPORT", lambda _params: ReportCommand(robot))
        return factory

    @property
    def registered_types(self) -> list[str]:
        return sorted(self._registry)

    def register_command(self, command_type: str, creator: CommandCreator) -> None:
        """Register (or replace) the creator for *command_type*.

        Parsers that expose ``register_keyword`` learn the new keyword too.
        """
        key = command_type.strip().upper()
        if key in self._registry:
            logger.debug("Replacing creator for command '%s'", key)
        self._registry[key] = creator

        register_keyword = getattr(self._parser, "register_keyword", None)
        if callable(register_keyword):
            register_keyword(key)

    def create_command(self, text: str) -> Command | None:
        parsed: ParsedCommand | None = safe_execute(
            lambda: self._parser.parse(text),
            message="Input parser failed",
        )
        if parsed is None:
            return None

        creator = self._registry.get(parsed.type.upper())
        if creator is None:
            return None

        return safe_execute(
            lambda: creator(parsed.parameters),
            message=f"Failed to construct command {parsed.type}",
            level=logging.DEBUG,
        )
