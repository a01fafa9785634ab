"""Input parsing — raw text line to ParsedCommand.

Keywords are case-insensitive. Argument-less keywords must appear alone;
PLACE takes exactly one ``x,y,DIRECTION`` token. Anything else parses to
None. Parsing never raises for malformed input.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, Protocol

from pydantic import BaseModel

from robotsim.domain.types import Direction

DEFAULT_COMMAND_TYPES: tuple[str, ...] = ("PLACE", "MOVE", "LEFT", "RIGHT", "REPORT")

_INTEGER = re.compile(r"^[+-]?[0-9]+$")
_WHITESPACE = re.compile(r"\s+")


class ParsedCommand(BaseModel):
    """Transient descriptor produced by the parser."""

    model_config = {"frozen": True}

    type: str
    parameters: dict[str, Any] | None = None


class InputParser(Protocol):
    """Anything that turns a text line into a ParsedCommand (or None)."""

    def parse(self, text: str) -> ParsedCommand | None: ...


class RegexInputParser:
    """Whitespace-tokenising parser with pattern-checked PLACE arguments.

    The accepted keyword set starts as *command_types* and can be widened
    with :meth:`register_keyword` when new command types are registered.
    """

    def __init__(self, command_types: Iterable[str] = DEFAULT_COMMAND_TYPES) -> None:
        self._command_types = {name.upper() for name in command_types}

    @property
    def command_types(self) -> frozenset[str]:
        return frozenset(self._command_types)

    def register_keyword(self, name: str) -> None:
        self._command_types.add(name.strip().upper())

    def parse(self, text: str) -> ParsedCommand | None:
        stripped = text.strip()
        if not stripped:
            return None

        parts = _WHITESPACE.split(stripped)
        command_type = parts[0].upper()
        if command_type not in self._command_types:
            return None

        if command_type == "PLACE":
            if len(parts) != 2:
                return None
            parameters = parse_place_parameters(parts[1])
            if parameters is None:
                return None
            return ParsedCommand(type=command_type, parameters=parameters)

        if len(parts) != 1:
            return None
        return ParsedCommand(type=command_type)


def parse_place_parameters(token: str) -> dict[str, Any] | None:
    """Parse ``x,y,DIRECTION`` into ``{"x": int, "y": int, "direction": Direction}``.

    Examples:
        >>> parse_place_parameters("1,2,north")
        {'x': 1, 'y': 2, 'direction': <Direction.NORTH: 'NORTH'>}
        >>> parse_place_parameters("1.5,2,NORTH") is None
        True
    """
    fields = token.split(",")
    if len(fields) != 3:
        return None

    x_text, y_text, direction_text = (field.strip() for field in fields)
    if not (_INTEGER.match(x_text) and _INTEGER.match(y_text)):
        return None

    direction = Direction.parse(direction_text)
    if direction is None:
        return None

    try:
        x, y = int(x_text), int(y_text)
    except ValueError:
        # Longer than the interpreter's int conversion limit.
        return None
    return {"x": x, "y": y, "direction": direction}
