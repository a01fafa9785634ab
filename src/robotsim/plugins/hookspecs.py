"""Pluggy hook specifications for robotsim.

One setup-time hook lets plugins add or override command types.
One per-command hook observes every executed command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from robotsim.domain.robot import Robot
    from robotsim.services.factory import CommandCreator

hookspec = pluggy.HookspecMarker("robotsim")
hookimpl = pluggy.HookimplMarker("robotsim")


class RobotsimHookSpec:
    """Hook specifications for the robotsim plugin system."""

    @hookspec
    def register_commands(self, robot: Robot) -> dict[str, CommandCreator] | None:
        """Return command type -> creator mappings bound to *robot*."""

    @hookspec
    def post_command(self, line: str, ok: bool, op: str, message: str) -> None:
        """Called after each command line has been handled."""
