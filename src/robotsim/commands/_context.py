"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Wires the robot, command factory, plugins, and
application service lazily so ``--help`` and ``--version`` never build them.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from robotsim.output.formatters import OutputSettings

if TYPE_CHECKING:
    from robotsim.config.settings import RobotSettings
    from robotsim.domain.robot import Robot
    from robotsim.plugins.manager import PluginManager
    from robotsim.services.application import RobotApplicationService
    from robotsim.services.factory import CommandFactory


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    One AppContext holds one Robot, so one CLI invocation is one session.
    """

    def __init__(self, settings: RobotSettings) -> None:
        self.settings = settings
        self._robot: Robot | None = None
        self._factory: CommandFactory | None = None
        self._plugins: PluginManager | None = None
        self._service: RobotApplicationService | None = None

        from robotsim.config.logging import configure_logging

        configure_logging(level=settings.log_level, log_json=settings.use_json_logs)

    @property
    def robot(self) -> Robot:
        if self._robot is None:
            from robotsim.domain.robot import Robot

            self._robot = Robot(self.settings.table.to_bounds())
        return self._robot

    @property
    def plugins(self) -> PluginManager:
        if self._plugins is None:
            from robotsim.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load()
        return self._plugins

    @property
    def factory(self) -> CommandFactory:
        if self._factory is None:
            from robotsim.services.factory import CommandFactory

            factory = CommandFactory.with_default_commands(self.robot)
            self.plugins.install_commands(factory, self.robot)
            self._factory = factory
        return self._factory

    @property
    def service(self) -> RobotApplicationService:
        """The application service (created lazily on first access)."""
        if self._service is None:
            from robotsim.services.application import RobotApplicationService

            self._service = RobotApplicationService(
                self.robot,
                self.factory,
                listener=self.plugins.dispatch_post_command,
            )
        return self._service

    @property
    def output(self) -> OutputSettings:
        """Rendering switches; colour only when stdout is a terminal."""
        return OutputSettings(
            json_output=self.settings.use_json_output,
            colors=self.settings.use_colors and sys.stdout.isatty(),
            show_grid=self.settings.output.show_grid,
        )
