"""Plugin discovery, command registration, and hook dispatch.

Discovery: entry_points (pip-installed) in the ``robotsim.plugins`` group
via pluggy's setuptools entrypoint loader, plus direct registration.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from robotsim.plugins.hookspecs import RobotsimHookSpec

if TYPE_CHECKING:
    from robotsim.domain.result import ServiceResult
    from robotsim.domain.robot import Robot
    from robotsim.services.factory import CommandFactory

PROJECT_NAME = "robotsim"
ENTRY_POINT_GROUP = "robotsim.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin loading and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(RobotsimHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins. Returns the names of all registered plugins."""
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load entry-point plugins", exc_info=True)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Hook bridges
    # ------------------------------------------------------------------

    def install_commands(self, factory: CommandFactory, robot: Robot) -> list[str]:
        """Register plugin-provided command creators on *factory*.

        Returns the command types that were installed. A plugin that raises
        or returns something other than a dict is skipped with a warning.
        """
        installed: list[str] = []
        for plugin in self._pm.get_plugins():
            hook = getattr(plugin, "register_commands", None)
            if hook is None:
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            try:
                creators = hook(robot=robot)
            except Exception:
                logger.warning(
                    "Failed to collect commands from plugin %s", plugin_name, exc_info=True
                )
                continue
            if creators is None:
                continue
            if not isinstance(creators, dict):
                logger.warning("Plugin %s returned non-dict command registrations", plugin_name)
                continue
            for command_type, creator in creators.items():
                if not isinstance(command_type, str) or not callable(creator):
                    logger.warning(
                        "Skipping command registration %r from plugin %s",
                        command_type,
                        plugin_name,
                    )
                    continue
                factory.register_command(command_type, creator)
                installed.append(command_type.upper())
        return installed

    def dispatch_post_command(self, text: str, result: ServiceResult) -> None:
        """Notify plugins of a handled command. Failures become warnings."""
        try:
            self._pm.hook.post_command(
                line=text, ok=result.ok, op=result.op, message=result.message
            )
        except Exception:
            logger.warning("post_command hook failed", exc_info=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
