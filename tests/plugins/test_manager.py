"""Tests for PluginManager — registration, command installation, and hook relay."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import pluggy
import pytest

from robotsim.domain.result import ServiceResult
from robotsim.domain.robot import Robot
from robotsim.plugins.manager import PluginManager
from robotsim.services.application import RobotApplicationService
from robotsim.services.commands import Command
from robotsim.services.factory import CommandFactory
from tests.conftest import run_lines

hookimpl = pluggy.HookimplMarker("robotsim")


class _JumpCommand(Command):
    name = "jump"

    async def execute(self) -> ServiceResult:
        return ServiceResult.success("jump", "Robot jumped")


class _JumpPlugin:
    @hookimpl
    def register_commands(self, robot: Robot) -> dict[str, Any]:
        return {"jump": lambda _params: _JumpCommand(robot)}


class _RecordingPlugin:
    def __init__(self) -> None:
        self.calls: list[tuple[str, bool, str, str]] = []

    @hookimpl
    def post_command(self, line: str, ok: bool, op: str, message: str) -> None:
        self.calls.append((line, ok, op, message))


class _BrokenPlugin:
    @hookimpl
    def register_commands(self, robot: Robot) -> dict[str, Any]:
        raise RuntimeError("boom")

    @hookimpl
    def post_command(self, line: str, ok: bool, op: str, message: str) -> None:
        raise RuntimeError("boom")


class _NonDictPlugin:
    @hookimpl
    def register_commands(self, robot: Robot) -> list[str]:
        return ["JUMP"]


class TestPluginManager:
    def test_hook_relay_accessible(self) -> None:
        pm = PluginManager()
        assert hasattr(pm.hook, "register_commands")
        assert hasattr(pm.hook, "post_command")

    def test_register_plugin(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_JumpPlugin(), name="jump")
        assert "jump" in pm.list_plugin_names()

    def test_register_plugin_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_JumpPlugin())
        assert "_JumpPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self) -> None:
        pm = PluginManager()
        plugin = _JumpPlugin()
        pm.register_plugin(plugin, name="jump")
        pm.unregister(plugin)
        assert "jump" not in pm.list_plugin_names()

    def test_discover_marks_loaded(self) -> None:
        pm = PluginManager()
        assert pm.is_loaded is False
        pm.discover_and_load()
        assert pm.is_loaded is True

    def test_discover_instantiates_plugin_classes(self) -> None:
        pm = PluginManager()
        pm._pm.register(_RecordingPlugin, name="recording")
        pm.discover_and_load()
        (plugin,) = [p for p in pm._pm.get_plugins() if pm._pm.get_name(p) == "recording"]
        assert isinstance(plugin, _RecordingPlugin)


class TestInstallCommands:
    @pytest.mark.anyio
    async def test_plugin_command_becomes_executable(self, robot: Robot) -> None:
        pm = PluginManager()
        pm.register_plugin(_JumpPlugin())
        factory = CommandFactory.with_default_commands(robot)

        assert pm.install_commands(factory, robot) == ["JUMP"]
        assert "JUMP" in factory.registered_types

        service = RobotApplicationService(robot, factory)
        (result,) = await run_lines(service, "jump")
        assert result.ok
        assert result.message == "Robot jumped"

    def test_plugin_can_override_builtin(self, robot: Robot) -> None:
        class _Override:
            @hookimpl
            def register_commands(self, robot: Robot) -> dict[str, Any]:
                def create(_params: Mapping[str, Any] | None) -> Command:
                    return _JumpCommand(robot)

                return {"MOVE": create}

        pm = PluginManager()
        pm.register_plugin(_Override())
        factory = CommandFactory.with_default_commands(robot)
        pm.install_commands(factory, robot)
        assert isinstance(factory.create_command("MOVE"), _JumpCommand)

    def test_failing_plugin_is_skipped(
        self, robot: Robot, caplog: pytest.LogCaptureFixture
    ) -> None:
        pm = PluginManager()
        pm.register_plugin(_BrokenPlugin())
        pm.register_plugin(_JumpPlugin())
        factory = CommandFactory.with_default_commands(robot)
        with caplog.at_level(logging.WARNING, logger="robotsim.plugins.manager"):
            installed = pm.install_commands(factory, robot)
        assert installed == ["JUMP"]
        assert "Failed to collect commands" in caplog.text

    def test_non_dict_registration_is_ignored(self, robot: Robot) -> None:
        pm = PluginManager()
        pm.register_plugin(_NonDictPlugin())
        factory = CommandFactory.with_default_commands(robot)
        assert pm.install_commands(factory, robot) == []
        assert "JUMP" not in factory.registered_types


class TestPostCommand:
    @pytest.mark.anyio
    async def test_listener_sees_every_command(self, robot: Robot, factory: CommandFactory) -> None:
        pm = PluginManager()
        recorder = _RecordingPlugin()
        pm.register_plugin(recorder)
        service = RobotApplicationService(robot, factory, listener=pm.dispatch_post_command)

        await run_lines(service, "PLACE 0,0,NORTH", "JUMP")

        assert recorder.calls[0] == (
            "PLACE 0,0,NORTH",
            True,
            "place",
            "Robot placed at (0, 0) facing NORTH",
        )
        assert recorder.calls[1] == ("JUMP", False, "invalid_command", "Invalid command: JUMP")

    def test_hook_failure_becomes_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        pm = PluginManager()
        pm.register_plugin(_BrokenPlugin())
        with caplog.at_level(logging.WARNING, logger="robotsim.plugins.manager"):
            pm.dispatch_post_command("MOVE", ServiceResult.success("move", "ok"))
        assert "post_command hook failed" in caplog.text
