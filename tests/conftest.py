"""Shared pytest fixtures and test helpers for robotsim tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from robotsim.domain.result import ServiceResult
from robotsim.domain.robot import Robot
from robotsim.domain.types import TableBounds
from robotsim.services.application import RobotApplicationService
from robotsim.services.factory import CommandFactory


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo root-handler and structlog changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    robot_level = logging.getLogger("robotsim").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("robotsim").setLevel(robot_level)
    structlog.reset_defaults()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def robot() -> Robot:
    """Unplaced robot on the default 5x5 table."""
    return Robot(TableBounds(width=5, height=5))


@pytest.fixture
def factory(robot: Robot) -> CommandFactory:
    return CommandFactory.with_default_commands(robot)


@pytest.fixture
def service(robot: Robot, factory: CommandFactory) -> RobotApplicationService:
    return RobotApplicationService(robot, factory)


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp dir with no robotsim env overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_config")`` on CLI test
    classes so a developer's robotsim.toml or ROBOTSIM_* vars never leak in.
    """
    for name in list(os.environ):
        if name.startswith("ROBOTSIM_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


async def run_lines(service: RobotApplicationService, *lines: str) -> list[ServiceResult]:
    """Execute each line in order and return every result."""
    return [await service.execute_command(line) for line in lines]
