"""Tests for the root robotsim CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from robotsim import __version__
from robotsim.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "robotsim" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_config")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize(
    "flag", ["--json", "--no-color", "-q", "-v", "--log-json", "--grid"]
)
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/test.toml", "--version"])
    assert result.exit_code == 0


@pytest.mark.parametrize("value", ["0", "-3", "wide"])
def test_rejects_bad_width(cli_runner: CliRunner, value: str) -> None:
    result = cli_runner.invoke(cli, ["--width", value, "commands"])
    assert result.exit_code == 2


# --- Command registration ---


@pytest.mark.parametrize("name", ["run", "exec", "commands"])
def test_command_registered(name: str) -> None:
    assert name in cli.commands


# --- Configuration errors ---


@pytest.mark.usefixtures("_isolated_config")
class TestConfigErrors:
    def test_invalid_toml(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "robotsim.toml").write_text("[table\nwidth = 3\n")
        result = cli_runner.invoke(cli, ["commands"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.stderr

    def test_invalid_table_size(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "robotsim.toml").write_text("[table]\nwidth = 0\n")
        result = cli_runner.invoke(cli, ["commands"])
        assert result.exit_code == 1
        assert "Invalid configuration for table.width" in result.stderr

    def test_toml_table_size_applies(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "robotsim.toml").write_text("[table]\nwidth = 2\nheight = 2\n")
        result = cli_runner.invoke(cli, ["exec", "PLACE 2,0,NORTH", "PLACE 1,1,EAST", "MOVE"])
        assert result.stdout.splitlines() == [
            "Error: Position (2, 0) is outside the table bounds",
            "Robot placed at (1, 1) facing EAST",
            "Error: Cannot move to position (2, 1) - outside the table bounds",
        ]

    def test_env_overrides_toml(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "robotsim.toml").write_text("[table]\nwidth = 2\n")
        monkeypatch.setenv("ROBOTSIM_TABLE__WIDTH", "9")
        result = cli_runner.invoke(cli, ["-q", "exec", "PLACE 8,0,NORTH", "REPORT"])
        assert result.stdout.strip() == "Output: 8,0,NORTH"
