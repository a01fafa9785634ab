"""Tests for RobotSettings — defaults, TOML, env vars, and CLI overrides."""

import logging
from pathlib import Path

import click
import pytest

from robotsim.config.settings import RobotSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "ROBOTSIM_CONFIG",
        "ROBOTSIM_TABLE__WIDTH",
        "ROBOTSIM_TABLE__HEIGHT",
        "ROBOTSIM_OUTPUT__FORMAT",
        "ROBOTSIM_JSON_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = RobotSettings.from_cli(cwd=tmp_path)
        assert settings.table.width == 5
        assert settings.table.height == 5
        assert settings.logging.level == "warning"
        assert settings.output.format == "console"
        assert settings.config_path is None
        assert settings.log_level == logging.WARNING
        assert settings.use_json_output is False
        assert settings.use_colors is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = RobotSettings.from_cli(cwd=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "robotsim.toml").write_text("[table]\nwidth = 8\n[output]\nshow_grid = true\n")
        settings = RobotSettings.from_cli(cwd=tmp_path)
        assert settings.table.width == 8
        assert settings.table.height == 5
        assert settings.output.show_grid is True

    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / "robotsim.toml").write_text("[table]\nheight = 3\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        settings = RobotSettings.from_cli(cwd=nested)
        assert settings.table.height == 3
        assert settings.config_path is not None
        assert settings.config_path.resolve() == (tmp_path / "robotsim.toml").resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir()
        custom.write_text('[logging]\nformat = "json"\n')
        settings = RobotSettings.from_cli(config_path=str(custom))
        assert settings.use_json_logs is True
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "robotsim.toml").write_text("[table\nwidth = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            RobotSettings.from_cli(cwd=tmp_path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        (tmp_path / "robotsim.toml").write_text("[table]\nwidth = 0\n")
        with pytest.raises(ValueError):
            RobotSettings.from_cli(cwd=tmp_path)


class TestEnvAndFlags:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "robotsim.toml").write_text("[table]\nwidth = 8\n")
        monkeypatch.setenv("ROBOTSIM_TABLE__WIDTH", "6")
        settings = RobotSettings.from_cli(cwd=tmp_path)
        assert settings.table.width == 6

    def test_cli_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROBOTSIM_TABLE__WIDTH", "6")
        settings = RobotSettings.from_cli(cwd=tmp_path, width=9, height=2)
        assert (settings.table.width, settings.table.height) == (9, 2)

    def test_env_json_output(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROBOTSIM_OUTPUT__FORMAT", "json")
        assert RobotSettings.from_cli(cwd=tmp_path).use_json_output is True

    def test_verbose_forces_debug(self, tmp_path: Path) -> None:
        assert RobotSettings.from_cli(cwd=tmp_path, verbose=True).log_level == logging.DEBUG

    def test_no_color_flag(self, tmp_path: Path) -> None:
        assert RobotSettings.from_cli(cwd=tmp_path, no_color=True).use_colors is False

    def test_table_to_bounds(self, tmp_path: Path) -> None:
        bounds = RobotSettings.from_cli(cwd=tmp_path, width=4, height=7).table.to_bounds()
        assert (bounds.width, bounds.height) == (4, 7)
