"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``ROBOTSIM_*`` prefix, ``__`` for nested sections
                    (``ROBOTSIM_TABLE__WIDTH=7``)
  3. TOML file    — ``robotsim.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from robotsim.config.discovery import find_config
from robotsim.config.models import LoggingConfig, OutputConfig, TableConfig

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``robotsim.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class RobotSettings(BaseSettings):
    """Settings for one robotsim session, frozen after construction.

    Stored on the :class:`~robotsim.commands._context.AppContext` at the
    CLI root level.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ROBOTSIM_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    no_color: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    table: TableConfig = Field(default_factory=TableConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        width: int | None = None,
        height: int | None = None,
        **cli_flags: Any,
    ) -> RobotSettings:
        """Construct settings from a CLI invocation.

        Discovers ``robotsim.toml`` via walk-up (or explicit *config_path*)
        and merges CLI flags as highest-priority overrides. *width* and
        *height* override the ``[table]`` section when given.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(cwd)

        table: dict[str, int] = {}
        if width is not None:
            table["width"] = width
        if height is not None:
            table["height"] = height
        if table:
            cli_flags["table"] = table

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    # --- Effective values (flags win over sections) ---

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.verbose else _LEVELS[self.logging.level]

    @property
    def use_json_logs(self) -> bool:
        return self.log_json or self.logging.format == "json"

    @property
    def use_json_output(self) -> bool:
        return self.json_output or self.output.format == "json"

    @property
    def use_colors(self) -> bool:
        return self.output.colors and not self.no_color
