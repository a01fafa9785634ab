"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, robotsim.toml only contains overrides.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from robotsim.domain.types import TableBounds


class TableConfig(BaseModel):
    """[table] section. Fixed for the lifetime of a session."""

    model_config = {"frozen": True}

    width: int = Field(default=5, gt=0)
    height: int = Field(default=5, gt=0)

    def to_bounds(self) -> TableBounds:
        return TableBounds(width=self.width, height=self.height)


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    level: Literal["debug", "info", "warning", "error"] = "warning"
    format: Literal["text", "json"] = "text"


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    format: Literal["console", "json"] = "console"
    colors: bool = True
    show_grid: bool = False
