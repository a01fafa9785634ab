"""Console/JSON output helpers.

The session renders ServiceResult for humans (colored single lines) or
machines (one JSON object per line). Formatting is a pure function of
the result and the OutputSettings.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.text import Text

from robotsim.output.console import create_console, get_output

if TYPE_CHECKING:
    from robotsim.domain.result import ServiceResult


class OutputSettings(BaseModel):
    """Rendering switches resolved from RobotSettings."""

    model_config = {"frozen": True}

    json_output: bool = False
    colors: bool = True
    show_grid: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult as one line of output."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return _json.dumps(_json_payload(result))

    if not result.ok:
        return _styled(f"Error: {result.message}", "robot.error", colors=settings.colors)
    if result.op == "report" and "report" in result.data:
        return _styled(f"Output: {result.data['report']}", "robot.report", colors=settings.colors)
    return _styled(result.message, "robot.ok", colors=settings.colors)


def format_message(text: str, *, settings: OutputSettings | None = None, style: str = "robot.banner") -> str:
    """Format free text (banners, goodbyes) for the session transcript."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return _json.dumps({"status": "info", "message": text})
    return _styled(text, style, colors=settings.colors)


def _json_payload(result: ServiceResult) -> dict[str, Any]:
    if not result.ok:
        return {"status": "error", "message": result.message}
    position = result.data.get("position")
    if result.op == "report" and position:
        return {
            "status": "success",
            "position": {
                "x": position["x"],
                "y": position["y"],
                "direction": position["direction"],
            },
        }
    return {"status": "success", "message": result.message}


def _styled(text: str, style: str, *, colors: bool) -> str:
    if not colors:
        return text
    console = create_console(colors=True)
    console.print(Text(text, style=style), soft_wrap=True)
    return get_output(console).rstrip("\n")
