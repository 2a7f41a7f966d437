"""
Output renderers for CLI commands.

JSON mode wraps every result in the same envelope so scripts can rely on a
stable contract:

    {"meta": {...}, "status": "success" | "error", "data": ..., "error": ...}
"""

import json

import click
from pydantic import BaseModel

from .. import __version__
from ..core.exceptions import PanelError


class JsonRenderer:

    def __init__(self, command: str):
        self.command = command

    def _meta(self) -> dict:
        return {"command": self.command, "version": __version__}

    def render_success(self, data: BaseModel) -> None:
        envelope = {
            "meta": self._meta(),
            "status": "success",
            "data": data.model_dump(mode="json", exclude_none=True),
            "error": None,
        }
        click.echo(json.dumps(envelope, indent=2))

    def render_error(self, error: Exception) -> None:
        code = error.code if isinstance(error, PanelError) else "INTERNAL_ERROR"
        envelope = {
            "meta": self._meta(),
            "status": "error",
            "data": None,
            "error": {"code": code, "message": str(error)},
        }
        click.echo(json.dumps(envelope, indent=2))
