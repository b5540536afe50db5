"""CLI command modules for uft-discovery."""

from __future__ import annotations

import typer

from .config_cmd import app as config_app
from .queue_cmd import app as queue_app
from .detect import detect_command, show_command


def register_commands(app: typer.Typer) -> None:
    """Attach all commands to the root application."""
    app.command("detect")(detect_command)
    app.command("show")(show_command)
    app.add_typer(config_app, name="config")
    app.add_typer(queue_app, name="queue")


__all__ = ["register_commands"]
