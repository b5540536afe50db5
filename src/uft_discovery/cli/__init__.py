"""Command line interface for uft-discovery."""

from __future__ import annotations

import typer

from .commands import register_commands

app = typer.Typer(
    name="uft-discovery",
    help="Detect UFT tests and data tables in a workspace.",
    no_args_is_help=True,
)
register_commands(app)


def main() -> None:
    app()


__all__ = ["app", "main"]
