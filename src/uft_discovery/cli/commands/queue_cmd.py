"""Commands for the local queue of results awaiting dispatch."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from uft_discovery.dispatch import DispatchQueue
from uft_discovery.errors import DiscoveryError

app = typer.Typer(help="Dispatch queue commands")
console = Console()


def _run_or_exit(fn):
    try:
        return fn()
    except (DiscoveryError, OSError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc


def _open_queue(workspace: Path) -> DispatchQueue:
    root = workspace.resolve()
    if not root.is_dir():
        raise DiscoveryError(f"Workspace not found: {root}")
    return DispatchQueue.for_workspace(root)


@app.command("show")
def show_queue_command(
    workspace: Path = typer.Argument(Path("."), help="Workspace root"),
    as_json: bool = typer.Option(False, "--json", help="Print entries as JSON"),
) -> None:
    """List queued results, oldest first."""

    def _run() -> None:
        entries = _open_queue(workspace).pending()
        if as_json:
            typer.echo(json.dumps([entry._asdict() for entry in entries], indent=2))
            return
        if not entries:
            console.print("Dispatch queue is empty")
            return
        table = Table(title="Dispatch queue")
        table.add_column("Job")
        table.add_column("Build", justify="right")
        for entry in entries:
            table.add_row(entry.job_name, str(entry.build_number))
        console.print(table)

    _run_or_exit(_run)


@app.command("pop")
def pop_queue_command(
    workspace: Path = typer.Argument(Path("."), help="Workspace root"),
) -> None:
    """Remove the oldest entry and print it as JSON (``null`` when empty)."""

    def _run() -> None:
        entry = _open_queue(workspace).pop_next()
        typer.echo(json.dumps(entry._asdict() if entry else None))

    _run_or_exit(_run)
