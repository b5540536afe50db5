"""Detect and show commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from uft_discovery.config import DiscoveryConfig
from uft_discovery.detection import ChangeRecord
from uft_discovery.dispatch import DispatchQueue
from uft_discovery.errors import DiscoveryError
from uft_discovery.persistence import JsonResultSerializer, read_detection_result
from uft_discovery.scm import ScmKind, read_git_changes
from uft_discovery.service import BuildContext, DetectionService

from ._render import render_result

console = Console()
err_console = Console(stderr=True)


def _run_or_exit(fn):
    try:
        return fn()
    except (DiscoveryError, OSError, ValueError) as exc:
        err_console.print(f"[red]Error:[/red] {exc}", markup=True, highlight=False)
        raise typer.Exit(1) from exc


def _console_reporter(message: str) -> None:
    console.print(message, markup=False, highlight=False)


def load_changes_file(path: Path) -> List[ChangeRecord]:
    """Load change records from a JSON list (or ``{"changes": [...]}``)."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("changes", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of change records")
    return [ChangeRecord.from_dict(item) for item in data]


def detect_command(
    workspace: Path = typer.Argument(Path("."), help="Workspace root to scan"),
    full: bool = typer.Option(False, "--full", help="Force a full workspace scan"),
    since: str = typer.Option("HEAD~1", "--since", help="Git revision the changeset starts after"),
    until: str = typer.Option("HEAD", "--until", help="Git revision the changeset ends at"),
    changes_file: Optional[Path] = typer.Option(
        None, "--changes", help="JSON file with change records (required for svn)"
    ),
    build_id: str = typer.Option("", "--build-id", help="Build identifier; '1' forces a full scan"),
    build_number: int = typer.Option(0, "--build-number", help="Build number passed to the dispatcher"),
    job_name: str = typer.Option("", "--job", help="Job name passed to the dispatcher"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Detect new, modified and deleted tests in a workspace."""

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    def _run() -> None:
        root = workspace.resolve()
        if not root.is_dir():
            raise DiscoveryError(f"Workspace not found: {root}")

        config = DiscoveryConfig.load(root)
        dispatcher = DispatchQueue.for_workspace(root)
        service = DetectionService(
            root,
            config,
            dispatcher=dispatcher,
            reporter=None if as_json else _console_reporter,
        )
        build = BuildContext(
            build_id=build_id,
            build_number=build_number,
            job_name=job_name,
            full_scan_requested=full,
        )

        changes: Optional[List[ChangeRecord]] = None
        if not service.is_full_scan(build):
            if changes_file is not None:
                changes = load_changes_file(changes_file)
            elif config.scm == ScmKind.GIT:
                changes = read_git_changes(root, since, until)
            else:
                raise DiscoveryError(f"--changes is required for scm '{config.scm}'")

        result = service.start_scanning(build, changes)

        if as_json:
            typer.echo(JsonResultSerializer().dumps(result), nl=False)
            return

        render_result(console, result)
        if result.has_changes():
            console.print(
                f"Result queued for dispatch ({len(dispatcher)} pending in {dispatcher.db_path})",
                highlight=False,
            )

    _run_or_exit(_run)


def show_command(
    workspace: Path = typer.Argument(Path("."), help="Workspace root"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Show the last persisted detection result."""

    def _run() -> None:
        root = workspace.resolve()
        config = DiscoveryConfig.load(root)
        path = config.result_path(root)
        result = read_detection_result(path)
        if result is None:
            raise DiscoveryError(f"No detection result at {path}")

        if as_json:
            typer.echo(JsonResultSerializer().dumps(result), nl=False)
            return
        render_result(console, result)

    _run_or_exit(_run)


__all__ = ["detect_command", "show_command", "load_changes_file"]
