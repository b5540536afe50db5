"""Configuration commands for the discovery settings of a workspace."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from uft_discovery.config import DiscoveryConfig
from uft_discovery.errors import ConfigError

app = typer.Typer(help="Discovery configuration commands")


def _run_or_exit(fn):
    try:
        return fn()
    except (ConfigError, ValueError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc


@app.command("show")
def show_config_command(
    workspace: Path = typer.Argument(Path("."), help="Workspace root"),
) -> None:
    """Print the effective configuration as JSON."""

    def _run() -> None:
        config = DiscoveryConfig.load(workspace.resolve())
        typer.echo(json.dumps(config.to_dict(), indent=2, sort_keys=True))

    _run_or_exit(_run)


@app.command("set")
def set_config_command(
    workspace: Path = typer.Argument(Path("."), help="Workspace root"),
    scm: Optional[str] = typer.Option(None, "--scm", help="Source control: git | svn | other"),
    workspace_id: Optional[str] = typer.Option(None, "--workspace-id", help="Workspace identifier"),
    repository_id: Optional[str] = typer.Option(None, "--repository-id", help="SCM repository identifier"),
    job_name: Optional[str] = typer.Option(None, "--job", help="Default job name"),
    result_file: Optional[str] = typer.Option(None, "--result-file", help="Result file name or absolute path"),
    delay: Optional[int] = typer.Option(None, "--full-scan-delay", help="Delay in seconds before a scheduled full scan"),
) -> None:
    """Update configuration values, keeping the ones not given."""

    def _run() -> None:
        root = workspace.resolve()
        current = DiscoveryConfig.load(root).to_dict()
        updates = {
            "scm": scm,
            "workspace_id": workspace_id,
            "scm_repository_id": repository_id,
            "job_name": job_name,
            "result_file": result_file,
            "full_scan_delay_seconds": delay,
        }
        current.update({key: value for key, value in updates.items() if value is not None})
        config = DiscoveryConfig.from_dict(current)
        config.save(root)
        typer.echo("Discovery configuration saved")
        for key, value in config.to_dict().items():
            typer.echo(f"- {key}: {value}")

    _run_or_exit(_run)
