"""Rich rendering of detection results."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from uft_discovery.detection import DetectionResult, Status

_STATUS_STYLES = {
    Status.NEW: "green",
    Status.MODIFIED: "yellow",
    Status.DELETED: "red",
}


def render_result(console: Console, result: DetectionResult) -> None:
    mode = "full" if result.full_scan else "incremental"
    console.print(
        f"[bold]Detection result[/bold] ({mode} scan): "
        f"{len(result.tests)} tests, {len(result.resource_files)} data tables"
    )

    if result.tests:
        table = Table(title="Tests", show_lines=False)
        table.add_column("Status")
        table.add_column("Package")
        table.add_column("Name")
        table.add_column("Type")
        for test in result.tests:
            style = _STATUS_STYLES.get(test.status, "")
            table.add_row(
                f"[{style}]{test.status.value}[/{style}]",
                test.package,
                test.name,
                test.uft_test_type.value,
            )
        console.print(table)

    if result.resource_files:
        table = Table(title="Data tables")
        table.add_column("Status")
        table.add_column("Path")
        for resource in result.resource_files:
            style = _STATUS_STYLES.get(resource.status, "")
            table.add_row(f"[{style}]{resource.status.value}[/{style}]", resource.relative_path)
        console.print(table)

    if result.deleted_folders:
        console.print(f"[yellow]Deleted folders ({len(result.deleted_folders)}):[/yellow]")
        for folder in result.deleted_folders:
            console.print(f"  - {folder}", markup=False)
        console.print("[yellow]A full scan has been scheduled for the next run.[/yellow]")

    if result.has_quoted_paths:
        console.print("[yellow]Some changed paths were quoted by source control; run with --full to be sure.[/yellow]")
