"""Finalization of a DetectionResult: tallies, ordering, rescan signal."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, Optional, Union

from .models import AutomatedTest, DetectionResult, ScmResourceFile, Status

Entity = Union[AutomatedTest, ScmResourceFile]


def compute_status_map(entities: Iterable[Entity]) -> Dict[Status, int]:
    """Count entities per status, in Status declaration order."""
    counts = Counter(entity.status for entity in entities)
    return {status: counts[status] for status in Status if counts[status]}


def sort_result(result: DetectionResult) -> None:
    """Sort tests by (package, name) and data tables by relative path.

    Python string comparison is ordinal (code point), never locale-aware, so
    the order is identical on every machine.
    """
    result.tests.sort(key=lambda t: (t.package, t.name))
    result.resource_files.sort(key=lambda r: r.relative_path)
    result.deleted_folders.sort()


def requires_full_rescan(result: DetectionResult) -> bool:
    """True when deleted folders were recorded.

    A directory delete event says nothing about the tests and data tables that
    were inside it; only a full scan can reconcile them.
    """
    return bool(result.deleted_folders)


def finalize_result(
    result: DetectionResult,
    full_scan: bool,
    workspace_id: Optional[str] = None,
    scm_repository_id: Optional[str] = None,
) -> DetectionResult:
    """Attach run metadata and impose the deterministic order."""
    result.full_scan = full_scan
    result.workspace_id = workspace_id
    result.scm_repository_id = scm_repository_id
    sort_result(result)
    return result
