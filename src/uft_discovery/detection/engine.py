"""Detection engine entry point.

Full mode walks the whole workspace. Incremental mode walks only the paths of
a changeset, then removes duplicated updates and false positive data tables.
Either way the result comes back sorted; filesystem errors propagate.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from ..scm.adapters import ScmAdapter, ScmKind, get_adapter
from ..scm.records import ChangeRecord
from .aggregate import finalize_result
from .changeset import ChangeSetScanner
from .models import DetectionResult
from .refine import (
    dedupe_added_and_deleted_tests,
    dedupe_updated_tests,
    prune_false_positive_resources,
)
from .scanner import FullTreeScanner

logger = logging.getLogger(__name__)


def detect(
    workspace: Path,
    changes: Optional[Iterable[ChangeRecord]] = None,
    scm: Union[ScmAdapter, ScmKind, str] = ScmKind.GIT,
    *,
    workspace_id: Optional[str] = None,
    scm_repository_id: Optional[str] = None,
) -> DetectionResult:
    """Run one detection over ``workspace``.

    Args:
        workspace: Workspace root
        changes: Changeset records; None selects a full scan
        scm: Adapter, or SCM tag used to pick one, for the changeset records
        workspace_id: Identifier attached to the result
        scm_repository_id: Identifier attached to the result

    Returns:
        Sorted DetectionResult
    """
    workspace = Path(workspace)
    full_scan = changes is None

    if full_scan:
        result = FullTreeScanner(workspace).scan()
    else:
        adapter = scm if isinstance(scm, ScmAdapter) else get_adapter(scm)
        result = ChangeSetScanner(workspace, adapter).scan(changes)
        refine_result(result)

    return finalize_result(
        result,
        full_scan=full_scan,
        workspace_id=workspace_id,
        scm_repository_id=scm_repository_id,
    )


def refine_result(result: DetectionResult) -> None:
    """Apply the incremental refinement passes in place."""
    dedupe_updated_tests(result)
    dedupe_added_and_deleted_tests(result)
    prune_false_positive_resources(
        result, result.deleted_tests, result.deleted_resource_files
    )
    prune_false_positive_resources(result, result.new_tests, result.new_resource_files)
