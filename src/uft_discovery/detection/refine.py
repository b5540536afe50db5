"""Refinement passes applied to an incremental DetectionResult.

The passes mutate the result in place and remove records by identity, so
the record that is kept is always the original object.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .models import AutomatedTest, DetectionResult, ScmResourceFile, Status

logger = logging.getLogger(__name__)


def _drop_repeats(result: DetectionResult, status: Status) -> int:
    seen: set[tuple[str, str]] = set()
    duplicates: set[int] = set()
    for test in result.tests_with_status(status):
        if test.identity in seen:
            duplicates.add(id(test))
        seen.add(test.identity)

    if duplicates:
        result.tests = [t for t in result.tests if id(t) not in duplicates]
        logger.debug(f"Removed {len(duplicates)} duplicated {status.value} tests")
    return len(duplicates)


def dedupe_updated_tests(result: DetectionResult) -> int:
    """Drop repeated MODIFIED records for the same (package, name).

    Some SCMs report several edit events for one logical test; only the first
    record is kept.

    Returns:
        Number of records removed
    """
    return _drop_repeats(result, Status.MODIFIED)


def dedupe_added_and_deleted_tests(result: DetectionResult) -> int:
    """Drop repeated NEW and repeated DELETED records for one (package, name).

    Two marker files added (or deleted) in the same folder each lead to the
    folder's test; only the first record per status is kept. A NEW and a
    DELETED record for the same test are both kept.

    Returns:
        Number of records removed
    """
    return _drop_repeats(result, Status.NEW) + _drop_repeats(result, Status.DELETED)


def prune_false_positive_resources(
    result: DetectionResult,
    tests: Sequence[AutomatedTest],
    resource_files: Sequence[ScmResourceFile],
) -> List[ScmResourceFile]:
    """Remove data tables that were only reported because their test changed.

    A data table whose parent path contains the full path of one of ``tests``
    sits inside that test folder, so its change is part of the test's own add
    or delete. Call once per transition direction: deleted tables against
    deleted tests, new tables against new tests.

    Args:
        result: Result to prune in place
        tests: Test records of one transition direction
        resource_files: Data table records of the same direction

    Returns:
        The removed data table records
    """
    if not tests or not resource_files:
        return []

    test_paths = [test.full_path for test in tests]
    false_positives: List[ScmResourceFile] = []
    for resource in resource_files:
        parent = resource.parent_path
        if parent is None:
            continue
        if any(test_path in parent for test_path in test_paths):
            false_positives.append(resource)

    if false_positives:
        removed = {id(r) for r in false_positives}
        result.resource_files = [r for r in result.resource_files if id(r) not in removed]
        logger.debug(f"Removed {len(false_positives)} false positive data tables")
    return false_positives
