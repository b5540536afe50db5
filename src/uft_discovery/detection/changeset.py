"""Incremental scan driven by a source-control changeset.

Only the paths named in the changeset are examined. Existence on disk is the
deciding signal: an ADD or EDIT is acted on only if the file is present, a
DELETE only if it is gone.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from ..scm.adapters import ScmAdapter
from ..scm.records import ChangeRecord, EditType
from .classifier import (
    classify_directory,
    is_resource_file,
    is_test_main_file,
    list_entries,
    owning_test_folder,
)
from .models import DetectionResult, Status
from .paths import is_quoted, normalize_path, workspace_path
from .scanner import FullTreeScanner

logger = logging.getLogger(__name__)


class ChangeSetScanner:
    """Classify the entities touched by a changeset.

    Attributes:
        root: Workspace root
        adapter: Interprets SCM-specific record shapes (directories, renames)
    """

    def __init__(self, root: Path, adapter: Optional[ScmAdapter] = None):
        self.root = root
        self.adapter = adapter or ScmAdapter()
        self._tree = FullTreeScanner(root)

    def scan(self, changes: Iterable[ChangeRecord]) -> DetectionResult:
        """Build a DetectionResult from the changed paths, in changeset order."""
        result = DetectionResult()
        for record in changes:
            self._scan_record(record, result)
        return result

    def _scan_record(self, record: ChangeRecord, result: DetectionResult) -> None:
        if is_quoted(record.path):
            logger.warning(f"Changeset path is quoted, it may be undecodable: {record.path}")
            result.has_quoted_paths = True

        if self.adapter.is_directory(record):
            if self.adapter.is_directory_delete(record):
                result.add_deleted_folder(normalize_path(self.root, record.path))
            return

        if is_test_main_file(record.path):
            self._scan_test_file(record, result)
        elif is_resource_file(record.path):
            self._scan_resource_file(record, result)

    def _scan_test_file(self, record: ChangeRecord, result: DetectionResult) -> None:
        file_path = workspace_path(self.root, record.path)
        test_folder = owning_test_folder(file_path)
        file_exists = file_path.exists()
        move = self.adapter.extract_rename(record)

        if record.edit_type == EditType.ADD:
            if file_exists:
                self._tree.scan_folder(test_folder, result, Status.NEW, move=move)
            else:
                logger.error(f"Added test file does not exist: {file_path}")
        elif record.edit_type == EditType.DELETE:
            if not file_exists:
                result.tests.append(
                    self._tree.build_test(test_folder, Status.DELETED, move=move)
                )
        elif record.edit_type == EditType.EDIT:
            if file_exists:
                self._tree.scan_folder(test_folder, result, Status.MODIFIED, move=move)

    def _scan_resource_file(self, record: ChangeRecord, result: DetectionResult) -> None:
        file_path = workspace_path(self.root, record.path)
        move = self.adapter.extract_rename(record)

        if record.edit_type == EditType.ADD:
            # A data table inside a test folder belongs to that test.
            kind = classify_directory(list_entries(file_path.parent))
            if kind.is_none and file_path.exists():
                result.resource_files.append(
                    self._tree.build_resource(file_path, Status.NEW, move=move)
                )
        elif record.edit_type == EditType.DELETE:
            if not file_path.exists():
                result.resource_files.append(
                    self._tree.build_resource(file_path, Status.DELETED, move=move)
                )
