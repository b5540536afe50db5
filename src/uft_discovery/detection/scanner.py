"""Full workspace scan.

FullTreeScanner walks the workspace depth-first. A folder holding a marker
file becomes one AutomatedTest and is not descended into; any other folder is
descended, and the data tables found directly in it are recorded.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Set

from ..scm.records import MoveInfo
from .classifier import classify_directory, is_resource_file, list_entries
from .description import read_test_description
from .models import (
    AutomatedTest,
    DetectionResult,
    ScmResourceFile,
    Status,
    TestKind,
)
from .paths import normalize_path, split_package

logger = logging.getLogger(__name__)

# SCM metadata and discovery state folders never hold tests.
SKIPPED_DIRECTORIES = frozenset({".git", ".svn", ".hg", ".uft-discovery"})


class FullTreeScanner:
    """Classify every test folder and loose data table under a root.

    Attributes:
        root: Workspace root; all stored paths are relative to it
    """

    def __init__(self, root: Path):
        self.root = root

    def scan(self) -> DetectionResult:
        """Scan the whole workspace, tagging every entity NEW."""
        result = DetectionResult()
        self.scan_folder(self.root, result, Status.NEW)
        logger.debug(
            f"Full scan of {self.root}: {len(result.tests)} tests, "
            f"{len(result.resource_files)} data tables"
        )
        return result

    def scan_folder(
        self,
        folder: Path,
        result: DetectionResult,
        status: Status,
        move: Optional[MoveInfo] = None,
    ) -> None:
        """Classify ``folder`` and everything below it into ``result``.

        Args:
            folder: Folder to classify (a file is classified on its own)
            result: Result to append entities to
            status: Status given to every entity found
            move: Rename info of the change record that led here; only the
                test created for ``folder`` itself carries it
        """
        self._scan(folder, result, status, move, set())

    def _scan(
        self,
        folder: Path,
        result: DetectionResult,
        status: Status,
        move: Optional[MoveInfo],
        visited: Set[Path],
    ) -> None:
        real = folder.resolve()
        if real in visited:
            logger.debug(f"Skipping already visited folder {folder}")
            return
        visited.add(real)

        entries = list_entries(folder) if folder.is_dir() else [folder]

        kind = classify_directory(entries)
        if not kind.is_none:
            result.tests.append(
                self.build_test(folder, status, kind=kind, executable=True, move=move)
            )
            return

        for entry in entries:
            if entry.is_dir():
                if entry.name in SKIPPED_DIRECTORIES:
                    continue
                self._scan(entry, result, status, None, visited)
            elif is_resource_file(entry.name):
                result.resource_files.append(self.build_resource(entry, status))

    def build_test(
        self,
        folder: Path,
        status: Status,
        kind: TestKind = TestKind.NONE,
        executable: bool = False,
        move: Optional[MoveInfo] = None,
    ) -> AutomatedTest:
        """Build the AutomatedTest record for a test folder."""
        relative_path = normalize_path(self.root, folder)
        return AutomatedTest(
            name=folder.name,
            package=split_package(relative_path, folder.name),
            uft_test_type=kind,
            executable=executable,
            description=read_test_description(folder),
            status=status,
            change_set_src=move.src if move else None,
            change_set_dst=move.dst if move else None,
        )

    def build_resource(
        self, path: Path, status: Status, move: Optional[MoveInfo] = None
    ) -> ScmResourceFile:
        """Build the ScmResourceFile record for a data table."""
        return ScmResourceFile(
            name=path.name,
            relative_path=normalize_path(self.root, path),
            status=status,
            change_set_src=move.src if move else None,
            change_set_dst=move.dst if move else None,
        )
