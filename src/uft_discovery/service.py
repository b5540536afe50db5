"""Detection service: the caller side of the detection engine.

Decides full vs incremental mode, runs the engine, reports per-status counts,
persists the result, notifies the dispatcher, and asks for a full scan when
the incremental result cannot account for deleted folders.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional

from uft_discovery.config import DiscoveryConfig, is_full_scan_forced, state_dir
from uft_discovery.detection import (
    ChangeRecord,
    DetectionResult,
    compute_status_map,
    detect,
    requires_full_rescan,
)
from uft_discovery.dispatch import (
    DiscoveryDispatcher,
    FullScanScheduler,
    MarkerFullScanScheduler,
)
from uft_discovery.persistence import ResultSerializer, publish_detection_result
from uft_discovery.scm.adapters import get_adapter

logger = logging.getLogger(__name__)

INITIAL_DETECTION_FILE = "INITIAL_DETECTION_FILE.txt"
REPORT_PREFIX = "uft-discovery : "

BuildReporter = Callable[[str], None]

QUOTED_PATHS_MESSAGE = (
    "This run may not have discovered all updated tests.\n"
    "It seems that the changes in this build included filenames with Unicode characters, "
    "which Git did not list correctly.\n"
    "To make sure Git can properly list such file names, configure Git as follows: "
    "git config --global core.quotepath false\n"
    "To discover the updated tests that were missed in this run, "
    "run the detection again with a full scan."
)


@dataclass
class BuildContext:
    """Identity of the build a detection run belongs to."""

    build_id: str = ""
    build_number: int = 0
    job_name: str = ""
    full_scan_requested: bool = False


class DetectionService:
    """Run detection for one workspace and hand the result to collaborators.

    Invocations over the same workspace must be serialized by the caller.
    """

    def __init__(
        self,
        workspace: Path,
        config: Optional[DiscoveryConfig] = None,
        *,
        dispatcher: Optional[DiscoveryDispatcher] = None,
        scheduler: Optional[FullScanScheduler] = None,
        serializer: Optional[ResultSerializer] = None,
        reporter: Optional[BuildReporter] = None,
    ):
        self.workspace = Path(workspace)
        self.config = config or DiscoveryConfig()
        self.dispatcher = dispatcher
        self.scheduler = scheduler or MarkerFullScanScheduler(state_dir(self.workspace))
        self.serializer = serializer
        self.reporter = reporter

    @property
    def result_path(self) -> Path:
        return self.config.result_path(self.workspace)

    @property
    def initial_detection_file(self) -> Path:
        return self.workspace / INITIAL_DETECTION_FILE

    def is_full_scan(self, build: BuildContext) -> bool:
        """Decide the scan mode for ``build``.

        Full when this is the first build, the workspace was never scanned,
        or a full scan was requested by the build, the environment, or a
        previously scheduled rescan.
        """
        return (
            build.build_id == "1"
            or not self.initial_detection_file.exists()
            or build.full_scan_requested
            or is_full_scan_forced()
            or self.scheduler.is_pending()
        )

    def start_scanning(
        self,
        build: BuildContext,
        changes: Optional[Iterable[ChangeRecord]] = None,
    ) -> DetectionResult:
        """Run one detection and publish it.

        Args:
            build: Build the run belongs to
            changes: Changeset of the build; ignored for a full scan

        Returns:
            The finalized DetectionResult

        Raises:
            OSError: If the workspace cannot be traversed
        """
        full_scan = self.is_full_scan(build)
        if full_scan:
            self._report("Executing full sync")
            result = detect(
                self.workspace,
                workspace_id=self.config.workspace_id,
                scm_repository_id=self.config.scm_repository_id,
            )
        else:
            self._report("Executing changeSet sync")
            result = detect(
                self.workspace,
                list(changes or []),
                get_adapter(self.config.scm),
                workspace_id=self.config.workspace_id,
                scm_repository_id=self.config.scm_repository_id,
            )

        for status, count in compute_status_map(result.tests).items():
            self._report(f"Found {count} tests with status {status.value.upper()}")
        for status, count in compute_status_map(result.resource_files).items():
            self._report(f"Found {count} data tables with status {status.value.upper()}")

        if requires_full_rescan(result):
            self._report(f"Found {len(result.deleted_folders)} deleted folders")
            self._report(
                "To sync deleted items - full sync required. Scheduling a full sync."
            )
            self.scheduler.schedule_full_scan(
                self.config.full_scan_delay_seconds,
                cause=f"Full sync required by build {build.build_id or build.build_number}",
            )
        elif full_scan:
            self.scheduler.clear()

        if result.has_quoted_paths:
            self._report(QUOTED_PATHS_MESSAGE)

        publish_detection_result(
            self.result_path, result, serializer=self.serializer, reporter=self._report
        )

        if result.has_changes() and self.dispatcher is not None:
            job_name = build.job_name or self.config.job_name or self.workspace.name
            self.dispatcher.enqueue_result(job_name, build.build_number)

        self._create_initial_detection_file()
        return result

    def _create_initial_detection_file(self) -> None:
        try:
            self.initial_detection_file.touch(exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create {INITIAL_DETECTION_FILE}: {e}")

    def _report(self, message: str) -> None:
        logger.info(message)
        if self.reporter is not None:
            self.reporter(REPORT_PREFIX + message)
