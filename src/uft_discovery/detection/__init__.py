"""Test detection engine: classify UFT tests and data tables in a workspace."""

from ..scm.records import ChangeRecord, EditType, MoveInfo
from .aggregate import compute_status_map, finalize_result, requires_full_rescan, sort_result
from .changeset import ChangeSetScanner
from .classifier import (
    API_TEST_EXTENSION,
    GUI_TEST_EXTENSION,
    RESOURCE_EXTENSIONS,
    classify_directory,
    is_resource_file,
    is_test_main_file,
)
from .engine import detect, refine_result
from .models import AutomatedTest, DetectionResult, ScmResourceFile, Status, TestKind
from .paths import normalize_path
from .refine import (
    dedupe_added_and_deleted_tests,
    dedupe_updated_tests,
    prune_false_positive_resources,
)
from .scanner import FullTreeScanner

__all__ = [
    "AutomatedTest",
    "ScmResourceFile",
    "DetectionResult",
    "Status",
    "TestKind",
    "ChangeRecord",
    "EditType",
    "MoveInfo",
    "API_TEST_EXTENSION",
    "GUI_TEST_EXTENSION",
    "RESOURCE_EXTENSIONS",
    "classify_directory",
    "is_resource_file",
    "is_test_main_file",
    "normalize_path",
    "FullTreeScanner",
    "ChangeSetScanner",
    "dedupe_updated_tests",
    "dedupe_added_and_deleted_tests",
    "prune_false_positive_resources",
    "compute_status_map",
    "sort_result",
    "finalize_result",
    "requires_full_rescan",
    "detect",
    "refine_result",
]
