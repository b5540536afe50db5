"""UFT test discovery: detect automated tests and data tables in a workspace."""

from .detection import (
    AutomatedTest,
    ChangeRecord,
    DetectionResult,
    EditType,
    ScmResourceFile,
    Status,
    TestKind,
    detect,
)

__version__ = "0.4.0"

__all__ = [
    "AutomatedTest",
    "ChangeRecord",
    "DetectionResult",
    "EditType",
    "ScmResourceFile",
    "Status",
    "TestKind",
    "detect",
    "__version__",
]
