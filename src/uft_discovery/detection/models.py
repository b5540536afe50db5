"""Detection data models for UFT test discovery.

This module defines the entities a detection run produces: AutomatedTest
(one indivisible test folder), ScmResourceFile (a data table tracked on its
own), and DetectionResult (the aggregate handed to persistence and dispatch).

Field declaration order is the serialized field order; do not reorder fields
without bumping the persisted schema version.
"""

from __future__ import annotations

from enum import StrEnum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Status(StrEnum):
    """Change status of a detected entity.

    NONE is the "not classified" sentinel used while scanning; it never
    appears on an entity stored in a DetectionResult.
    """

    NEW = "new"
    MODIFIED = "modified"
    DELETED = "deleted"
    NONE = "none"


class TestKind(StrEnum):
    """UFT test type, decided by the marker files inside a folder."""

    __test__ = False

    API = "API"
    GUI = "GUI"
    NONE = "None"

    @property
    def is_none(self) -> bool:
        return self is TestKind.NONE


def _reject_unclassified(v: Status) -> Status:
    if v == Status.NONE:
        raise ValueError("status must be new, modified or deleted; got 'none'")
    return v


class AutomatedTest(BaseModel):
    """A UFT test folder detected in the workspace.

    Identity is (package, name): name is the folder name, package is the
    normalized path of the parent folder relative to the workspace root
    ("" for a test folder directly under the root).
    """

    name: str = Field(..., min_length=1, description="Test folder name")
    package: str = Field(
        default="",
        description="Normalized parent path relative to the workspace root",
    )
    uft_test_type: TestKind = Field(
        default=TestKind.NONE,
        description="API | GUI | None (None for deleted tests)",
    )
    executable: bool = Field(
        default=False,
        description="True when the test folder exists and can be run",
    )
    description: Optional[str] = Field(
        None,
        description="Description read from the test marker file, if any",
    )
    status: Status = Field(..., description="new | modified | deleted")
    change_set_src: Optional[str] = Field(
        None,
        description="Rename source path reported by source control",
    )
    change_set_dst: Optional[str] = Field(
        None,
        description="Rename destination path reported by source control",
    )

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: Status) -> Status:
        """Entities never carry the NONE sentinel."""
        return _reject_unclassified(v)

    @property
    def full_path(self) -> str:
        """Package and name joined with the canonical separator."""
        return f"{self.package}\\{self.name}" if self.package else self.name

    @property
    def identity(self) -> tuple[str, str]:
        return (self.package, self.name)


class ScmResourceFile(BaseModel):
    """A data table (spreadsheet) tracked independently of its test."""

    name: str = Field(..., min_length=1, description="File name")
    relative_path: str = Field(
        ...,
        min_length=1,
        description="Normalized path relative to the workspace root",
    )
    status: Status = Field(..., description="new | modified | deleted")
    change_set_src: Optional[str] = Field(None, description="Rename source path")
    change_set_dst: Optional[str] = Field(None, description="Rename destination path")

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: Status) -> Status:
        return _reject_unclassified(v)

    @field_validator("relative_path")
    @classmethod
    def validate_relative_path(cls, v: str) -> str:
        """Relative paths use the canonical backslash separator only."""
        if "/" in v:
            raise ValueError(f"relative_path must use '\\' separators; got '{v}'")
        return v

    @property
    def parent_path(self) -> Optional[str]:
        """Immediate parent path, or None for a file at the workspace root."""
        index = self.relative_path.rfind("\\")
        if index == -1:
            return None
        return self.relative_path[:index]


class DetectionResult(BaseModel):
    """Aggregate of one detection run.

    Created fresh per invocation, populated by exactly one scanner, refined in
    place, then handed to persistence and dispatch.

    Attributes:
        tests: All detected tests, tagged with their status
        resource_files: All detected data tables, tagged with their status
        deleted_folders: Normalized paths of directories reported deleted
        has_quoted_paths: True if source control reported an undecodable path
        full_scan: True if the result comes from a full workspace scan
        workspace_id: Identifier of the workspace (attached by the caller)
        scm_repository_id: Identifier of the repository (attached by the caller)
    """

    tests: List[AutomatedTest] = Field(default_factory=list)
    resource_files: List[ScmResourceFile] = Field(default_factory=list)
    deleted_folders: List[str] = Field(
        default_factory=list,
        description="Set semantics; kept as a list for stable ordering",
    )
    has_quoted_paths: bool = Field(default=False)
    full_scan: bool = Field(default=False)
    workspace_id: Optional[str] = Field(None)
    scm_repository_id: Optional[str] = Field(None)

    def add_deleted_folder(self, path: str) -> None:
        if path not in self.deleted_folders:
            self.deleted_folders.append(path)

    def tests_with_status(self, status: Status) -> List[AutomatedTest]:
        return [t for t in self.tests if t.status == status]

    def resource_files_with_status(self, status: Status) -> List[ScmResourceFile]:
        return [r for r in self.resource_files if r.status == status]

    @property
    def new_tests(self) -> List[AutomatedTest]:
        return self.tests_with_status(Status.NEW)

    @property
    def updated_tests(self) -> List[AutomatedTest]:
        return self.tests_with_status(Status.MODIFIED)

    @property
    def deleted_tests(self) -> List[AutomatedTest]:
        return self.tests_with_status(Status.DELETED)

    @property
    def new_resource_files(self) -> List[ScmResourceFile]:
        return self.resource_files_with_status(Status.NEW)

    @property
    def deleted_resource_files(self) -> List[ScmResourceFile]:
        return self.resource_files_with_status(Status.DELETED)

    def has_changes(self) -> bool:
        """True if any test or data table record exists."""
        return bool(self.tests) or bool(self.resource_files)
