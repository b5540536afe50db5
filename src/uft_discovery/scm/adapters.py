"""Per-SCM interpretation of change records.

Source-control systems report changes in different shapes: Subversion emits a
single event for a deleted directory, Git only ever lists files but carries
rename source and destination. Each supported system gets one adapter,
selected by an explicit ScmKind tag.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from ..errors import ConfigError
from .records import ChangeRecord, EditType, MoveInfo


class ScmKind(StrEnum):
    """Supported source-control systems."""

    GIT = "git"
    SVN = "svn"
    OTHER = "other"


class ScmAdapter:
    """Adapter for an SCM without special record shapes.

    Never reports directories and carries no rename information.
    """

    kind: ScmKind = ScmKind.OTHER

    def is_directory(self, record: ChangeRecord) -> bool:
        return False

    def is_directory_delete(self, record: ChangeRecord) -> bool:
        """True if the record is a single event for a deleted directory."""
        return record.edit_type == EditType.DELETE and self.is_directory(record)

    def extract_rename(self, record: ChangeRecord) -> Optional[MoveInfo]:
        return None


class GitAdapter(ScmAdapter):
    """Git lists files only; rename source and destination come from the record."""

    kind = ScmKind.GIT

    def extract_rename(self, record: ChangeRecord) -> Optional[MoveInfo]:
        if record.src is None and record.dst is None:
            return None
        return MoveInfo(record.src, record.dst)


class SvnAdapter(ScmAdapter):
    """Subversion marks directory paths with kind 'dir'."""

    kind = ScmKind.SVN

    def is_directory(self, record: ChangeRecord) -> bool:
        kind = getattr(record, "kind", None)
        if not isinstance(kind, str):
            return False
        return kind.strip().lower() == "dir"


_ADAPTERS: dict[ScmKind, type[ScmAdapter]] = {
    ScmKind.GIT: GitAdapter,
    ScmKind.SVN: SvnAdapter,
    ScmKind.OTHER: ScmAdapter,
}


def get_adapter(kind: ScmKind | str) -> ScmAdapter:
    """Return the adapter for an SCM tag.

    Raises:
        ConfigError: If the tag names no supported SCM
    """
    try:
        scm_kind = ScmKind(str(kind).strip().lower())
    except ValueError:
        supported = ", ".join(k.value for k in ScmKind)
        raise ConfigError(f"Unsupported SCM '{kind}'. Expected one of: {supported}") from None
    return _ADAPTERS[scm_kind]()


__all__ = ["ScmKind", "ScmAdapter", "GitAdapter", "SvnAdapter", "get_adapter"]
