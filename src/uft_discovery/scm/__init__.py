"""Source-control integration: change records, per-SCM adapters, Git reader."""

from .adapters import GitAdapter, ScmAdapter, ScmKind, SvnAdapter, get_adapter
from .git import parse_name_status, read_git_changes
from .records import ChangeRecord, EditType, MoveInfo

__all__ = [
    "ChangeRecord",
    "EditType",
    "MoveInfo",
    "ScmKind",
    "ScmAdapter",
    "GitAdapter",
    "SvnAdapter",
    "get_adapter",
    "parse_name_status",
    "read_git_changes",
]
