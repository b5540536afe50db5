"""Workspace-relative path normalization.

All paths stored on detection entities use a single backslash as separator,
because the tests are executed on Windows hosts. Normalization is idempotent:
normalizing an already normalized path returns it unchanged.
"""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Union

WINDOWS_SEPARATOR = "\\"
LINUX_SEPARATOR = "/"

PathLike = Union[str, PurePath]


def normalize_path(root: PathLike, path: PathLike) -> str:
    """Return ``path`` relative to ``root`` using the canonical separator.

    The root prefix is stripped when present, leading and trailing separators
    of either style are trimmed, and every ``/`` becomes ``\\``.

    Args:
        root: Workspace root
        path: Absolute path under ``root`` or an already relative path

    Returns:
        Canonical relative path ("" for the root itself)
    """
    root_text = str(root).rstrip(WINDOWS_SEPARATOR + LINUX_SEPARATOR)
    path_text = str(path)

    if root_text and path_text.startswith(root_text):
        rest = path_text[len(root_text):]
        if not rest or rest[0] in (WINDOWS_SEPARATOR, LINUX_SEPARATOR):
            path_text = rest

    path_text = path_text.strip(WINDOWS_SEPARATOR + LINUX_SEPARATOR)
    return path_text.replace(LINUX_SEPARATOR, WINDOWS_SEPARATOR)


def split_package(relative_path: str, name: str) -> str:
    """Return the package part of a normalized test folder path.

    ``Tests\\Login\\LoginTest`` with name ``LoginTest`` gives ``Tests\\Login``;
    a folder directly under the root has an empty package.
    """
    if not relative_path or len(relative_path) <= len(name):
        return ""
    return relative_path[: len(relative_path) - len(name) - 1]


def is_quoted(path: str) -> bool:
    """True if source control quoted the path because it failed to decode it."""
    return path.startswith('"')


def workspace_path(root: Path, relative: str) -> Path:
    """Resolve a changeset path (either separator style) under ``root``."""
    parts = relative.replace(WINDOWS_SEPARATOR, LINUX_SEPARATOR).split(LINUX_SEPARATOR)
    return root.joinpath(*[part for part in parts if part])
