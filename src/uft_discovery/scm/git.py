"""Read a changeset from a Git working copy.

Uses ``git diff --name-status -M`` between two revisions. Git never reports
directories; renames are split into a DELETE of the source and an ADD of the
destination, both carrying the rename pair.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from ..errors import ScmError
from .records import ChangeRecord, EditType

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 60


def _git_output(repo_root: Path, args: List[str], timeout: int = GIT_TIMEOUT_SECONDS) -> str:
    """Run git in ``repo_root`` and return its standard output.

    Raises:
        ScmError: If git is missing, times out or exits non-zero
    """
    command = " ".join(["git", *args])
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=str(repo_root),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise ScmError("git executable not found on PATH") from e
    except subprocess.TimeoutExpired as e:
        raise ScmError(f"{command} timed out after {timeout}s") from e

    if completed.returncode != 0:
        stderr = (completed.stderr or "").strip()
        detail = stderr.splitlines()[0] if stderr else "unknown error"
        raise ScmError(f"{command} failed ({completed.returncode}): {detail}")
    return completed.stdout or ""


def parse_name_status(output: str) -> List[ChangeRecord]:
    """Parse ``git diff --name-status`` output into change records.

    Args:
        output: Tab-separated name-status lines

    Returns:
        Change records in output order
    """
    records: List[ChangeRecord] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split("\t")
        code = parts[0][:1].upper()

        if code == "A" and len(parts) >= 2:
            records.append(ChangeRecord(parts[1], EditType.ADD, dst=parts[1]))
        elif code in ("M", "T") and len(parts) >= 2:
            records.append(ChangeRecord(parts[1], EditType.EDIT, src=parts[1], dst=parts[1]))
        elif code == "D" and len(parts) >= 2:
            records.append(ChangeRecord(parts[1], EditType.DELETE, src=parts[1]))
        elif code == "R" and len(parts) >= 3:
            src, dst = parts[1], parts[2]
            records.append(ChangeRecord(src, EditType.DELETE, src=src, dst=dst))
            records.append(ChangeRecord(dst, EditType.ADD, src=src, dst=dst))
        elif code == "C" and len(parts) >= 3:
            records.append(ChangeRecord(parts[2], EditType.ADD, dst=parts[2]))
        else:
            logger.debug(f"Ignoring git name-status line: {line!r}")
    return records


def read_git_changes(
    repo_root: Path,
    since: str,
    until: str = "HEAD",
    quote_paths: Optional[bool] = None,
) -> List[ChangeRecord]:
    """Return the changes between two revisions of a Git working copy.

    Args:
        repo_root: Working copy root
        since: Older revision (exclusive)
        until: Newer revision (inclusive)
        quote_paths: Override ``core.quotepath``; None keeps the user's setting

    Raises:
        ScmError: If git fails or is not installed
    """
    args: list[str] = []
    if quote_paths is not None:
        args += ["-c", f"core.quotepath={'true' if quote_paths else 'false'}"]
    args += ["diff", "--name-status", "-M", f"{since}..{until}"]

    records = parse_name_status(_git_output(repo_root, args))
    logger.debug(f"Read {len(records)} change records from git {since}..{until}")
    return records


__all__ = ["parse_name_status", "read_git_changes"]
