"""Source-control change records consumed by the incremental scan."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, NamedTuple, Optional


class EditType(StrEnum):
    """Kind of edit reported for a path."""

    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: str) -> "EditType":
        """Parse an edit type name or its single-letter status code."""
        text = str(value).strip().lower()
        aliases = {"a": "add", "m": "edit", "modify": "edit", "d": "delete"}
        try:
            return cls(aliases.get(text, text))
        except ValueError:
            raise ValueError(f"Unknown edit type: {value!r}") from None


class MoveInfo(NamedTuple):
    """Rename source and destination reported for a change record."""

    src: Optional[str]
    dst: Optional[str]


@dataclass(frozen=True)
class ChangeRecord:
    """One path-level edit from a changeset.

    Attributes:
        path: Path relative to the workspace root, as reported by the SCM
        edit_type: ADD, EDIT or DELETE
        kind: Raw path kind reported by the SCM ("dir"/"file"), if any
        src: Rename source reported by the SCM, if any
        dst: Rename destination reported by the SCM, if any
    """

    path: str
    edit_type: EditType
    kind: Optional[str] = None
    src: Optional[str] = None
    dst: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"path": self.path, "edit_type": str(self.edit_type)}
        if self.kind:
            payload["kind"] = self.kind
        if self.src:
            payload["src"] = self.src
        if self.dst:
            payload["dst"] = self.dst
        return payload

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChangeRecord":
        if not isinstance(data, dict) or not data.get("path"):
            raise ValueError(f"Change record needs a 'path': {data!r}")
        return cls(
            path=str(data["path"]),
            edit_type=EditType.parse(data.get("edit_type", "")),
            kind=data.get("kind"),
            src=data.get("src"),
            dst=data.get("dst"),
        )
