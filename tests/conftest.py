from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from uft_discovery.config import FULL_SCAN_ENV_VAR


@pytest.fixture(autouse=True)
def _no_forced_full_scan(monkeypatch) -> None:
    monkeypatch.delenv(FULL_SCAN_ENV_VAR, raising=False)


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "ws"
    root.mkdir()
    return root


@pytest.fixture()
def touch() -> Callable[..., Path]:
    """Create a file (and its parents) under a root."""

    def _touch(root: Path, relative: str, content: str = "") -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _touch
