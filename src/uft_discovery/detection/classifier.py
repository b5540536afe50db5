"""Marker-based classification of test folders and data tables.

A folder is a UFT test if it directly contains a file ending in the API
marker extension (``.st``) or the GUI marker extension (``.tsp``). A data
table is any file ending in ``.xlsx`` or ``.xls``. These extensions are a
contract shared with the tools that author and execute the tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from .models import TestKind

API_TEST_EXTENSION = ".st"
GUI_TEST_EXTENSION = ".tsp"
RESOURCE_EXTENSIONS = (".xlsx", ".xls")


def list_entries(directory: Path) -> List[Path]:
    """Return the immediate entries of ``directory`` in ordinal name order.

    A directory that does not exist has no entries.
    """
    if not directory.is_dir():
        return []
    return sorted(directory.iterdir(), key=lambda p: p.name)


def classify_directory(entries: Iterable[Path]) -> TestKind:
    """Return the test kind of a folder from its immediate entries.

    The first marker file seen decides the kind; NONE means the folder is not
    a test root.
    """
    for entry in entries:
        if not entry.is_file():
            continue
        name = entry.name.lower()
        if name.endswith(API_TEST_EXTENSION):
            return TestKind.API
        if name.endswith(GUI_TEST_EXTENSION):
            return TestKind.GUI
    return TestKind.NONE


def is_resource_file(name: str) -> bool:
    """True if the name ends with a recognized spreadsheet extension."""
    return name.lower().endswith(RESOURCE_EXTENSIONS)


def is_test_main_file(name: str) -> bool:
    """True if the name ends with the API or GUI marker extension."""
    lowered = name.lower()
    return lowered.endswith(API_TEST_EXTENSION) or lowered.endswith(GUI_TEST_EXTENSION)


def owning_test_folder(main_file: Path) -> Optional[Path]:
    """Return the test folder owning a marker file, or None for other files."""
    if not is_test_main_file(main_file.name):
        return None
    return main_file.parent

