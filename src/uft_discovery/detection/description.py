"""Read the human description of a test from its marker file."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from .classifier import API_TEST_EXTENSION, list_entries

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1].lower()


def read_test_description(test_folder: Path) -> Optional[str]:
    """Return the description stored in the folder's API marker file.

    API tests keep their description in a ``Description`` element of the
    ``.st`` XML document. GUI ``.tsp`` files are binary containers and are
    not read. Missing, unreadable or malformed files give no description.
    """
    for entry in list_entries(test_folder):
        if not entry.is_file() or not entry.name.lower().endswith(API_TEST_EXTENSION):
            continue
        try:
            tree = ET.parse(entry)
        except (ET.ParseError, OSError) as e:
            logger.debug(f"No description in {entry}: {e}")
            return None
        for element in tree.iter():
            if isinstance(element.tag, str) and _local_name(element.tag) == "description":
                text = (element.text or "").strip()
                return text or None
        return None
    return None
