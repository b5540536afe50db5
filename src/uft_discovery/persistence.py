"""Versioned persistence of detection results.

The persisted document is the DetectionResult field list prefixed with a
``schema_version``. Field order follows the model declaration and collections
are already sorted, so identical results serialize to identical bytes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Optional, Protocol

from pydantic import ValidationError

from uft_discovery.detection.models import DetectionResult
from uft_discovery.errors import PersistenceError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class ResultSerializer(Protocol):
    """Converts a DetectionResult to and from text."""

    def dumps(self, result: DetectionResult) -> str: ...

    def loads(self, text: str) -> DetectionResult: ...


class JsonResultSerializer:
    """JSON rendition of the versioned result schema."""

    def dumps(self, result: DetectionResult) -> str:
        payload = {"schema_version": SCHEMA_VERSION}
        payload.update(result.model_dump(mode="json"))
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

    def loads(self, text: str) -> DetectionResult:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Detection result is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError("Detection result must be a JSON object")

        version = data.pop("schema_version", None)
        if version != SCHEMA_VERSION:
            raise PersistenceError(
                f"Unsupported detection result schema_version {version!r}; expected {SCHEMA_VERSION}"
            )
        try:
            return DetectionResult.model_validate(data)
        except ValidationError as e:
            raise PersistenceError(f"Invalid detection result: {e}") from e


def publish_detection_result(
    path: Path,
    result: DetectionResult,
    serializer: Optional[ResultSerializer] = None,
    reporter: Optional[Callable[[str], None]] = None,
) -> bool:
    """Write ``result`` to ``path``.

    Failures are logged and reported, not raised: the detection itself has
    already succeeded.

    Returns:
        True if the result was written
    """
    serializer = serializer or JsonResultSerializer()
    try:
        text = serializer.dumps(result)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except (OSError, ValueError, TypeError) as e:
        message = f"Failed to persist detection results: {e}"
        logger.error(message)
        if reporter is not None:
            reporter(message)
        return False
    return True


def read_detection_result(
    path: Path, serializer: Optional[ResultSerializer] = None
) -> Optional[DetectionResult]:
    """Load a persisted result, or None if it is missing or unreadable."""
    if not path.exists():
        return None
    serializer = serializer or JsonResultSerializer()
    try:
        return serializer.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, PersistenceError) as e:
        logger.warning(f"Could not read detection result {path}: {e}")
        return None
