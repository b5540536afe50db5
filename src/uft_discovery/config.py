"""Workspace-scoped discovery configuration in .uft-discovery/config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from uft_discovery.errors import ConfigError
from uft_discovery.scm.adapters import ScmKind

STATE_DIR = ".uft-discovery"
CONFIG_FILE = "config.yaml"
CONFIG_SECTION = "discovery"
DEFAULT_RESULT_FILE = "detection_result.json"
DEFAULT_FULL_SCAN_DELAY_SECONDS = 60

FULL_SCAN_ENV_VAR = "UFT_DISCOVERY_FULL_SCAN"
_TRUTHY_VALUES = {"1", "true", "yes", "on"}


def is_full_scan_forced() -> bool:
    """Return True when a full scan is requested through the environment."""
    raw_value = os.getenv(FULL_SCAN_ENV_VAR, "")
    return raw_value.strip().lower() in _TRUTHY_VALUES


@dataclass(slots=True)
class DiscoveryConfig:
    """Discovery settings stored under the ``discovery`` section."""

    scm: str = ScmKind.GIT.value
    workspace_id: str | None = None
    scm_repository_id: str | None = None
    job_name: str | None = None
    result_file: str = DEFAULT_RESULT_FILE
    full_scan_delay_seconds: int = DEFAULT_FULL_SCAN_DELAY_SECONDS

    def result_path(self, workspace: Path) -> Path:
        """Absolute path of the persisted result for ``workspace``."""
        path = Path(self.result_file)
        if path.is_absolute():
            return path
        return state_dir(workspace) / path

    def to_dict(self) -> dict[str, object]:
        return {
            "scm": self.scm,
            "workspace_id": self.workspace_id,
            "scm_repository_id": self.scm_repository_id,
            "job_name": self.job_name,
            "result_file": self.result_file,
            "full_scan_delay_seconds": self.full_scan_delay_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object] | None) -> "DiscoveryConfig":
        if not isinstance(data, dict):
            return cls()

        scm_value = str(data.get("scm") or ScmKind.GIT.value).strip().lower()
        if scm_value not in {kind.value for kind in ScmKind}:
            raise ConfigError(
                f"Invalid scm '{data.get('scm')}'. Expected one of: "
                f"{', '.join(kind.value for kind in ScmKind)}"
            )

        delay_value = data.get("full_scan_delay_seconds", DEFAULT_FULL_SCAN_DELAY_SECONDS)
        try:
            delay = int(delay_value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            raise ConfigError(f"full_scan_delay_seconds must be an integer; got {delay_value!r}") from None
        if delay < 0:
            raise ConfigError(f"full_scan_delay_seconds must be >= 0; got {delay}")

        def _optional(key: str) -> str | None:
            value = data.get(key)
            if value is None:
                return None
            text = str(value).strip()
            return text or None

        return cls(
            scm=scm_value,
            workspace_id=_optional("workspace_id"),
            scm_repository_id=_optional("scm_repository_id"),
            job_name=_optional("job_name"),
            result_file=_optional("result_file") or DEFAULT_RESULT_FILE,
            full_scan_delay_seconds=delay,
        )

    @classmethod
    def load(cls, workspace: Path) -> "DiscoveryConfig":
        """Read the `discovery` section of the workspace config file."""
        section = _read_document(config_file(workspace)).get(CONFIG_SECTION)
        return cls.from_dict(section if isinstance(section, dict) else None)

    def save(self, workspace: Path) -> Path:
        """Write the `discovery` section; other sections of the file are kept.

        Returns:
            Path of the config file
        """
        path = config_file(workspace)
        document = _read_document(path)
        document[CONFIG_SECTION] = self.to_dict()

        path.parent.mkdir(parents=True, exist_ok=True)
        yaml = YAML()
        yaml.preserve_quotes = True
        with path.open("w", encoding="utf-8") as handle:
            yaml.dump(document, handle)
        return path


def state_dir(workspace: Path) -> Path:
    return workspace / STATE_DIR


def config_file(workspace: Path) -> Path:
    return state_dir(workspace) / CONFIG_FILE


def _read_document(path: Path) -> dict:
    """Return the whole YAML document at ``path`` ({} when absent or empty)."""
    if not path.exists():
        return {}
    try:
        document = YAML().load(path.read_text(encoding="utf-8"))
    except (YAMLError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    return document if isinstance(document, dict) else {}
