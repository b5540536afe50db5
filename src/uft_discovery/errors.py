"""Exception hierarchy for uft-discovery."""

from __future__ import annotations


class DiscoveryError(RuntimeError):
    """Base class for all uft-discovery failures."""


class ConfigError(DiscoveryError):
    """Raised when the project configuration is invalid."""


class ScmError(DiscoveryError):
    """Raised when a changeset cannot be read from source control."""


class PersistenceError(DiscoveryError):
    """Raised when a detection result cannot be written or parsed."""


__all__ = ["DiscoveryError", "ConfigError", "ScmError", "PersistenceError"]
