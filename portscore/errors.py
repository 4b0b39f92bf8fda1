"""Custom exception hierarchy for portscore.

All portscore-specific exceptions derive from PortscoreError. Each
exception carries an optional ``context`` dict with structured metadata
(repository path, platform name, config key, etc.) that the CLI error
handler can render.

The scorer itself never raises: "cannot port" is a BLOCKING result, and a
malformed manifest is treated as a missing one. These exceptions cover the
layers around it.

Exception hierarchy::

    PortscoreError
    ├── RepositoryNotFoundError
    ├── UnsupportedPlatformError
    └── ConfigError
        └── OutputFormatError
"""
from __future__ import annotations

from typing import Optional


class PortscoreError(Exception):
    """Base class for all portscore exceptions.

    Args:
        message: Human-readable error description.
        context: Optional dict of structured metadata.
    """

    exit_code: int = 1

    def __init__(self, message: str, context: Optional[dict] = None):
        self.context = context or {}
        super().__init__(message)


class RepositoryNotFoundError(PortscoreError):
    """Raised when the repository path does not exist or is not a directory."""

    def __init__(self, path: str):
        super().__init__(
            f"Repository '{path}' not found or not a directory",
            context={"path": path},
        )


class UnsupportedPlatformError(PortscoreError):
    """Raised when a readiness check is requested for an unknown platform."""

    def __init__(self, platform: str, available: Optional[list[str]] = None):
        available_str = f". Available: {', '.join(available)}" if available else ""
        super().__init__(
            f"Unsupported platform: {platform}{available_str}",
            context={"platform": platform, "available": list(available or [])},
        )


class ConfigError(PortscoreError):
    """Raised when configuration is invalid."""

    exit_code = 2


class OutputFormatError(ConfigError):
    """Raised when an unknown output format is requested."""

    def __init__(self, output_format: str, available: Optional[list[str]] = None):
        available_str = f". Available: {', '.join(available)}" if available else ""
        super().__init__(
            f"Unknown output format '{output_format}'{available_str}",
            context={"format": output_format, "available": list(available or [])},
        )
