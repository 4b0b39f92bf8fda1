"""Layered configuration service for portscore.

Priority (highest to lowest):
1. Environment variables (PORTSCORE_*)
2. Project config (.portscore.toml in current directory)
3. Global config (~/.config/portscore/config.toml)
4. Built-in defaults

Scoring weights and tier thresholds are fixed and deliberately absent
from this configuration.
"""
from __future__ import annotations

import copy
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from portscore.errors import ConfigError, OutputFormatError

logger = logging.getLogger("portscore.config")

# TOML reading: stdlib in 3.11+, tomli for 3.10
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

OUTPUT_FORMATS = ("table", "json", "yaml")

# Default configuration values
DEFAULTS: dict[str, Any] = {
    "loader": {
        "max_files": 2000,
        "extensions": [".ts", ".js", ".json"],
        "important_files": [
            "package.json",
            "wrangler.toml",
            "azure.yaml",
            ".azure/config",
            "Dockerfile",
            "docker-compose.yml",
            ".env.example",
            "tsconfig.json",
            ".env",
        ],
        "skip_dirs": [".git", "node_modules"],
    },
    "output": {
        "format": "table",
    },
    "ui": {
        "plain_output": False,
    },
    "logging": {
        "level": "WARNING",
    },
}

# Mapping of env vars to config paths
ENV_VAR_MAP = {
    "PORTSCORE_MAX_FILES": "loader.max_files",
    "PORTSCORE_FORMAT": "output.format",
    "PORTSCORE_PLAIN": "ui.plain_output",
    "PORTSCORE_LOG_LEVEL": "logging.level",
}


def _global_config_dir() -> Path:
    """Return the global config directory: ~/.config/portscore/."""
    return Path.home() / ".config" / "portscore"


def _global_config_path() -> Path:
    return _global_config_dir() / "config.toml"


def _project_config_path() -> Path:
    """Return the project config file path (.portscore.toml in cwd)."""
    return Path.cwd() / ".portscore.toml"


def _read_toml(path: Path) -> dict:
    """Read a TOML file, returning empty dict if missing or unreadable."""
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base (override wins)."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _get_nested(data: dict, dotted_key: str, default: Any = None) -> Any:
    """Get a value from a nested dict using dotted key notation."""
    current = data
    for key in dotted_key.split("."):
        if not isinstance(current, dict):
            return default
        current = current.get(key)
        if current is None:
            return default
    return current


def _set_nested(data: dict, dotted_key: str, value: Any) -> None:
    """Set a value in a nested dict using dotted key notation."""
    keys = dotted_key.split(".")
    current = data
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


def _coerce_env_value(value: str) -> Any:
    if value.lower() in ("true", "1", "yes"):
        return True
    if value.lower() in ("false", "0", "no"):
        return False
    return value


@dataclass
class LoaderSettings:
    """Settings for reading a local repository checkout."""

    max_files: int
    extensions: tuple[str, ...]
    important_files: tuple[str, ...]
    skip_dirs: tuple[str, ...]


@dataclass
class ResolvedConfig:
    """Fully resolved configuration after merging all layers."""
    data: dict = field(default_factory=dict)
    global_config_path: Optional[Path] = None
    project_config_path: Optional[Path] = None

    def get(self, dotted_key: str, default: Any = None) -> Any:
        """Get a config value using dotted key notation."""
        return _get_nested(self.data, dotted_key, default)


class ConfigService:
    """Layered configuration service.

    Resolves config from multiple sources with clear precedence:
    1. Environment variables (PORTSCORE_*)
    2. Project config (.portscore.toml)
    3. Global config (~/.config/portscore/config.toml)
    4. Built-in defaults
    """

    def __init__(self):
        self._resolved: Optional[ResolvedConfig] = None

    def resolve(self, force: bool = False) -> ResolvedConfig:
        """Resolve the full config from all layers."""
        if self._resolved is not None and not force:
            return self._resolved

        merged = copy.deepcopy(DEFAULTS)

        global_path = _global_config_path()
        global_data = _read_toml(global_path)
        if global_data:
            merged = _deep_merge(merged, global_data)
            logger.debug("Loaded global config from %s", global_path)

        project_path = _project_config_path()
        project_data = _read_toml(project_path)
        if project_data:
            merged = _deep_merge(merged, project_data)
            logger.debug("Loaded project config from %s", project_path)

        for env_var, config_path in ENV_VAR_MAP.items():
            env_value = os.environ.get(env_var)
            if env_value is not None:
                _set_nested(merged, config_path, _coerce_env_value(env_value))

        self._resolved = ResolvedConfig(
            data=merged,
            global_config_path=global_path if global_path.is_file() else None,
            project_config_path=project_path if project_path.is_file() else None,
        )
        return self._resolved

    def get(self, dotted_key: str, default: Any = None) -> Any:
        """Get a resolved config value."""
        return self.resolve().get(dotted_key, default)

    def get_loader_settings(self) -> LoaderSettings:
        """Return validated repository loader settings."""
        raw_max = self.get("loader.max_files", DEFAULTS["loader"]["max_files"])
        try:
            max_files = int(raw_max)
        except (TypeError, ValueError):
            raise ConfigError(
                f"loader.max_files must be an integer, got {raw_max!r}",
                context={"key": "loader.max_files"},
            )
        if max_files <= 0:
            raise ConfigError(
                f"loader.max_files must be positive, got {max_files}",
                context={"key": "loader.max_files"},
            )

        return LoaderSettings(
            max_files=max_files,
            extensions=tuple(self.get("loader.extensions", [])),
            important_files=tuple(self.get("loader.important_files", [])),
            skip_dirs=tuple(self.get("loader.skip_dirs", [])),
        )

    def get_output_format(self, override: Optional[str] = None) -> str:
        """Return the output format, validated against OUTPUT_FORMATS."""
        output_format = (override or self.get("output.format", "table")).lower()
        if output_format not in OUTPUT_FORMATS:
            raise OutputFormatError(output_format, available=list(OUTPUT_FORMATS))
        return output_format

    def get_log_level(self) -> str:
        return str(self.get("logging.level", "WARNING")).upper()

    def is_plain_output(self) -> bool:
        return bool(self.get("ui.plain_output", False))

    def show(self) -> dict:
        """Return the resolved config and the files it was read from."""
        resolved = self.resolve(force=True)
        return {
            "resolved": resolved.data,
            "sources": {
                "global_config": str(resolved.global_config_path) if resolved.global_config_path else None,
                "project_config": str(resolved.project_config_path) if resolved.project_config_path else None,
            },
        }

    def config_paths(self) -> dict[str, str]:
        """Return all config file locations and their existence status."""
        global_path = _global_config_path()
        project_path = _project_config_path()
        return {
            "global_config": f"{global_path} ({'exists' if global_path.is_file() else 'not found'})",
            "project_config": f"{project_path} ({'exists' if project_path.is_file() else 'not found'})",
        }


# Module-level singleton
_config_service: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """Get or create the global ConfigService instance."""
    global _config_service
    if _config_service is None:
        _config_service = ConfigService()
    return _config_service


def reset_config_service() -> None:
    """Reset the global config service (useful for testing)."""
    global _config_service
    _config_service = None
