"""Locate and parse the repository's package.json."""
from __future__ import annotations

import json
import logging
from typing import Optional

from .models import Manifest, RepositoryFile

logger = logging.getLogger("portscore.manifest")

MANIFEST_FILENAME = "package.json"


def find_manifest(files: list[RepositoryFile]) -> Optional[RepositoryFile]:
    """Return the root-level manifest file, if any. No other location is searched."""
    for f in files:
        if f.path == MANIFEST_FILENAME:
            return f
    return None


def _section(data: dict, key: str) -> dict[str, str]:
    value = data.get(key)
    if not isinstance(value, dict):
        return {}
    return {str(name): str(spec) for name, spec in value.items()}


def parse_manifest(files: list[RepositoryFile]) -> Optional[Manifest]:
    """Parse package.json into a Manifest.

    A malformed manifest is treated exactly like a missing one: the result
    is ``None`` and nothing is raised.
    """
    manifest_file = find_manifest(files)
    if manifest_file is None:
        logger.debug("No %s found", MANIFEST_FILENAME)
        return None

    try:
        data = json.loads(manifest_file.content)
    except (ValueError, TypeError, RecursionError) as e:
        logger.debug("Failed to parse %s: %s", MANIFEST_FILENAME, e)
        return None

    if not isinstance(data, dict):
        logger.debug("%s root is not an object, ignoring", MANIFEST_FILENAME)
        return None

    return Manifest(
        dependencies=_section(data, "dependencies"),
        dev_dependencies=_section(data, "devDependencies"),
        scripts=_section(data, "scripts"),
    )
