"""Read a local repository checkout into in-memory file records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from portscore.analyzers.models import RepositoryFile
from portscore.core.config_service import LoaderSettings, get_config_service
from portscore.errors import RepositoryNotFoundError

logger = logging.getLogger("portscore.core.repository")


def _wanted(rel_path: str, path: Path, settings: LoaderSettings) -> bool:
    if rel_path in settings.important_files:
        return True
    return path.suffix in settings.extensions


def discover_files(root: Path, settings: LoaderSettings) -> list[Path]:
    """Walk the tree and collect the files that the scorer looks at."""
    files: list[Path] = []
    skip = set(settings.skip_dirs)
    for item in sorted(root.rglob("*")):
        if not item.is_file():
            continue
        rel = item.relative_to(root)
        if skip & set(rel.parts[:-1]):
            continue
        if not _wanted(rel.as_posix(), item, settings):
            continue
        files.append(item)
        if len(files) >= settings.max_files:
            logger.warning("Hit file limit (%d), skipping remaining files", settings.max_files)
            break
    return files


def load_repository_files(
    root: Path,
    settings: Optional[LoaderSettings] = None,
) -> list[RepositoryFile]:
    """Load a repository directory as a list of RepositoryFile records.

    Args:
        root: Root directory of the checkout.
        settings: Loader settings; resolved from config when omitted.

    Returns:
        Files with repository-relative, ``/``-separated paths, in sorted order.

    Raises:
        RepositoryNotFoundError: If ``root`` is not a directory.
    """
    root = Path(root).expanduser()
    if not root.is_dir():
        raise RepositoryNotFoundError(str(root))
    root = root.resolve()
    settings = settings or get_config_service().get_loader_settings()

    logger.info("Loading repository: %s", root)
    records: list[RepositoryFile] = []
    for path in discover_files(root, settings):
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Failed to read %s: %s", path, e)
            continue
        records.append(RepositoryFile(path=path.relative_to(root).as_posix(), content=content))

    logger.info("Loaded %d files", len(records))
    return records
