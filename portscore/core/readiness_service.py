"""Platform readiness checks built on the portability score.

The portability score gates everything else: repositories below the
portable threshold only get portability findings, the rest get the
standard Azure App Service deployment checks.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from portscore.analyzers.manifest import find_manifest, parse_manifest
from portscore.analyzers.models import (
    BLOCKING_THRESHOLD,
    PORTABLE_THRESHOLD,
    PortabilityIssue,
    PortabilityResult,
    RepositoryFile,
)
from portscore.analyzers.portability import calculate_portability_score
from portscore.core import AnalysisResult, ReadinessIssue
from portscore.errors import UnsupportedPlatformError

logger = logging.getLogger("portscore.core.readiness")

AZURE_CONFIG_FILES = ("azure.yaml", ".azure/config")

CLOUD_DATABASE_CHOICES = (
    "Choose a cloud database when porting:\n"
    "- Azure SQL Free Tier (32GB, 100K vCore seconds/month) - RECOMMENDED\n"
    "- Cosmos DB Free Tier (25GB, 1000 RU/s) - For NoSQL/MongoDB apps\n"
    "- Azure SQL Paid (~$5+/month) - For enterprise needs (>10 DBs, >32GB)\n"
    "- PostgreSQL (~$15-30/month after 12 months free)\n"
    "- MySQL (~$15-30/month after 12 months free)"
)

REBUILD_SUGGESTION = """\
RECOMMENDATION: REBUILD FROM SCRATCH

This application has a portability score below 50, meaning:
- Porting will require extensive manual work ({effort})
- Rebuilding as Azure-native will be FASTER and result in better architecture
- The automated porter cannot adequately handle these issues

{recommendation}

Building Azure-native from the start will save time and produce superior results."""


def _portability_issue(issue: PortabilityIssue) -> ReadinessIssue:
    label = "BLOCKER" if issue.blocker else "CRITICAL"
    if issue.blocker:
        detail = "This is a fundamental incompatibility that cannot be automatically fixed."
    else:
        detail = "Requires significant manual work."
    return ReadinessIssue(
        category="runtime",
        severity="error",
        message=f"[{label}] {issue.description}",
        suggestion=f"Impact: -{issue.impact} points. {detail}",
    )


def _standard_checks(files: list[RepositoryFile]) -> list[ReadinessIssue]:
    issues: list[ReadinessIssue] = []
    paths = {f.path for f in files}
    manifest_file = find_manifest(files)
    manifest = parse_manifest(files)

    if not any(path in paths for path in AZURE_CONFIG_FILES):
        issues.append(ReadinessIssue(
            category="config",
            severity="error",
            message="Missing Azure deployment configuration",
            suggestion="Create azure.yaml with App Service configuration",
        ))

    if manifest_file and ('"sqlite3"' in manifest_file.content or '"sqlite"' in manifest_file.content):
        issues.append(ReadinessIssue(
            category="database",
            severity="error",
            message="SQLite database will not persist in Azure App Service (ephemeral file system)",
            suggestion=CLOUD_DATABASE_CHOICES,
            file=manifest_file.path,
        ))

    storage_file = next(
        (f for f in files if "fs.writeFile" in f.content or "multer" in f.content),
        None,
    )
    if storage_file:
        issues.append(ReadinessIssue(
            category="storage",
            severity="error",
            message="Local file storage will not persist in Azure App Service (ephemeral file system)",
            suggestion="Migrate to Azure Blob Storage for persistent file storage",
            file=storage_file.path,
        ))

    if ".env" in paths:
        issues.append(ReadinessIssue(
            category="config",
            severity="warning",
            message=".env file will not be deployed to Azure",
            suggestion="Configure environment variables in Azure App Service settings",
            file=".env",
        ))

    if manifest is None or not manifest.script("start"):
        issues.append(ReadinessIssue(
            category="config",
            severity="error",
            message="Missing start script in package.json",
            suggestion='Add "start" script for Azure App Service',
        ))

    return issues


def check_azure_readiness_with_score(
    files: list[RepositoryFile],
) -> tuple[list[ReadinessIssue], PortabilityResult]:
    """Run the Azure readiness checks and return the portability result used."""
    portability = calculate_portability_score(files)

    if portability.score < BLOCKING_THRESHOLD:
        issues = [ReadinessIssue(
            category="runtime",
            severity="error",
            message=(
                f"CANNOT PORT: Portability Score {portability.score}/100 - "
                f"{portability.severity.value}"
            ),
            suggestion=portability.recommendation,
        )]
        issues.extend(_portability_issue(i) for i in portability.blocker_issues)
        return issues, portability

    if portability.score < PORTABLE_THRESHOLD:
        issues = [ReadinessIssue(
            category="runtime",
            severity="error",
            message=f"NOT RECOMMENDED TO PORT: Portability Score {portability.score}/100",
            suggestion=REBUILD_SUGGESTION.format(
                effort=portability.estimated_effort,
                recommendation=portability.recommendation,
            ),
        )]
        issues.extend(_portability_issue(i) for i in portability.issues)
        return issues, portability

    return _standard_checks(files), portability


def check_azure_readiness(files: list[RepositoryFile]) -> list[ReadinessIssue]:
    """Return Azure App Service readiness issues for the repository files."""
    issues, _ = check_azure_readiness_with_score(files)
    return issues


CHECKERS: dict[str, Callable[[list[RepositoryFile]], tuple[list[ReadinessIssue], PortabilityResult]]] = {
    "azure": check_azure_readiness_with_score,
}


def analyze_repository(
    files: list[RepositoryFile],
    platform: str = "azure",
    source: str = "",
) -> AnalysisResult:
    """Check repository files against a target platform.

    Raises:
        UnsupportedPlatformError: If no checker exists for ``platform``.
    """
    checker = CHECKERS.get(platform)
    if checker is None:
        raise UnsupportedPlatformError(platform, available=sorted(CHECKERS))

    issues, portability = checker(files)
    is_ready = not any(issue.severity == "error" for issue in issues)
    logger.info(
        "Readiness for %s: %s (%d issues)",
        platform,
        "ready" if is_ready else "not ready",
        len(issues),
    )
    return AnalysisResult(
        id=uuid.uuid4().hex,
        source=source,
        target_platform=platform,
        is_ready=is_ready,
        issues=issues,
        timestamp=datetime.now(timezone.utc).isoformat(),
        portability=portability,
    )
