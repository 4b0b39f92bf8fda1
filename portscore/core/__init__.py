"""Service layer for portscore.

All services return typed dataclasses. Services never import from
portscore.ui, portscore.cli, or typer. Consumer layers handle presentation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from portscore.analyzers.models import PortabilityResult


@dataclass
class ReadinessIssue:
    """A platform readiness finding."""

    category: str  # database, storage, runtime, config, dependencies
    severity: str  # error, warning, info
    message: str
    suggestion: str = ""
    file: Optional[str] = None
    line: Optional[int] = None

    def to_dict(self) -> dict:
        data = {
            "category": self.category,
            "severity": self.severity,
            "message": self.message,
            "suggestion": self.suggestion,
        }
        if self.file is not None:
            data["file"] = self.file
        if self.line is not None:
            data["line"] = self.line
        return data


@dataclass
class AnalysisResult:
    """Readiness analysis of one repository for one target platform."""

    id: str
    source: str
    target_platform: str
    is_ready: bool
    issues: list[ReadinessIssue] = field(default_factory=list)
    timestamp: str = ""
    portability: Optional[PortabilityResult] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "targetPlatform": self.target_platform,
            "isReady": self.is_ready,
            "issues": [issue.to_dict() for issue in self.issues],
            "timestamp": self.timestamp,
            "portability": self.portability.to_dict() if self.portability else None,
        }
