"""Data models for portability scoring."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

# Tier boundaries. Scores below BLOCKING_THRESHOLD cannot be ported,
# scores at or above PORTABLE_THRESHOLD can be ported automatically.
BLOCKING_THRESHOLD = 30
PORTABLE_THRESHOLD = 50
MAX_SCORE = 100


class Severity(str, Enum):
    """Decision tier derived from a portability score."""

    BLOCKING = "BLOCKING"
    WARNING = "WARNING"
    OK = "OK"

    @classmethod
    def from_score(cls, score: int) -> "Severity":
        if score < BLOCKING_THRESHOLD:
            return cls.BLOCKING
        if score < PORTABLE_THRESHOLD:
            return cls.WARNING
        return cls.OK


@dataclass(frozen=True)
class RepositoryFile:
    """One file pulled from the target repository."""
    path: str
    content: str


@dataclass(frozen=True)
class Manifest:
    """Parsed package.json. Missing sections are empty dicts."""
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    scripts: dict[str, str] = field(default_factory=dict)

    def has_dependency(self, name: str) -> bool:
        return name in self.dependencies

    def has_dev_dependency(self, name: str) -> bool:
        return name in self.dev_dependencies

    def has_any_dependency(self, name: str) -> bool:
        """True if the package appears in dependencies or devDependencies."""
        return self.has_dependency(name) or self.has_dev_dependency(name)

    def script(self, name: str) -> Optional[str]:
        return self.scripts.get(name)


Predicate = Callable[[list[RepositoryFile], Optional[Manifest]], bool]


@dataclass(frozen=True)
class DetectionRule:
    """A weighted check against the repository file set.

    ``description`` may contain a ``{framework}`` placeholder filled in with
    the detected value when the issue is emitted. Rules with
    ``requires_web_server`` are only evaluated when an HTTP server
    framework was detected.
    """
    name: str
    category: str
    weight: int
    predicate: Predicate
    description: str
    is_blocker: bool = False
    requires_web_server: bool = False

    def fires(self, files: list[RepositoryFile], manifest: Optional[Manifest]) -> bool:
        return self.predicate(files, manifest)


@dataclass(frozen=True)
class PortabilityIssue:
    """A single rule firing."""
    category: str
    impact: int  # points deducted from the score
    description: str
    blocker: bool

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "impact": self.impact,
            "description": self.description,
            "blocker": self.blocker,
        }


@dataclass(frozen=True)
class PortabilityResult:
    """Outcome of one scoring call."""
    score: int
    severity: Severity
    issues: tuple[PortabilityIssue, ...] = ()
    recommendation: str = ""
    estimated_effort: str = ""

    @property
    def can_port(self) -> bool:
        return self.score >= PORTABLE_THRESHOLD

    @property
    def blocker_issues(self) -> list[PortabilityIssue]:
        return [issue for issue in self.issues if issue.blocker]

    def to_dict(self) -> dict:
        """Serialize using the wire field names, issues in evaluation order."""
        return {
            "score": self.score,
            "canPort": self.can_port,
            "severity": self.severity.value,
            "issues": [issue.to_dict() for issue in self.issues],
            "recommendation": self.recommendation,
            "estimatedEffort": self.estimated_effort,
        }
