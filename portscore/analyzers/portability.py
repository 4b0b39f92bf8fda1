"""Portability scorer.

Parses the manifest, runs the detection rule table in fixed order, and
builds a PortabilityResult:

    0-29:   cannot port (complete rewrite needed)
    30-49:  high effort (porter helps, heavy manual work)
    50-100: portable (porter automates most changes)
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from . import recommendation
from .manifest import parse_manifest
from .models import (
    BLOCKING_THRESHOLD,
    MAX_SCORE,
    DetectionRule,
    Manifest,
    PortabilityIssue,
    PortabilityResult,
    RepositoryFile,
    Severity,
)
from .rules import DESKTOP_FRAMEWORK_RULE, SCORING_RULES, detect_desktop_framework, has_http_server

logger = logging.getLogger("portscore.scorer")


class PortabilityScorer:
    """Scores a repository's portability to Azure App Service."""

    def __init__(self, rules: Optional[Iterable[DetectionRule]] = None):
        self.rules: tuple[DetectionRule, ...] = tuple(rules) if rules is not None else SCORING_RULES

    def score(self, files: Iterable[RepositoryFile]) -> PortabilityResult:
        """Score a finalized list of repository files.

        Args:
            files: In-memory repository files. Not mutated.

        Returns:
            An immutable PortabilityResult. Never raises for malformed
            manifests; "cannot port" is reported as a BLOCKING result.
        """
        files = list(files)
        manifest = parse_manifest(files)

        framework = detect_desktop_framework(files, manifest)
        if framework:
            logger.info("Desktop framework detected (%s), skipping remaining rules", framework)
            return self._desktop_result(framework)

        score, issues = self._evaluate(files, manifest)
        score = max(0, score)
        severity = Severity.from_score(score)
        text, effort = recommendation.render(score, severity, issues)

        logger.info("Portability score %d/100 (%s, %d issues)", score, severity.value, len(issues))
        return PortabilityResult(
            score=score,
            severity=severity,
            issues=tuple(issues),
            recommendation=text,
            estimated_effort=effort,
        )

    def _evaluate(
        self,
        files: list[RepositoryFile],
        manifest: Optional[Manifest],
    ) -> tuple[int, list[PortabilityIssue]]:
        """Apply each rule in order, deducting its weight when it fires."""
        score = MAX_SCORE
        issues: list[PortabilityIssue] = []
        web_server = has_http_server(files, manifest)

        for rule in self.rules:
            if rule.requires_web_server and not web_server:
                continue
            if not rule.fires(files, manifest):
                continue
            score -= rule.weight
            # Blocker is judged on the running score, so rule order matters.
            issues.append(
                PortabilityIssue(
                    category=rule.category,
                    impact=rule.weight,
                    description=rule.description,
                    blocker=score < BLOCKING_THRESHOLD,
                )
            )
            logger.debug("Rule %s fired (-%d, running score %d)", rule.name, rule.weight, score)

        return score, issues

    def _desktop_result(self, framework: str) -> PortabilityResult:
        rule = DESKTOP_FRAMEWORK_RULE
        issue = PortabilityIssue(
            category=rule.category,
            impact=rule.weight,
            description=rule.description.format(framework=framework),
            blocker=True,
        )
        text, effort = recommendation.render_desktop(framework)
        return PortabilityResult(
            score=0,
            severity=Severity.BLOCKING,
            issues=(issue,),
            recommendation=text,
            estimated_effort=effort,
        )


def calculate_portability_score(files: Iterable[RepositoryFile]) -> PortabilityResult:
    """Score repository files with the default rule table."""
    return PortabilityScorer().score(files)
