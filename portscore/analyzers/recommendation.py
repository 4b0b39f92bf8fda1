"""Recommendation and effort text for portability results.

Rendering is a pure function of (score, severity, issues) so the narrative
can be tested independently of the scoring math.
"""
from __future__ import annotations

from typing import Iterable

from .models import PortabilityIssue, Severity

DESKTOP_TEMPLATE = """\
CANNOT PORT: This is a {framework} desktop application.

Desktop applications use fundamentally different architectures than web applications:
- Desktop: Process-based, IPC communication, native windows, single-user
- Web: Request-based, HTTP communication, browser-based, multi-user

Azure App Service hosts web applications, not desktop applications.

RECOMMENDED ACTION:
Build a new Azure-native web application from scratch instead of porting.

Why rebuild is better:
- Proper web architecture from the start
- Faster than trying to convert desktop -> web
- Better performance and scalability
- Cleaner codebase without architectural compromises

Estimated effort:
- Porting + fixing: 60-100 hours (30% success rate)
- Rebuilding fresh: 40-60 hours (100% success rate)

The platform-readiness tool cannot generate a functional patch for this application."""

DESKTOP_EFFORT = "Cannot be automated - Complete rewrite required (40-60 hours)"

BLOCKING_TEMPLATE = """\
CANNOT PORT (Score: {score}/100)

This application has fundamental architectural incompatibilities with Azure App Service.

Critical issues found:
{issues}

RECOMMENDED ACTION:
Build a new Azure-native web application from scratch.

Estimated effort:
- Porting + fixing: 60-100 hours
- Rebuilding fresh: 40-80 hours

This will be faster and result in better architecture than attempting to port."""

BLOCKING_EFFORT = "Cannot automate - Complete rewrite required (40-80 hours)"

WARNING_TEMPLATE = """\
HIGH EFFORT REQUIRED (Score: {score}/100)

This application can technically be ported, but will require significant manual work.

Issues to address:
{issues}

OPTIONS:
1. Use porter + extensive manual fixes (recommended if close to 50)
2. Rebuild as Azure-native app (recommended if below 40)

Consider: Is it worth the effort to port, or faster to rebuild?"""

WARNING_EFFORT = "Porter helps, but 30-50 hours manual work required"

OK_TEMPLATE = """\
CAN PORT (Score: {score}/100)

This application is suitable for automated porting with minor manual cleanup.

Issues to address:
{issues}

The porter will handle most changes automatically.
Manual work needed: {low_hours}-{high_hours} hours estimated."""

OK_EFFORT = "Porter automates most changes - {low_hours}-{high_hours} hours manual work"


def _bullets(issues: Iterable[PortabilityIssue]) -> str:
    return "\n".join(f"- {issue.description}" for issue in issues)


def manual_hours(issue_count: int) -> tuple[int, int]:
    """Manual cleanup estimate: two to four hours per issue."""
    return issue_count * 2, issue_count * 4


def render_desktop(framework: str) -> tuple[str, str]:
    """Recommendation for the instant-fail desktop framework path."""
    return DESKTOP_TEMPLATE.format(framework=framework), DESKTOP_EFFORT


def render(
    score: int,
    severity: Severity,
    issues: Iterable[PortabilityIssue],
) -> tuple[str, str]:
    """Return ``(recommendation, estimated_effort)`` for a scored repository."""
    issues = list(issues)

    if severity is Severity.BLOCKING:
        blockers = [issue for issue in issues if issue.blocker]
        return BLOCKING_TEMPLATE.format(score=score, issues=_bullets(blockers)), BLOCKING_EFFORT

    if severity is Severity.WARNING:
        return WARNING_TEMPLATE.format(score=score, issues=_bullets(issues)), WARNING_EFFORT

    low, high = manual_hours(len(issues))
    recommendation = OK_TEMPLATE.format(
        score=score,
        issues=_bullets(issues),
        low_hours=low,
        high_hours=high,
    )
    return recommendation, OK_EFFORT.format(low_hours=low, high_hours=high)
