"""Tests for recommendation and effort rendering."""

from portscore.analyzers import recommendation
from portscore.analyzers.models import PortabilityIssue, PortabilityResult, Severity


def _issue(description: str, blocker: bool = False, impact: int = 10) -> PortabilityIssue:
    return PortabilityIssue(category="config", impact=impact, description=description, blocker=blocker)


class TestRender:
    def test_blocking_lists_only_blockers(self):
        issues = [_issue("Soft gap."), _issue("Hard stop.", blocker=True)]
        text, effort = recommendation.render(10, Severity.BLOCKING, issues)
        assert text.startswith("CANNOT PORT (Score: 10/100)")
        assert "- Hard stop." in text
        assert "Soft gap." not in text
        assert "from scratch" in text
        assert "Porting + fixing: 60-100 hours" in text
        assert "Rebuilding fresh: 40-80 hours" in text
        assert effort == "Cannot automate - Complete rewrite required (40-80 hours)"

    def test_warning_lists_all_issues(self):
        issues = [_issue("First."), _issue("Second.")]
        text, effort = recommendation.render(45, Severity.WARNING, issues)
        assert text.startswith("HIGH EFFORT REQUIRED (Score: 45/100)")
        assert "- First.\n- Second." in text
        assert "Rebuild as Azure-native app" in text
        assert effort == "Porter helps, but 30-50 hours manual work required"

    def test_ok_effort_scales_with_issue_count(self):
        issues = [_issue("One."), _issue("Two."), _issue("Three.")]
        text, effort = recommendation.render(70, Severity.OK, issues)
        assert text.startswith("CAN PORT (Score: 70/100)")
        assert "The porter will handle most changes automatically." in text
        assert "Manual work needed: 6-12 hours estimated." in text
        assert effort == "Porter automates most changes - 6-12 hours manual work"

    def test_ok_without_issues(self):
        _, effort = recommendation.render(100, Severity.OK, [])
        assert effort == "Porter automates most changes - 0-0 hours manual work"

    def test_render_is_pure(self):
        issues = [_issue("Same.")]
        assert recommendation.render(60, Severity.OK, issues) == recommendation.render(
            60, Severity.OK, issues
        )

    def test_desktop(self):
        text, effort = recommendation.render_desktop("tauri")
        assert "This is a tauri desktop application" in text
        assert "Rebuilding fresh: 40-60 hours (100% success rate)" in text
        assert effort.startswith("Cannot be automated")


class TestSeverity:
    def test_thresholds(self):
        assert Severity.from_score(0) is Severity.BLOCKING
        assert Severity.from_score(29) is Severity.BLOCKING
        assert Severity.from_score(30) is Severity.WARNING
        assert Severity.from_score(49) is Severity.WARNING
        assert Severity.from_score(50) is Severity.OK
        assert Severity.from_score(100) is Severity.OK


class TestResultSerialization:
    def test_wire_field_names(self):
        result = PortabilityResult(
            score=45,
            severity=Severity.WARNING,
            issues=(_issue("A."), _issue("B.", impact=5)),
            recommendation="text",
            estimated_effort="effort",
        )
        data = result.to_dict()
        assert list(data) == ["score", "canPort", "severity", "issues", "recommendation", "estimatedEffort"]
        assert data["canPort"] is False
        assert data["severity"] == "WARNING"
        assert [i["description"] for i in data["issues"]] == ["A.", "B."]
        assert data["issues"][1] == {"category": "config", "impact": 5, "description": "B.", "blocker": False}
