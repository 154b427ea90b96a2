"""
grading.py — Letter grades for layout outcomes and deck-level consistency.

grade_outcome() folds the layout checks and the outcome's own metadata
(warnings, errors) into a single score: critical issues cost 25 points,
major 10, minor 5.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

from ..engine.positioned import LayoutOutcome
from ..theme.tokens import ThemeTokens
from .layout_checks import check_overlaps, check_safe_margins, check_spacing_consistency
from .models import Issue, Severity

MAX_DISTINCT_ARCHETYPES = 6

SEVERITY_PENALTIES = {
    "critical": 25,
    "major": 10,
    "minor": 5,
}

# Lowest score for each grade, best first
GRADE_THRESHOLDS = (
    ("A", 90),
    ("B", 80),
    ("C", 70),
    ("D", 60),
)


@dataclass(frozen=True)
class GradedIssue:
    """Issue found while grading a build outcome."""
    severity: str   # critical | major | minor
    category: str   # layout | content
    message: str
    fix: str = ""


@dataclass(frozen=True)
class BuildGrade:
    """Grade for a single slide's layout outcome."""
    score: int
    grade: str
    is_valid: bool
    issues: Tuple[GradedIssue, ...]
    suggestions: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "grade": self.grade,
            "isValid": self.is_valid,
            "issues": [
                {"severity": i.severity, "category": i.category, "message": i.message, "fix": i.fix}
                for i in self.issues
            ],
            "suggestions": list(self.suggestions),
        }


def letter_grade(score: int) -> str:
    for grade, threshold in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def grade_outcome(outcome: LayoutOutcome, theme: ThemeTokens) -> BuildGrade:
    """
    Grade a layout outcome.

    Layout check findings are minor, metadata warnings are minor content
    issues and metadata errors (including a degraded build) are critical.
    """
    layout = outcome.layout
    boxes = layout.boxes
    issues: List[GradedIssue] = []

    checks = (
        check_safe_margins(boxes, theme),
        check_overlaps(boxes),
        check_spacing_consistency(layout.content, theme=theme),
    )
    for check in checks:
        for issue in check.issues:
            issues.append(GradedIssue("minor", "layout", issue.message, "Adjust layout spacing or positioning"))

    for warning in outcome.metadata.warnings:
        issues.append(GradedIssue("minor", "content", warning))
    for error in outcome.metadata.errors:
        issues.append(GradedIssue("critical", "layout", error))

    score = 100 - sum(SEVERITY_PENALTIES[i.severity] for i in issues)
    score = max(0, score)
    has_critical = any(i.severity == "critical" for i in issues)
    return BuildGrade(
        score=score,
        grade=letter_grade(score),
        is_valid=score >= 70 and not has_critical,
        issues=tuple(issues),
        suggestions=tuple(_suggestions(issues, outcome)),
    )


def _suggestions(issues: List[GradedIssue], outcome: LayoutOutcome) -> List[str]:
    messages = " ".join(i.message.lower() for i in issues)
    suggestions = []
    if "overlap" in messages:
        suggestions.append("Increase spacing between elements to prevent overlapping")
    if "safe margin" in messages:
        suggestions.append("Ensure all elements maintain safe margins from slide edges")
    if "spacing" in messages:
        suggestions.append("Use the same gap between stacked elements")
    if outcome.layout.is_overflowing or len(outcome.layout.content) > 5:
        suggestions.append("Consider reducing content density for better visual impact")
    if outcome.is_degraded:
        suggestions.append("Fix the slide content so the chosen layout can be built")
    return suggestions


def validate_deck_consistency(archetypes: Iterable[str]) -> Tuple[Issue, ...]:
    """
    Check layout variety across a deck.

    More than six distinct archetypes makes a deck feel inconsistent.
    """
    distinct = sorted({str(getattr(a, "value", a)) for a in archetypes})
    if len(distinct) <= MAX_DISTINCT_ARCHETYPES:
        return ()
    return (Issue(
        severity=Severity.LOW,
        category="layout",
        property="deck-consistency",
        expected=f"<= {MAX_DISTINCT_ARCHETYPES} distinct layouts",
        actual=str(len(distinct)),
        message=f"Deck uses {len(distinct)} different layouts; consider fewer for consistency",
    ),)
