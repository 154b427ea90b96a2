"""Live verification of a rendered preview against its intended theme.

A preview renderer exposes the colors it actually resolved through a
``ComputedStyleSource`` (role → color string). Each role is compared with
the theme color it should show; similarity is the Euclidean RGB distance
mapped onto 0-100.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Protocol, Tuple, runtime_checkable

from ..theme.tokens import ThemeTokens
from .colors import color_similarity, normalize_hex
from .models import Issue, Severity

logger = logging.getLogger(__name__)

PASS_SCORE = 85


@runtime_checkable
class ComputedStyleSource(Protocol):
    """Read-only query for the colors a renderer actually applied."""

    def computed_color(self, role: str) -> Optional[str]:
        """Resolved color for a role ("background", "title", "text", "accent"), or None."""
        ...


class MappingStyleSource:
    """ComputedStyleSource backed by a plain role → color mapping."""

    def __init__(self, colors: Mapping[str, Optional[str]]):
        self._colors = dict(colors)

    def computed_color(self, role: str) -> Optional[str]:
        return self._colors.get(role)


@dataclass(frozen=True)
class RoleCheck:
    """Rule for one sampled role."""

    role: str
    threshold: int
    severity: Severity
    weight: float
    required: bool


# Sampled roles in scoring order: background, title, text, accent
ROLE_CHECKS: Tuple[RoleCheck, ...] = (
    RoleCheck("background", 90, Severity.HIGH, 0.3, True),
    RoleCheck("title", 90, Severity.HIGH, 0.3, True),
    RoleCheck("text", 80, Severity.MEDIUM, 0.25, True),
    RoleCheck("accent", 80, Severity.LOW, 0.15, False),
)


def expected_colors(theme: ThemeTokens) -> Dict[str, str]:
    """Theme color each sampled role should resolve to."""
    palette = theme.palette
    return {
        "background": palette.background,
        "title": palette.primary,
        "text": palette.text.primary,
        "accent": palette.accent,
    }


@dataclass(frozen=True)
class ColorVerification:
    """Comparison of one role's computed color with the theme."""

    role: str
    expected: str
    actual: Optional[str]
    similarity: int
    match: bool


@dataclass(frozen=True)
class ConsistencyReport:
    """Result of verifying a rendered preview against a theme."""

    score: int
    passed: bool
    issues: Tuple[Issue, ...]
    details: Dict[str, ColorVerification]

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "passed": self.passed,
            "issues": [issue.to_dict() for issue in self.issues],
            "details": {
                role: {
                    "expected": v.expected,
                    "actual": v.actual,
                    "similarity": v.similarity,
                    "match": v.match,
                }
                for role, v in self.details.items()
            },
        }


def verify_theme_consistency(source: ComputedStyleSource, theme: ThemeTokens) -> ConsistencyReport:
    """Compare a preview's computed colors with the theme.

    Args:
        source: Computed-style query for the rendered preview.
        theme: The theme the preview is supposed to show.

    Returns:
        ConsistencyReport with a weighted similarity score (background 0.3,
        title 0.3, text 0.25, accent 0.15). A missing background, title or
        text color counts as 0% similar; a missing accent is not an error
        because slides may legitimately have no accent elements.
    """
    expected = expected_colors(theme)
    issues: List[Issue] = []
    details: Dict[str, ColorVerification] = {}
    total = 0.0

    for check in ROLE_CHECKS:
        want = normalize_hex(expected[check.role]) or expected[check.role]
        actual = source.computed_color(check.role)
        actual_hex = normalize_hex(actual) if actual else None

        if actual_hex is None:
            if check.required:
                similarity, match = 0, False
                issues.append(Issue(
                    severity=Severity.MEDIUM,
                    category="theme-consistency",
                    property=f"{check.role}-color",
                    expected=want,
                    actual=actual or "not found",
                    message=f"No computed {check.role} color found in preview",
                ))
            else:
                similarity, match = 100, True
        else:
            similarity = color_similarity(actual_hex, want)
            match = similarity >= check.threshold
            if not match:
                issues.append(Issue(
                    severity=check.severity,
                    category="theme-consistency",
                    property=f"{check.role}-color",
                    expected=want,
                    actual=actual_hex,
                    message=f"{check.role.capitalize()} color does not match theme ({similarity}% similar)",
                ))

        details[check.role] = ColorVerification(
            role=check.role,
            expected=want,
            actual=actual_hex or actual,
            similarity=similarity,
            match=match,
        )
        total += similarity * check.weight

    score = int(total + 0.5)
    passed = score >= PASS_SCORE and not any(i.severity is Severity.HIGH for i in issues)
    logger.debug(f"Theme '{theme.id}' live verification: score={score}, issues={len(issues)}")
    return ConsistencyReport(score=score, passed=passed, issues=tuple(issues), details=details)
