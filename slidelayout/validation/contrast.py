"""
contrast.py — WCAG contrast checks for text/background pairs and themes.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..theme.tokens import ThemeTokens
from .colors import contrast_ratio
from .models import Issue, Severity

logger = logging.getLogger(__name__)

AA_NORMAL = 4.5
AA_LARGE = 3.0

PARTIAL_PENALTY = 40
FAIL_PENALTY = 70


@dataclass(frozen=True)
class ContrastCheck:
    """
    Contrast of one foreground/background pair.

    level is "pass" (≥4.5), "partial" (≥3.0) or "fail" (<3.0).
    """
    foreground: str
    background: str
    ratio: float
    level: str
    penalty: int

    @property
    def passed(self) -> bool:
        return self.level == "pass"

    @property
    def severity(self) -> Severity:
        return Severity.HIGH if self.level == "fail" else Severity.MEDIUM


def check_contrast(foreground: str, background: str) -> ContrastCheck:
    """
    Grade a text/background pair against WCAG AA.

    Unparseable colors are treated as a failed pair.
    """
    try:
        ratio = contrast_ratio(foreground, background)
    except ValueError:
        logger.warning(f"Cannot compute contrast for {foreground!r} on {background!r}")
        return ContrastCheck(foreground, background, 1.0, "fail", FAIL_PENALTY)

    if ratio >= AA_NORMAL:
        return ContrastCheck(foreground, background, ratio, "pass", 0)
    if ratio >= AA_LARGE:
        return ContrastCheck(foreground, background, ratio, "partial", PARTIAL_PENALTY)
    return ContrastCheck(foreground, background, ratio, "fail", FAIL_PENALTY)


@dataclass(frozen=True)
class ThemeAccessibilityReport:
    """Contrast checks for the text colors a theme places on its surfaces."""
    checks: Tuple[Tuple[str, ContrastCheck], ...]
    issues: Tuple[Issue, ...]

    @property
    def is_accessible(self) -> bool:
        return not self.issues


def validate_theme_accessibility(theme: ThemeTokens) -> ThemeAccessibilityReport:
    """
    Check the theme's text colors against its background and surface.

    Primary text must reach 4.5:1 on background and surface; secondary
    text must reach 3.0:1 on the background.
    """
    palette = theme.palette
    pairs = [
        ("text-on-background", palette.text.primary, palette.background, AA_NORMAL),
        ("text-on-surface", palette.text.primary, palette.surface, AA_NORMAL),
        ("secondary-text-on-background", palette.text.secondary, palette.background, AA_LARGE),
    ]

    checks: List[Tuple[str, ContrastCheck]] = []
    issues: List[Issue] = []
    for name, foreground, background, required in pairs:
        check = check_contrast(foreground, background)
        checks.append((name, check))
        if check.ratio < required:
            issues.append(Issue(
                severity=Severity.HIGH if required == AA_NORMAL and check.level == "fail" else Severity.MEDIUM,
                category="accessibility",
                property=name,
                expected=f">= {required}:1",
                actual=f"{check.ratio:.2f}:1",
                message=f"{name.replace('-', ' ').capitalize()} contrast is {check.ratio:.2f}:1",
            ))
    return ThemeAccessibilityReport(checks=tuple(checks), issues=tuple(issues))
