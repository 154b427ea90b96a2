"""Quality scoring for computed slide layouts.

``score()`` runs independent checks over four dimensions and combines them
into one weighted 0-100 score:

    typography     0.3
    accessibility  0.3
    color harmony  0.2
    layout         0.2

Each dimension starts at 100 and loses a fixed penalty per failed check.
Scoring never raises: a check that blows up scores its dimension 0 and
reports a high-severity ``validation-error`` issue.
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar, Union

from ..engine.positioned import (
    ElementType,
    LayoutDegraded,
    LayoutResult,
    LayoutSuccess,
)
from ..engine.typography import TextStyle, validate_typography_accessibility
from ..engine.units import CONTENT_LIMITS, MAX_ELEMENTS_BEFORE_SIMPLIFY
from ..theme.tokens import ThemeTokens
from .colors import contrast_ratio, relative_luminance
from .contrast import AA_LARGE, AA_NORMAL, check_contrast
from .grading import validate_deck_consistency
from .layout_checks import (
    check_bounds,
    check_hierarchy,
    check_overlaps,
    check_safe_margins,
    check_spacing_consistency,
)
from .live_verifier import ComputedStyleSource, verify_theme_consistency
from .models import DimensionScore, Issue, Severity, ValidationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

WEIGHTS = {
    "typography": 0.3,
    "accessibility": 0.3,
    "color": 0.2,
    "layout": 0.2,
}

PASS_SCORE = 70
MIN_FONT_SIZE = 12
MIN_TITLE_LENGTH = 10
MAX_SCORED_BULLETS = 7
MIN_DISTINGUISHABLE_CONTRAST = 1.5

BODY_TYPES = (ElementType.PARAGRAPH, ElementType.BULLET)

RECOMMENDATIONS = {
    "typography": "Refine title and body text: keep titles concise and body text readable",
    "accessibility": "Improve color contrast so text meets WCAG AA (4.5:1) and keep text at 12pt or larger",
    "color": "Fine-tune the color palette for balance and a professional appearance",
    "layout": "Reduce content or adjust spacing so every element fits inside the safe area without overlapping",
    "theme-consistency": "Make the preview use the theme's colors for background, title and text",
}

LayoutTarget = Union[LayoutSuccess, LayoutDegraded, LayoutResult, ComputedStyleSource]


# ============================================================================
# Helpers
# ============================================================================


def _issue(severity: Severity, category: str, prop: str, message: str, **extra) -> Issue:
    return Issue(severity=severity, category=category, property=prop, message=message, **extra)


def _dimension(penalty_issues: Iterable[Tuple[int, Iterable[Issue]]]) -> DimensionScore:
    score = 100
    issues: List[Issue] = []
    for penalty, found in penalty_issues:
        score -= penalty
        issues.extend(found)
    return DimensionScore(score=max(0, score), issues=tuple(issues))


def _guarded(category: str, check: Callable[[], T], fallback: Callable[[DimensionScore], T]) -> T:
    """Run a dimension check; on failure score it 0 with a validation-error issue."""
    try:
        return check()
    except Exception as e:
        logger.warning(f"{category} check failed: {e}")
        failed = DimensionScore(
            score=0,
            issues=(_issue(Severity.HIGH, category, "validation-error", f"{category} check failed: {e}"),),
        )
        return fallback(failed)


def _round(value: float) -> int:
    return int(max(0.0, value) + 0.5)


def _body_styles(layout: LayoutResult) -> List[TextStyle]:
    return [
        box.style
        for box in layout.content
        if box.element_type in BODY_TYPES and box.style is not None
    ]


# ============================================================================
# Dimensions
# ============================================================================


def score_typography(layout: LayoutResult, archetype: Optional[str]) -> DimensionScore:
    """Title length, content presence, bullet count, hierarchy and text-style readability."""
    found: List[Tuple[int, Tuple[Issue, ...]]] = []
    title = layout.title.text or ""

    if len(title) < MIN_TITLE_LENGTH:
        found.append((15, (_issue(
            Severity.LOW, "typography", "title-length", "Title is too short for optimal impact",
            expected=f">= {MIN_TITLE_LENGTH} characters", actual=str(len(title)),
        ),)))
    max_title = CONTENT_LIMITS["max_title_length"]
    if len(title) > max_title:
        found.append((10, (_issue(
            Severity.LOW, "typography", "title-length", "Title may be too long for slide display",
            expected=f"<= {max_title} characters", actual=str(len(title)),
        ),)))

    if not layout.content and archetype != "title":
        found.append((20, (_issue(
            Severity.MEDIUM, "typography", "content", "Slide lacks sufficient content for engagement",
        ),)))

    bullets = sum(1 for box in layout.content if box.element_type is ElementType.BULLET)
    if bullets > MAX_SCORED_BULLETS:
        found.append((10, (_issue(
            Severity.LOW, "typography", "bullet-count", "Too many bullet points may overwhelm audience",
            expected=f"<= {MAX_SCORED_BULLETS}", actual=str(bullets),
        ),)))

    body_styles = _body_styles(layout)
    hierarchy = check_hierarchy(layout.title.style, body_styles)
    found.append((hierarchy.penalty, hierarchy.issues))

    if body_styles:
        reports = [validate_typography_accessibility(style) for style in body_styles]
        worst = min(reports, key=lambda report: report.score)
        if worst.score < 100:
            found.append((100 - worst.score, tuple(
                _issue(Severity.MEDIUM, "typography", "text-style", message) for message in worst.issues
            )))
    return _dimension(found)


def score_accessibility(layout: LayoutResult, theme: ThemeTokens) -> Tuple[DimensionScore, float]:
    """Text contrast against the background and minimum font size."""
    palette = theme.palette
    found: List[Tuple[int, Tuple[Issue, ...]]] = []

    contrast = check_contrast(palette.text.primary, palette.background)
    if not contrast.passed:
        found.append((contrast.penalty, (_issue(
            contrast.severity, "accessibility", "text-contrast",
            f"Text contrast ratio {contrast.ratio:.2f}:1 is below WCAG AA standards",
            expected=f">= {AA_NORMAL}:1", actual=f"{contrast.ratio:.2f}:1",
        ),)))

    secondary = contrast_ratio(palette.text.secondary, palette.background)
    if secondary < AA_LARGE:
        found.append((15, (_issue(
            Severity.MEDIUM, "accessibility", "secondary-text-contrast",
            f"Secondary text contrast ratio {secondary:.2f}:1 is too low",
            expected=f">= {AA_LARGE}:1", actual=f"{secondary:.2f}:1",
        ),)))

    sizes = [box.style.font_size for box in layout.boxes if box.style is not None and box.text]
    if sizes and min(sizes) < MIN_FONT_SIZE:
        found.append((25, (_issue(
            Severity.MEDIUM, "accessibility", "font-size",
            f"Smallest text is {min(sizes)}pt, below the {MIN_FONT_SIZE}pt minimum",
            expected=f">= {MIN_FONT_SIZE}pt", actual=f"{min(sizes)}pt",
        ),)))
    return _dimension(found), contrast.ratio


def score_color_harmony(theme: ThemeTokens) -> DimensionScore:
    """Palette balance, professional appearance and primary/secondary distinguishability."""
    palette = theme.palette
    found: List[Tuple[int, Tuple[Issue, ...]]] = []
    primary = relative_luminance(palette.primary)
    secondary = relative_luminance(palette.secondary)
    background = relative_luminance(palette.background)

    difference = abs(primary - secondary)
    if not 0.1 < difference < 0.8:
        found.append((15, (_issue(
            Severity.LOW, "color", "balance", "Color palette lacks proper balance",
            expected="luminance difference between 0.1 and 0.8", actual=f"{difference:.2f}",
        ),)))

    if theme.is_dark:
        professional = background < 0.2 and primary > 0.5
    else:
        professional = primary < 0.7 and background > 0.8
    if not professional:
        found.append((20, (_issue(
            Severity.LOW, "color", "professional-appearance", "Color scheme may appear unprofessional",
        ),)))

    distinguishable = contrast_ratio(palette.primary, palette.secondary)
    if distinguishable < MIN_DISTINGUISHABLE_CONTRAST:
        found.append((10, (_issue(
            Severity.LOW, "color", "color-blind-safety",
            "Primary and secondary colors may be hard to tell apart for color-blind users",
            expected=f">= {MIN_DISTINGUISHABLE_CONTRAST}:1", actual=f"{distinguishable:.2f}:1",
        ),)))
    return _dimension(found)


def score_layout(
    layout: LayoutResult,
    theme: ThemeTokens,
    archetype: Optional[str],
    degraded: bool = False,
    deck_archetypes: Optional[Iterable[str]] = None,
    max_elements: int = MAX_ELEMENTS_BEFORE_SIMPLIFY,
) -> DimensionScore:
    """Overflow, density, overlaps, margins, spacing and archetype-specific completeness."""
    boxes = layout.boxes
    found: List[Tuple[int, Tuple[Issue, ...]]] = []

    bounds = check_bounds(boxes, theme)
    if layout.is_overflowing or not bounds.passed:
        overflow = bounds.issues or (_issue(
            Severity.HIGH, "layout", "overflow", "Content exceeds slide boundaries",
            expected="fits the content area", actual=f"{layout.total_height:.2f}in tall",
        ),)
        found.append((40, overflow))

    if len(layout.content) > max_elements:
        found.append((20, (_issue(
            Severity.LOW, "layout", "element-count", "Too many elements may reduce readability",
            expected=f"<= {max_elements}", actual=str(len(layout.content)),
        ),)))

    for check in (
        check_overlaps(boxes),
        check_safe_margins(boxes, theme),
        check_spacing_consistency(layout.content, theme=theme),
    ):
        found.append((check.penalty, check.issues))

    if archetype == "two-column":
        sides = {box.payload for box in layout.content if box.payload in ("left", "right")}
        if len(sides) < 2:
            found.append((20, (_issue(
                Severity.MEDIUM, "layout", "two-column", "Two-column slide is missing a column",
            ),)))

    if archetype == "chart" and not any(box.element_type is ElementType.CHART for box in layout.content):
        found.append((25, (_issue(
            Severity.MEDIUM, "layout", "chart", "Chart slide has no chart data",
        ),)))

    if deck_archetypes is not None:
        deck_issues = validate_deck_consistency(deck_archetypes)
        if deck_issues:
            found.append((10, deck_issues))

    if degraded:
        found.append((30, (_issue(
            Severity.HIGH, "layout", "degraded", "Layout could not be built; only the title is shown",
        ),)))
    return _dimension(found)


# ============================================================================
# Entry point
# ============================================================================


def _recommendations(issues: Iterable[Issue]) -> Tuple[str, ...]:
    seen: List[str] = []
    for issue in issues:
        if issue.category not in seen:
            seen.append(issue.category)
    return tuple(RECOMMENDATIONS[c] for c in seen if c in RECOMMENDATIONS)


def _combine(
    typography: DimensionScore,
    accessibility: DimensionScore,
    color: DimensionScore,
    layout: DimensionScore,
    ratio: float,
    details: Optional[dict] = None,
) -> ValidationResult:
    overall = 100.0
    overall -= (100 - typography.score) * WEIGHTS["typography"]
    overall -= (100 - accessibility.score) * WEIGHTS["accessibility"]
    overall -= (100 - color.score) * WEIGHTS["color"]
    overall -= (100 - layout.score) * WEIGHTS["layout"]
    final = _round(overall)

    issues = typography.issues + accessibility.issues + color.issues + layout.issues
    high = any(issue.severity is Severity.HIGH for issue in issues)
    accessible = ratio >= AA_NORMAL and not any(
        issue.severity is Severity.HIGH for issue in accessibility.issues
    )
    return ValidationResult(
        score=final,
        issues=issues,
        recommendations=_recommendations(issues),
        accessibility=accessibility,
        typography=typography,
        color_harmony=color,
        layout=layout,
        contrast_ratio=ratio,
        is_accessible=accessible,
        passed=final >= PASS_SCORE and not high,
        details=details or {},
    )


def _score_live(source: ComputedStyleSource, theme: ThemeTokens) -> ValidationResult:
    """Score a rendered preview from its computed colors."""

    def consistency() -> Tuple[DimensionScore, dict]:
        report = verify_theme_consistency(source, theme)
        return DimensionScore(score=report.score, issues=report.issues), {"consistency": report.to_dict()}

    def accessibility() -> Tuple[DimensionScore, float]:
        text = source.computed_color("text")
        background = source.computed_color("background")
        if not text or not background:
            return DimensionScore(score=100), AA_NORMAL
        check = check_contrast(text, background)
        if check.passed:
            return DimensionScore(score=100), check.ratio
        issue = _issue(
            check.severity, "accessibility", "text-contrast",
            f"Rendered text contrast ratio {check.ratio:.2f}:1 is below WCAG AA standards",
            expected=f">= {AA_NORMAL}:1", actual=f"{check.ratio:.2f}:1",
        )
        return DimensionScore(score=100 - check.penalty, issues=(issue,)), check.ratio

    color, details = _guarded("theme-consistency", consistency, lambda failed: (failed, {}))
    access, ratio = _guarded("accessibility", accessibility, lambda failed: (failed, 1.0))
    return _combine(
        DimensionScore(score=100), access, color, DimensionScore(score=100), ratio,
        details=details,
    )


def score(
    target: LayoutTarget,
    theme: ThemeTokens,
    deck_archetypes: Optional[Iterable[str]] = None,
    archetype: Optional[str] = None,
    max_elements: int = MAX_ELEMENTS_BEFORE_SIMPLIFY,
) -> ValidationResult:
    """Score a computed layout or a live preview.

    Args:
        target: A layout outcome, a bare LayoutResult, or a
            ComputedStyleSource from a rendered preview.
        theme: Theme the slide was laid out with.
        deck_archetypes: Archetypes of every slide in the deck, for the
            layout-variety check.
        archetype: Archetype of a bare LayoutResult (outcomes carry their own).
        max_elements: Element count above which density is penalized.

    Returns:
        ValidationResult with the weighted score, per-dimension scores,
        issues and one recommendation per issue category.
    """
    if isinstance(target, ComputedStyleSource) and not isinstance(target, LayoutResult):
        return _score_live(target, theme)

    degraded = False
    if isinstance(target, (LayoutSuccess, LayoutDegraded)):
        layout = target.layout
        archetype = target.archetype
        degraded = target.is_degraded
    else:
        layout = target

    typography = _guarded("typography", lambda: score_typography(layout, archetype), lambda failed: failed)
    accessibility, ratio = _guarded(
        "accessibility", lambda: score_accessibility(layout, theme), lambda failed: (failed, 1.0)
    )
    color = _guarded("color", lambda: score_color_harmony(theme), lambda failed: failed)
    layout_score = _guarded(
        "layout",
        lambda: score_layout(layout, theme, archetype, degraded, deck_archetypes, max_elements),
        lambda failed: failed,
    )
    return _combine(typography, accessibility, color, layout_score, ratio)
