"""
layout_checks.py — Geometric checks over positioned elements.

Each check returns a CheckResult carrying its fixed penalty when it fails.
Penalties are charged once per check, not per offending element.
"""

from typing import List, Optional, Sequence

from ..engine.positioned import ElementPosition
from ..engine.typography import TextStyle
from ..engine.units import EPSILON
from ..theme.tokens import ThemeTokens
from .models import CheckResult, Issue, Severity

BOUNDS_PENALTY = 40
SAFE_MARGIN_PENALTY = 15
OVERLAP_PENALTY = 20
SPACING_PENALTY = 10
HIERARCHY_PENALTY = 10


def _label(index: int, box: ElementPosition) -> str:
    return f"Element {index + 1} ({box.element_type.value})"


def check_bounds(boxes: Sequence[ElementPosition], theme: ThemeTokens) -> CheckResult:
    """Every box must lie on the canvas."""
    canvas = theme.layout
    issues = [
        Issue(
            severity=Severity.HIGH,
            category="layout",
            property="canvas-bounds",
            expected=f"inside {canvas.slide_width}x{canvas.slide_height}in",
            actual=f"x={box.x:.2f}, y={box.y:.2f}, bottom={box.bottom_edge:.2f}",
            message=f"{_label(i, box)} extends beyond the slide",
        )
        for i, box in enumerate(boxes)
        if not box.is_within(0.0, 0.0, canvas.slide_width, canvas.slide_height)
    ]
    return CheckResult(penalty=BOUNDS_PENALTY if issues else 0, issues=tuple(issues))


def check_safe_margins(boxes: Sequence[ElementPosition], theme: ThemeTokens) -> CheckResult:
    """Every box must stay inside the canvas inset by the theme's safe margin."""
    canvas = theme.layout
    margin = canvas.safe_margin
    right = canvas.slide_width - margin
    bottom = canvas.slide_height - margin

    issues: List[Issue] = []
    for i, box in enumerate(boxes):
        sides = []
        if box.x < margin - EPSILON:
            sides.append("left")
        if box.y < margin - EPSILON:
            sides.append("top")
        if box.right_edge > right + EPSILON:
            sides.append("right")
        if box.bottom_edge > bottom + EPSILON:
            sides.append("bottom")
        if sides:
            issues.append(Issue(
                severity=Severity.MEDIUM,
                category="layout",
                property="safe-margin",
                expected=f"{margin}in from every edge",
                actual=", ".join(sides),
                message=f"{_label(i, box)} violates the {'/'.join(sides)} safe margin",
            ))
    return CheckResult(penalty=SAFE_MARGIN_PENALTY if issues else 0, issues=tuple(issues))


def check_overlaps(boxes: Sequence[ElementPosition]) -> CheckResult:
    """
    No two boxes may share area unless they sit on different z_index layers.

    Boxes that only touch along an edge do not overlap.
    """
    issues: List[Issue] = []
    for i in range(len(boxes)):
        for j in range(i + 1, len(boxes)):
            a, b = boxes[i], boxes[j]
            if a.layer != b.layer:
                continue
            shared = a.intersection_area(b)
            if shared > 0.0:
                issues.append(Issue(
                    severity=Severity.MEDIUM,
                    category="layout",
                    property="overlap",
                    expected="no shared area",
                    actual=f"{shared:.3f} sq in",
                    message=f"{_label(i, a)} and {_label(j, b)} overlap",
                ))
    return CheckResult(penalty=OVERLAP_PENALTY if issues else 0, issues=tuple(issues))


def check_spacing_consistency(
    boxes: Sequence[ElementPosition],
    tolerance: Optional[float] = None,
    theme: Optional[ThemeTokens] = None,
) -> CheckResult:
    """
    Vertical gaps between consecutive stacked boxes should be uniform.

    A gap deviating from the mean gap by more than tolerance (default: the
    theme's xs spacing) fails the check.
    """
    if tolerance is None:
        tolerance = theme.spacing.xs if theme is not None else 0.056

    gaps = [
        nxt.y - cur.bottom_edge
        for cur, nxt in zip(boxes, boxes[1:])
        if nxt.y > cur.bottom_edge + EPSILON
    ]
    if len(gaps) < 2:
        return CheckResult()

    mean = sum(gaps) / len(gaps)
    worst = max(gaps, key=lambda gap: abs(gap - mean))
    if abs(worst - mean) <= tolerance + EPSILON:
        return CheckResult()
    issue = Issue(
        severity=Severity.LOW,
        category="layout",
        property="spacing",
        expected=f"gaps within {tolerance:.3f}in of {mean:.3f}in",
        actual=f"{worst:.3f}in",
        message="Inconsistent vertical spacing between elements",
    )
    return CheckResult(penalty=SPACING_PENALTY, issues=(issue,))


def check_hierarchy(
    title_style: Optional[TextStyle],
    body_styles: Sequence[TextStyle],
) -> CheckResult:
    """The title must be set larger than any body text."""
    if title_style is None or not body_styles:
        return CheckResult()
    largest_body = max(style.font_size for style in body_styles)
    if title_style.font_size > largest_body:
        return CheckResult()
    issue = Issue(
        severity=Severity.LOW,
        category="typography",
        property="hierarchy",
        expected=f"title larger than {largest_body}pt",
        actual=f"{title_style.font_size}pt",
        message="Title is not visually dominant over body text",
    )
    return CheckResult(penalty=HIERARCHY_PENALTY, issues=(issue,))
