"""Tests for color math, layout checks, quality scoring and grading."""

import pytest

from slidelayout.dsl.schema import (
    BulletsSlideSpec,
    ChartSlideSpec,
    ColumnSpec,
    ComparisonTable,
    TableSlideSpec,
    TwoColumnSlideSpec,
)
from slidelayout.engine.layout_engine import calculate_slide_layout
from slidelayout.engine.positioned import ElementPosition, ElementType, LayoutResult
from slidelayout.engine.typography import derive_text_style
from slidelayout.theme.themes import NEUTRAL_THEME
from slidelayout.theme.tokens import ThemeTokens, with_palette
from slidelayout.validation import (
    Severity,
    check_contrast,
    check_hierarchy,
    check_overlaps,
    check_safe_margins,
    check_spacing_consistency,
    grade_outcome,
    letter_grade,
    score,
    score_accessibility,
    score_color_harmony,
    validate_deck_consistency,
)
from slidelayout.validation.colors import (
    adjust_color_for_contrast,
    color_similarity,
    contrast_ratio,
    hex_to_rgb,
    meets_wcag,
    normalize_hex,
    parse_css_color,
)

EIGHT_BULLETS = tuple(f"Agenda item number {i}" for i in range(1, 9))


def _box(x: float, y: float, width: float = 1.0, height: float = 1.0, z_index=None) -> ElementPosition:
    return ElementPosition(x=x, y=y, width=width, height=height, z_index=z_index)


@pytest.fixture
def clean_outcome(theme: ThemeTokens, bullets_spec: BulletsSlideSpec):
    return calculate_slide_layout(bullets_spec, theme)


@pytest.fixture
def overflow_outcome(theme: ThemeTokens):
    return calculate_slide_layout(BulletsSlideSpec(title="Agenda for Today", bullets=EIGHT_BULLETS), theme)


@pytest.fixture
def degraded_outcome(theme: ThemeTokens):
    spec = TableSlideSpec(
        title="Plan Comparison",
        table=ComparisonTable(headers=("Plan", "Price"), rows=(("Basic",),)),
    )
    return calculate_slide_layout(spec, theme)


# ============================================================================
# Colors
# ============================================================================

class TestColors:
    """Tests for color parsing and WCAG math."""

    def test_hex_parsing(self) -> None:
        assert hex_to_rgb("#FFF") == (255, 255, 255)
        assert hex_to_rgb("2563eb") == (37, 99, 235)

    def test_invalid_hex_raises(self) -> None:
        with pytest.raises(ValueError):
            hex_to_rgb("#GGGGGG")

    def test_css_functional_notation(self) -> None:
        assert parse_css_color("rgb(255, 0, 0)") == (255, 0, 0)
        assert parse_css_color("rgba(0, 128, 0, 0.5)") == (0, 128, 0)
        assert parse_css_color("not a color") is None
        assert normalize_hex("rgb(37, 99, 235)") == "#2563EB"

    def test_contrast_extremes(self) -> None:
        assert contrast_ratio("#000000", "#FFFFFF") == pytest.approx(21.0)
        assert contrast_ratio("#FFFFFF", "#FFFFFF") == pytest.approx(1.0)

    def test_contrast_is_symmetric(self) -> None:
        assert contrast_ratio("#2563EB", "#F8FAFC") == pytest.approx(contrast_ratio("#F8FAFC", "#2563EB"))

    def test_meets_wcag(self) -> None:
        assert meets_wcag("#767676", "#FFFFFF")
        assert not meets_wcag("#888888", "#FFFFFF")
        assert meets_wcag("#888888", "#FFFFFF", large_text=True)

    def test_adjust_color_for_contrast_darkens(self) -> None:
        adjusted = adjust_color_for_contrast("#AAAAAA", "#FFFFFF")
        assert contrast_ratio(adjusted, "#FFFFFF") >= 4.5
        assert hex_to_rgb(adjusted)[0] < 0xAA

    def test_adjust_color_keeps_passing_color(self) -> None:
        assert adjust_color_for_contrast("#000000", "#FFFFFF") == "#000000"

    def test_similarity(self) -> None:
        assert color_similarity("#2563EB", "rgb(37, 99, 235)") == 100
        assert color_similarity("#000000", "#FFFFFF") == 0
        assert color_similarity("garbage", "#FFFFFF") == 0
        assert 90 < color_similarity("#2563EB", "#2A68EE") < 100


class TestContrastCheck:
    def test_levels(self) -> None:
        assert check_contrast("#000000", "#FFFFFF").level == "pass"
        assert check_contrast("#888888", "#FFFFFF").level == "partial"
        assert check_contrast("#FFFFFF", "#FFFFFF").level == "fail"

    def test_fail_is_high_severity(self) -> None:
        check = check_contrast("#FFFFFF", "#FFFFFF")
        assert check.penalty == 70
        assert check.severity is Severity.HIGH

    def test_unparseable_color_fails(self) -> None:
        check = check_contrast("not-a-color", "#FFFFFF")
        assert check.level == "fail"
        assert not check.passed


# ============================================================================
# Layout Checks
# ============================================================================

class TestLayoutChecks:
    """Tests for the geometric checks."""

    def test_overlap_detected(self) -> None:
        result = check_overlaps([_box(0, 0), _box(0.5, 0.5)])
        assert not result.passed
        assert result.penalty == 20

    def test_touching_boxes_do_not_overlap(self) -> None:
        assert check_overlaps([_box(0, 0), _box(1.0, 0)]).passed

    def test_different_layers_may_overlap(self) -> None:
        assert check_overlaps([_box(0, 0, z_index=0), _box(0.5, 0.5, z_index=1)]).passed

    def test_unlayered_and_layer_zero_share_a_layer(self) -> None:
        assert not check_overlaps([_box(0, 0), _box(0.5, 0.5, z_index=0)]).passed

    def test_safe_margin(self, theme: ThemeTokens) -> None:
        result = check_safe_margins([_box(0.2, 1.0), _box(1.0, 1.0)], theme)
        (issue,) = result.issues
        assert issue.actual == "left"
        assert result.penalty == 15

    def test_spacing_consistency(self) -> None:
        even = [_box(0, 0, height=0.4), _box(0, 0.5, height=0.4), _box(0, 1.0, height=0.4)]
        assert check_spacing_consistency(even, tolerance=0.05).passed
        uneven = even + [_box(0, 1.9, height=0.4)]
        assert not check_spacing_consistency(uneven, tolerance=0.05).passed

    def test_hierarchy(self, theme: ThemeTokens) -> None:
        title = derive_text_style("title", theme)
        body = derive_text_style("body", theme)
        assert check_hierarchy(title, [body]).passed
        assert not check_hierarchy(body, [body]).passed
        assert check_hierarchy(title, []).passed


# ============================================================================
# Scoring
# ============================================================================

class TestScore:
    """Tests for the weighted quality score."""

    def test_clean_slide_scores_full(self, theme: ThemeTokens, clean_outcome) -> None:
        result = score(clean_outcome, theme)
        assert result.score == 100
        assert result.passed
        assert result.is_accessible
        assert result.issues == ()
        assert result.recommendations == ()
        for dimension in (result.typography, result.accessibility, result.color_harmony, result.layout):
            assert dimension.score == 100

    def test_dark_theme_scores_full(self, dark_theme: ThemeTokens, bullets_spec: BulletsSlideSpec) -> None:
        result = score(calculate_slide_layout(bullets_spec, dark_theme), dark_theme)
        assert result.color_harmony.score == 100
        assert result.score == 100

    def test_white_text_on_white(self, bullets_spec: BulletsSlideSpec) -> None:
        theme = with_palette(NEUTRAL_THEME, text_primary="#FFFFFF")
        result = score(calculate_slide_layout(bullets_spec, theme), theme)
        assert result.contrast_ratio == pytest.approx(1.0)
        assert result.accessibility.score <= 30
        assert not result.is_accessible
        assert not result.passed
        assert any(i.property == "text-contrast" and i.severity is Severity.HIGH for i in result.issues)
        assert any("contrast" in r for r in result.recommendations)

    def test_partial_contrast(self, bullets_spec: BulletsSlideSpec) -> None:
        theme = with_palette(NEUTRAL_THEME, text_primary="#888888")
        result = score(calculate_slide_layout(bullets_spec, theme), theme)
        assert result.accessibility.score == 60
        assert result.score == 88
        assert not result.is_accessible
        assert result.passed

    def test_overflowing_slide(self, theme: ThemeTokens, overflow_outcome) -> None:
        result = score(overflow_outcome, theme)
        assert result.typography.score == 90
        assert result.layout.score == 25
        assert result.score == 82
        assert not result.passed
        properties = {i.property for i in result.layout.issues}
        assert {"canvas-bounds", "element-count", "safe-margin"} <= properties

    def test_score_monotonic_in_content(self, theme: ThemeTokens, clean_outcome, overflow_outcome) -> None:
        assert score(clean_outcome, theme).score >= score(overflow_outcome, theme).score

    def test_degraded_outcome(self, theme: ThemeTokens, degraded_outcome) -> None:
        result = score(degraded_outcome, theme)
        assert result.typography.score == 80
        assert result.layout.score == 70
        assert result.score == 88
        assert not result.passed
        assert any(i.property == "degraded" and i.severity is Severity.HIGH for i in result.issues)

    def test_two_column_missing_side(self, theme: ThemeTokens) -> None:
        spec = TwoColumnSlideSpec(title="Current State", left=ColumnSpec(paragraph="Everything is manual today."))
        result = score(calculate_slide_layout(spec, theme), theme)
        assert result.layout.score == 80
        assert result.score == 96

    def test_chart_without_data(self, theme: ThemeTokens) -> None:
        result = score(calculate_slide_layout(ChartSlideSpec(title="Revenue by Region"), theme), theme)
        assert result.layout.score == 75
        assert result.typography.score == 80
        assert result.score == 89

    def test_title_slide_needs_no_content(self, theme: ThemeTokens, title_spec) -> None:
        assert score(calculate_slide_layout(title_spec, theme), theme).typography.score == 100

    def test_deck_variety(self, theme: ThemeTokens, clean_outcome) -> None:
        deck = ["title", "title-bullets", "chart", "two-column", "metrics", "grid-of-cells", "image-left"]
        result = score(clean_outcome, theme, deck_archetypes=deck)
        assert result.layout.score == 90
        assert result.score == 98

    def test_bare_layout_result(self, theme: ThemeTokens, clean_outcome) -> None:
        result = score(clean_outcome.layout, theme, archetype="title-bullets")
        assert result.score == 100

    def test_small_text_penalized(self, theme: ThemeTokens) -> None:
        small = derive_text_style("caption", theme)
        layout = LayoutResult(
            title=ElementPosition(x=0.5, y=0.6, width=9.0, height=0.8, text="Slide title", style=derive_text_style("title", theme)),
            content=(ElementPosition(x=0.5, y=1.8, width=9.0, height=0.4, text="Footnote", style=small),),
        )
        dimension, ratio = score_accessibility(layout, theme)
        assert dimension.score == 75
        assert dimension.issues[0].property == "font-size"

    def test_color_harmony_penalties(self) -> None:
        flat = with_palette(NEUTRAL_THEME, secondary="#2563EB")
        assert score_color_harmony(flat).score == 75
        loud = with_palette(NEUTRAL_THEME, primary="#FDE047")
        assert score_color_harmony(loud).score == 80

    def test_failing_check_scores_dimension_zero(self, clean_outcome) -> None:
        unparseable = with_palette(NEUTRAL_THEME, background="not-a-color")
        result = score(clean_outcome, unparseable)
        assert result.typography.score == 100
        assert result.layout.score == 100
        assert result.accessibility.score == 0
        assert result.color_harmony.score == 0
        assert result.score == 50
        assert not result.passed
        assert not result.is_accessible
        (issue,) = result.color_harmony.issues
        assert issue.severity is Severity.HIGH
        assert issue.property == "validation-error"
        assert "not-a-color" in issue.message

    def test_to_dict(self, theme: ThemeTokens, clean_outcome) -> None:
        data = score(clean_outcome, theme).to_dict()
        assert data["score"] == 100
        assert data["isAccessible"] is True


# ============================================================================
# Grading
# ============================================================================

class TestGrading:
    """Tests for build grades and deck consistency."""

    @pytest.mark.parametrize("value,grade", [(95, "A"), (90, "A"), (85, "B"), (75, "C"), (65, "D"), (10, "F")])
    def test_letter_grade(self, value: int, grade: str) -> None:
        assert letter_grade(value) == grade

    def test_clean_outcome(self, theme: ThemeTokens, clean_outcome) -> None:
        grade = grade_outcome(clean_outcome, theme)
        assert grade.score == 100
        assert grade.grade == "A"
        assert grade.is_valid

    def test_degraded_outcome_is_invalid(self, theme: ThemeTokens, degraded_outcome) -> None:
        grade = grade_outcome(degraded_outcome, theme)
        assert grade.score == 75
        assert not grade.is_valid
        assert "Fix the slide content so the chosen layout can be built" in grade.suggestions

    def test_overflow_outcome(self, theme: ThemeTokens, overflow_outcome) -> None:
        grade = grade_outcome(overflow_outcome, theme)
        assert grade.score == 90
        assert "Ensure all elements maintain safe margins from slide edges" in grade.suggestions
        assert "Consider reducing content density for better visual impact" in grade.suggestions

    def test_deck_consistency(self) -> None:
        assert validate_deck_consistency(["title", "chart", "title", "chart"]) == ()
        (issue,) = validate_deck_consistency(
            ["title", "title-bullets", "chart", "two-column", "metrics", "grid-of-cells", "image-left"]
        )
        assert issue.property == "deck-consistency"
        assert issue.severity is Severity.LOW
