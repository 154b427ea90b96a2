"""Tests for text style derivation, height estimation and units."""

from dataclasses import replace

import pytest

from slidelayout.engine.typography import (
    TextShadow,
    chars_per_line,
    derive_text_style,
    estimate_line_count,
    estimate_text_height,
    fit_font_size,
    optimal_line_height,
    responsive_font_size,
    typography_hierarchy,
    validate_typography_accessibility,
)
from slidelayout.engine.units import (
    EMU_PER_INCH,
    SLIDE_WIDTH_EMU,
    emu_to_inches,
    inches_to_emu,
    pt_to_emu,
)
from slidelayout.theme.tokens import ThemeTokens


# ============================================================================
# Units
# ============================================================================

class TestUnits:
    """Tests for inch/EMU/point conversions."""

    def test_inches_to_emu(self) -> None:
        assert inches_to_emu(1.0) == EMU_PER_INCH
        assert inches_to_emu(0.5) == 457200

    def test_emu_round_trip_value(self) -> None:
        assert emu_to_inches(914400) == pytest.approx(1.0)

    def test_slide_width_emu(self) -> None:
        assert int(SLIDE_WIDTH_EMU) == 9144000

    def test_pt_to_emu(self) -> None:
        assert pt_to_emu(1) == 12700


# ============================================================================
# Responsive sizing
# ============================================================================

class TestResponsiveFontSize:
    """Tests for content-length based font scaling."""

    def test_short_content_keeps_base_size(self) -> None:
        assert responsive_font_size(14, 100) == 14

    def test_body_steps_down(self) -> None:
        assert responsive_font_size(14, 200) == 13   # 13.3
        assert responsive_font_size(20, 400) == 18
        assert responsive_font_size(20, 600) == 17

    def test_title_never_below_ninety_percent(self) -> None:
        assert responsive_font_size(44, 1000, "title") == 40   # 39.6 rounds up

    def test_caption_never_above_ninety_percent(self) -> None:
        assert responsive_font_size(10, 0, "caption") == 9

    def test_non_increasing_in_length(self) -> None:
        sizes = [responsive_font_size(18, n) for n in range(0, 1000, 25)]
        assert sizes == sorted(sizes, reverse=True)


class TestLineHeight:
    def test_large_text_tightened(self, theme: ThemeTokens) -> None:
        assert optimal_line_height(28, "title", theme) == pytest.approx(1.15 * 0.9)

    def test_small_text_loosened(self, theme: ThemeTokens) -> None:
        assert optimal_line_height(12, "body", theme) == pytest.approx(1.4 * 1.1)

    def test_mid_size_uses_base(self, theme: ThemeTokens) -> None:
        assert optimal_line_height(18, "heading", theme) == 1.25


# ============================================================================
# Style derivation
# ============================================================================

class TestDeriveTextStyle:
    """Tests for derive_text_style()."""

    def test_title_is_bold_heading_family(self, theme: ThemeTokens) -> None:
        style = derive_text_style("title", theme)
        assert style.font_size == 28
        assert style.font_weight == 700
        assert style.is_bold
        assert style.font_family == theme.typography.font_families.heading
        assert style.color == theme.palette.text.primary

    def test_body_defaults(self, theme: ThemeTokens) -> None:
        style = derive_text_style("body", theme)
        assert style.font_size == 14
        assert style.font_weight == 400
        assert not style.is_bold

    def test_unknown_role_treated_as_body(self, theme: ThemeTokens) -> None:
        assert derive_text_style("banner", theme) == derive_text_style("body", theme)

    def test_explicit_color_wins(self, theme: ThemeTokens) -> None:
        assert derive_text_style("body", theme, color="#123456").color == "#123456"

    def test_high_emphasis_steps_weight_up(self, theme: ThemeTokens) -> None:
        style = derive_text_style("body", theme, emphasis_level="high")
        assert style.font_weight == 500

    def test_low_emphasis_uses_secondary_color(self, theme: ThemeTokens) -> None:
        style = derive_text_style("body", theme, emphasis_level="low")
        assert style.color == theme.palette.text.secondary

    def test_deterministic(self, theme: ThemeTokens) -> None:
        assert derive_text_style("subtitle", theme, content_length=240) == derive_text_style(
            "subtitle", theme, content_length=240
        )

    def test_primary_family_unquoted(self, theme: ThemeTokens) -> None:
        assert derive_text_style("body", theme).primary_family == "Calibri"

    def test_hierarchy_for_title_slides(self, theme: ThemeTokens) -> None:
        styles = typography_hierarchy("title", theme)
        assert styles["title"].font_size == 44
        assert styles["title"].font_size > styles["body"].font_size


# ============================================================================
# Height estimation
# ============================================================================

class TestHeightEstimation:
    """Tests for the average-glyph-width heuristic."""

    def test_chars_per_line(self) -> None:
        # 9in at 72pt/in over 14pt × 0.6 per glyph
        assert chars_per_line(14, 9.0) == 77

    def test_empty_text_has_no_height(self, theme: ThemeTokens) -> None:
        assert estimate_text_height("", derive_text_style("body", theme), 9.0) == 0.0

    def test_wrapping_adds_lines(self, theme: ThemeTokens) -> None:
        style = derive_text_style("body", theme)
        assert estimate_line_count("x" * 77, style, 9.0) == 1
        assert estimate_line_count("x" * 78, style, 9.0) == 2

    def test_hard_newlines_start_new_lines(self, theme: ThemeTokens) -> None:
        style = derive_text_style("body", theme)
        assert estimate_line_count("one\ntwo\nthree", style, 9.0) == 3

    def test_height_scales_with_lines(self, theme: ThemeTokens) -> None:
        style = derive_text_style("body", theme)
        one = estimate_text_height("a", style, 9.0)
        assert estimate_text_height("a\nb", style, 9.0) == pytest.approx(2 * one)


class TestFitFontSize:
    def test_fitting_text_unchanged(self, theme: ThemeTokens) -> None:
        style = derive_text_style("title", theme)
        assert fit_font_size("Short", style, 9.0, 0.8) == style

    def test_shrinks_until_fit(self, theme: ThemeTokens) -> None:
        style = derive_text_style("title", theme)
        text = "A considerably longer title that will need to wrap across lines"
        fitted = fit_font_size(text, style, 4.0, 0.8)
        assert fitted.font_size < style.font_size
        assert estimate_text_height(text, fitted, 4.0) <= 0.8

    def test_stops_at_minimum(self, theme: ThemeTokens) -> None:
        style = derive_text_style("title", theme)
        fitted = fit_font_size("word " * 200, style, 2.0, 0.3, min_size=20)
        assert fitted.font_size == 20


# ============================================================================
# Accessibility
# ============================================================================

class TestTypographyAccessibility:
    """Tests for validate_typography_accessibility()."""

    def test_theme_body_style_is_clean(self, theme: ThemeTokens) -> None:
        report = validate_typography_accessibility(derive_text_style("body", theme))
        assert report.score == 100
        assert report.is_accessible
        assert report.issues == []

    def test_small_font_penalized(self, theme: ThemeTokens) -> None:
        style = replace(derive_text_style("body", theme), font_size=10)
        report = validate_typography_accessibility(style)
        assert report.score == 75

    def test_tight_line_height_penalized(self, theme: ThemeTokens) -> None:
        style = replace(derive_text_style("body", theme), line_height=1.0)
        assert validate_typography_accessibility(style).score == 85

    def test_light_small_text_penalized(self, theme: ThemeTokens) -> None:
        style = replace(derive_text_style("body", theme), font_size=12, font_weight=300)
        assert validate_typography_accessibility(style).score == 90

    def test_extreme_letter_spacing_penalized(self, theme: ThemeTokens) -> None:
        style = replace(derive_text_style("body", theme), letter_spacing=3.0)
        assert validate_typography_accessibility(style).score == 95

    def test_heavy_shadow_penalized(self, theme: ThemeTokens) -> None:
        style = replace(derive_text_style("body", theme), shadow=TextShadow(opacity=0.6))
        assert validate_typography_accessibility(style).score == 90

    def test_light_shadow_allowed(self, theme: ThemeTokens) -> None:
        style = replace(derive_text_style("body", theme), shadow=TextShadow(opacity=0.25))
        assert validate_typography_accessibility(style).score == 100
