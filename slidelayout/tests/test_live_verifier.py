"""Tests for live preview verification against a theme."""

import pytest

from slidelayout.theme.tokens import ThemeTokens
from slidelayout.validation import (
    ComputedStyleSource,
    MappingStyleSource,
    Severity,
    score,
    verify_theme_consistency,
)


class DetachedPreview:
    """Preview whose computed styles can no longer be read."""

    def computed_color(self, role: str):
        raise RuntimeError("preview detached")


@pytest.fixture
def matching_source() -> MappingStyleSource:
    """Computed colors exactly as the neutral theme specifies them."""
    return MappingStyleSource({
        "background": "rgb(255, 255, 255)",
        "title": "#2563eb",
        "text": "#0F172A",
    })


class TestVerifyThemeConsistency:
    """Tests for verify_theme_consistency()."""

    def test_source_satisfies_protocol(self, matching_source: MappingStyleSource) -> None:
        assert isinstance(matching_source, ComputedStyleSource)

    def test_matching_preview(self, theme: ThemeTokens, matching_source: MappingStyleSource) -> None:
        report = verify_theme_consistency(matching_source, theme)
        assert report.score == 100
        assert report.passed
        assert report.issues == ()
        assert report.details["background"].actual == "#FFFFFF"

    def test_missing_accent_is_not_an_error(self, theme: ThemeTokens, matching_source: MappingStyleSource) -> None:
        accent = verify_theme_consistency(matching_source, theme).details["accent"]
        assert accent.similarity == 100
        assert accent.match

    def test_missing_title_color(self, theme: ThemeTokens) -> None:
        source = MappingStyleSource({"background": "#FFFFFF", "text": "#0F172A"})
        report = verify_theme_consistency(source, theme)
        assert report.score == 70
        assert not report.passed
        (issue,) = report.issues
        assert issue.severity is Severity.MEDIUM
        assert issue.message == "No computed title color found in preview"

    def test_wrong_background(self, theme: ThemeTokens) -> None:
        source = MappingStyleSource({"background": "#000000", "title": "#2563EB", "text": "#0F172A"})
        report = verify_theme_consistency(source, theme)
        assert report.details["background"].similarity == 0
        assert report.score == 70
        assert not report.passed
        assert report.issues[0].severity is Severity.HIGH

    def test_slight_drift_still_matches(self, theme: ThemeTokens) -> None:
        source = MappingStyleSource({"background": "#FAFAFA", "title": "#2563EB", "text": "#0F172A"})
        report = verify_theme_consistency(source, theme)
        assert report.details["background"].match
        assert report.passed

    def test_wrong_accent_is_low_severity(self, theme: ThemeTokens) -> None:
        source = MappingStyleSource({
            "background": "#FFFFFF",
            "title": "#2563EB",
            "text": "#0F172A",
            "accent": "#FF0000",
        })
        report = verify_theme_consistency(source, theme)
        (issue,) = report.issues
        assert issue.severity is Severity.LOW
        assert report.score == 87
        assert report.passed

    def test_to_dict(self, theme: ThemeTokens, matching_source: MappingStyleSource) -> None:
        data = verify_theme_consistency(matching_source, theme).to_dict()
        assert data["details"]["title"]["expected"] == "#2563EB"
        assert data["passed"] is True


class TestLiveScore:
    """score() on a rendered preview."""

    def test_matching_preview_scores_full(self, theme: ThemeTokens, matching_source: MappingStyleSource) -> None:
        result = score(matching_source, theme)
        assert result.score == 100
        assert result.passed
        assert result.details["consistency"]["score"] == 100

    def test_dark_background_on_light_theme(self, theme: ThemeTokens) -> None:
        source = MappingStyleSource({"background": "#000000", "title": "#2563EB", "text": "#0F172A"})
        result = score(source, theme)
        assert result.color_harmony.score == 70
        assert result.accessibility.score == 30
        assert result.score == 73
        assert not result.passed
        assert not result.is_accessible

    def test_failing_preview_query_is_scored_not_raised(self, theme: ThemeTokens) -> None:
        result = score(DetachedPreview(), theme)
        assert result.color_harmony.score == 0
        assert result.accessibility.score == 0
        assert result.score == 50
        assert result.contrast_ratio == 1.0
        assert not result.passed
        assert not result.is_accessible
        assert result.details == {}
        failures = {(i.category, i.property, i.severity) for i in result.issues}
        assert ("theme-consistency", "validation-error", Severity.HIGH) in failures
        assert ("accessibility", "validation-error", Severity.HIGH) in failures
