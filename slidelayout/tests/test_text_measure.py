"""Tests for text measurement providers, settings and logging setup."""

import io
import logging

import pytest

from slidelayout.config import Settings
from slidelayout.engine.text_measure import (
    HeuristicTextMeasurer,
    PillowTextMeasurer,
    create_measurer,
)
from slidelayout.engine.typography import derive_text_style, estimate_text_height
from slidelayout.errors import MeasurementError
from slidelayout.logging_config import configure_logging
from slidelayout.theme.tokens import ThemeTokens


# ============================================================================
# Measurers
# ============================================================================

class TestHeuristicMeasurer:
    """Tests for the average-glyph-width measurer."""

    def test_matches_typography_estimate(self, theme: ThemeTokens, measurer: HeuristicTextMeasurer) -> None:
        style = derive_text_style("body", theme)
        text = "The quick brown fox jumps over the lazy dog. " * 5
        assert measurer.estimate_height(text, style, 4.0) == estimate_text_height(text, style, 4.0)

    def test_fitting_chars_whole_text(self, theme: ThemeTokens, measurer: HeuristicTextMeasurer) -> None:
        style = derive_text_style("body", theme)
        assert measurer.fitting_chars("Short", style, 9.0, 1.0) == 5

    def test_fitting_chars_prefix(self, theme: ThemeTokens, measurer: HeuristicTextMeasurer) -> None:
        style = derive_text_style("body", theme)
        # 1in holds 8 characters per line and 0.3in holds one line at 14pt
        assert measurer.fitting_chars("x" * 200, style, 1.0, 0.3) == 8


class TestPillowMeasurer:
    """Tests for the Pillow glyph-advance measurer."""

    @pytest.fixture
    def pillow(self, tmp_path) -> PillowTextMeasurer:
        return PillowTextMeasurer(font_dir=str(tmp_path))

    def test_empty_text(self, theme: ThemeTokens, pillow: PillowTextMeasurer) -> None:
        assert pillow.estimate_height("", derive_text_style("body", theme), 4.0) == 0.0

    def test_narrow_boxes_wrap_more(self, theme: ThemeTokens, pillow: PillowTextMeasurer) -> None:
        style = derive_text_style("body", theme)
        text = "measured words wrap " * 20
        wide = pillow.estimate_height(text, style, 9.0)
        narrow = pillow.estimate_height(text, style, 2.0)
        assert wide > 0
        assert narrow > wide

    def test_hard_newlines(self, theme: ThemeTokens, pillow: PillowTextMeasurer) -> None:
        assert pillow.wrap("first\nsecond", derive_text_style("body", theme), 9.0) == ["first", "second"]

    def test_oversize_word_is_broken(self, theme: ThemeTokens, pillow: PillowTextMeasurer) -> None:
        style = derive_text_style("body", theme)
        url = "https://example.com/" + "segment" * 40
        lines = pillow.wrap(url, style, 1.0)
        assert len(lines) > 1
        assert "".join(lines) == url
        assert all(pillow.text_width(line, style) <= 1.0 for line in lines)

    def test_oversize_word_raises_height(self, theme: ThemeTokens, pillow: PillowTextMeasurer) -> None:
        style = derive_text_style("body", theme)
        identifier = "x" * 300
        assert pillow.estimate_height(identifier, style, 1.0) > pillow.estimate_height("x", style, 1.0)

    def test_font_cache(self, pillow: PillowTextMeasurer) -> None:
        font = pillow.get_font("Calibri", 14)
        assert pillow.get_font("Calibri", 14) is font
        pillow.clear_font_cache()
        assert pillow._font_cache == {}


class TestCreateMeasurer:
    def test_by_name(self) -> None:
        assert isinstance(create_measurer("heuristic"), HeuristicTextMeasurer)
        assert isinstance(create_measurer("Pillow"), PillowTextMeasurer)
        assert isinstance(create_measurer(None), HeuristicTextMeasurer)

    def test_unknown_provider(self) -> None:
        with pytest.raises(MeasurementError):
            create_measurer("harfbuzz")


# ============================================================================
# Settings and Logging
# ============================================================================

class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("DEFAULT_THEME", "MEASUREMENT", "FONT_DIR", "LOG_LEVEL", "MAX_ELEMENTS", "MAX_WORKERS"):
            monkeypatch.delenv(f"SLIDELAYOUT_{key}", raising=False)
        settings = Settings()
        assert settings.default_theme_id == "neutral"
        assert settings.measurement == "heuristic"
        assert settings.font_dir is None
        assert settings.log_level == "WARNING"
        assert settings.max_elements == 5
        assert settings.max_workers == 1
        assert not settings.uses_real_fonts

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SLIDELAYOUT_MEASUREMENT", "PILLOW")
        monkeypatch.setenv("SLIDELAYOUT_MAX_ELEMENTS", "7")
        monkeypatch.setenv("SLIDELAYOUT_LOG_LEVEL", "debug")
        settings = Settings()
        assert settings.uses_real_fonts
        assert settings.max_elements == 7
        assert settings.log_level == "DEBUG"


class TestConfigureLogging:
    def test_routes_package_logs(self) -> None:
        stream = io.StringIO()
        logger = configure_logging("DEBUG", stream=stream)
        logging.getLogger("slidelayout.engine.layout_engine").debug("layout computed")
        assert logger.level == logging.DEBUG
        assert "layout computed" in stream.getvalue()

    def test_repeat_calls_replace_handler(self) -> None:
        configure_logging("INFO", stream=io.StringIO())
        logger = configure_logging("WARNING", stream=io.StringIO())
        assert sum(1 for h in logger.handlers if getattr(h, "_slidelayout", False)) == 1
        assert logger.level == logging.WARNING
