"""Tests for theme tokens and the theme registry."""

import dataclasses

import pytest

from slidelayout.errors import ThemeNotFoundError
from slidelayout.theme.themes import (
    BUILTIN_THEMES,
    DEFAULT_THEME_ID,
    NEUTRAL_THEME,
    ThemeRegistry,
    create_theme_registry,
    list_themes,
)
from slidelayout.engine.layout_config import create_layout_config
from slidelayout.theme.tokens import (
    FontFamilies,
    ThemeTokens,
    base_layout,
    base_spacing,
    base_typography,
    with_palette,
)
from slidelayout.validation.contrast import validate_theme_accessibility


class TestThemeRegistry:
    """Tests for ThemeRegistry lookup and fallback."""

    def test_builtin_ids(self, registry: ThemeRegistry) -> None:
        assert registry.ids() == ["color-pop", "executive", "neutral"]

    def test_default_is_neutral(self, registry: ThemeRegistry) -> None:
        assert DEFAULT_THEME_ID == "neutral"
        assert registry.default is NEUTRAL_THEME

    def test_resolve_known(self, registry: ThemeRegistry) -> None:
        assert registry.resolve("executive").id == "executive"

    def test_resolve_unknown_falls_back(self, registry: ThemeRegistry) -> None:
        assert registry.resolve("does-not-exist") is registry.default

    def test_resolve_none_falls_back(self, registry: ThemeRegistry) -> None:
        assert registry.resolve(None) is registry.default

    def test_strict_get_raises(self, registry: ThemeRegistry) -> None:
        with pytest.raises(ThemeNotFoundError):
            registry.get("does-not-exist")

    def test_custom_default(self) -> None:
        registry = create_theme_registry("executive")
        assert registry.resolve("missing").id == "executive"

    def test_unregistered_default_rejected(self) -> None:
        with pytest.raises(ThemeNotFoundError):
            create_theme_registry("missing")

    def test_register_returns_new_registry(self, registry: ThemeRegistry) -> None:
        custom = with_palette(NEUTRAL_THEME, theme_id="brand", primary="#0D9488")
        extended = registry.register(custom)
        assert "brand" in extended.ids()
        assert "brand" not in registry.ids()

    def test_themes_mapping_is_read_only(self, registry: ThemeRegistry) -> None:
        with pytest.raises(TypeError):
            registry.themes["x"] = NEUTRAL_THEME

    def test_list_themes(self, registry: ThemeRegistry) -> None:
        summaries = list_themes(registry)
        assert [s["id"] for s in summaries] == registry.ids()
        assert summaries[2]["background"] == "#FFFFFF"


class TestThemeTokens:
    """Tests for the immutable token bundles."""

    def test_tokens_are_frozen(self, theme: ThemeTokens) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            theme.name = "Changed"

    def test_with_palette_leaves_original(self, theme: ThemeTokens) -> None:
        derived = with_palette(theme, text_primary="#FFFFFF", accent="#FF0000")
        assert derived.palette.text.primary == "#FFFFFF"
        assert derived.palette.accent == "#FF0000"
        assert theme.palette.text.primary == "#0F172A"
        assert theme.palette.accent == "#0EA5E9"

    def test_is_dark(self, theme: ThemeTokens, dark_theme: ThemeTokens) -> None:
        assert not theme.is_dark
        assert dark_theme.is_dark

    def test_chart_color_cycles(self, theme: ThemeTokens) -> None:
        palette = theme.palette
        assert palette.chart_color(len(palette.chart)) == palette.chart_color(0)

    def test_spacing_scale(self, theme: ThemeTokens) -> None:
        spacing = theme.spacing
        assert spacing.xs < spacing.sm < spacing.md < spacing.lg < spacing.xl

    @pytest.mark.parametrize("theme_id", sorted(BUILTIN_THEMES))
    def test_builtin_themes_are_accessible(self, theme_id: str) -> None:
        report = validate_theme_accessibility(BUILTIN_THEMES[theme_id])
        assert report.is_accessible, report.issues


class TestSharedDefaults:
    """Tests for the shared token builders behind the built-in themes."""

    @pytest.mark.parametrize("theme_id", sorted(BUILTIN_THEMES))
    def test_builtins_use_shared_defaults(self, theme_id: str) -> None:
        theme = BUILTIN_THEMES[theme_id]
        assert theme.typography == base_typography()
        assert theme.spacing == base_spacing()
        assert theme.layout == base_layout()

    def test_overrides_replace_only_named_fields(self) -> None:
        serif = base_typography(font_families=FontFamilies(heading="Georgia"))
        assert serif.font_families.heading == "Georgia"
        assert serif.font_sizes == base_typography().font_sizes
        assert base_spacing(md=0.2).md == 0.2
        assert base_layout(safe_margin=0.4).slide_width == 10.0

    def test_unknown_override_rejected(self) -> None:
        with pytest.raises(TypeError):
            base_layout(grid_gutter=0.25)

    def test_column_gap_drives_grid_gutter(self) -> None:
        theme = dataclasses.replace(NEUTRAL_THEME, layout=base_layout(column_gap=0.5))
        config = create_layout_config("two-column", theme)
        assert config.spacing.column_gap == 0.5
        assert config.grid.gutter_width == 0.5
