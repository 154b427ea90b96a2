"""
themes.py — Built-in themes and the theme registry.

The registry is an explicit value: callers construct one with the default
theme id they want and pass it to the layout engine. There is no module-level
"current theme".
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from ..errors import ThemeNotFoundError
from .tokens import (
    BorderColors,
    Palette,
    SemanticColors,
    TextColors,
    ThemeTokens,
    base_layout,
    base_spacing,
    base_typography,
)

logger = logging.getLogger(__name__)

DEFAULT_THEME_ID = "neutral"


# =============================================================================
# BUILT-IN THEMES
# =============================================================================

NEUTRAL_THEME = ThemeTokens(
    id="neutral",
    name="Neutral",
    description="Clean light theme with a blue primary; the fallback theme.",
    palette=Palette(),
    typography=base_typography(),
    spacing=base_spacing(),
    layout=base_layout(),
)

EXECUTIVE_THEME = ThemeTokens(
    id="executive",
    name="Executive",
    description="Dark slate background with light headings.",
    palette=Palette(
        primary="#F8FAFC",
        secondary="#94A3B8",
        accent="#3B82F6",
        background="#0F172A",
        surface="#1E293B",
        text=TextColors(
            primary="#F8FAFC",
            secondary="#CBD5E1",
            inverse="#0F172A",
            muted="#64748B",
        ),
        semantic=SemanticColors(
            success="#22C55E",
            warning="#FCD34D",
            error="#F87171",
            info="#60A5FA",
        ),
        borders=BorderColors(light="#334155", medium="#475569", strong="#64748B"),
        chart=(
            "#3B82F6", "#22C55E", "#FCD34D", "#F87171",
            "#A78BFA", "#06B6D4", "#84CC16", "#FB923C",
        ),
    ),
    typography=base_typography(),
    spacing=base_spacing(),
    layout=base_layout(),
)

COLOR_POP_THEME = ThemeTokens(
    id="color-pop",
    name="Color Pop",
    description="Vibrant violet and pink accents on white.",
    palette=Palette(
        primary="#7C3AED",
        secondary="#EC4899",
        accent="#06B6D4",
        background="#FFFFFF",
        surface="#FAFAFA",
        text=TextColors(
            primary="#111827",
            secondary="#374151",
            inverse="#FFFFFF",
            muted="#9CA3AF",
        ),
        semantic=SemanticColors(
            success="#059669",
            warning="#D97706",
            error="#DC2626",
            info="#2563EB",
        ),
        borders=BorderColors(light="#F3F4F6", medium="#D1D5DB", strong="#9CA3AF"),
        chart=(
            "#7C3AED", "#EC4899", "#06B6D4", "#10B981",
            "#F59E0B", "#EF4444", "#8B5CF6", "#14B8A6",
        ),
    ),
    typography=base_typography(),
    spacing=base_spacing(),
    layout=base_layout(),
)

BUILTIN_THEMES: Mapping[str, ThemeTokens] = MappingProxyType({
    theme.id: theme
    for theme in (NEUTRAL_THEME, EXECUTIVE_THEME, COLOR_POP_THEME)
})


# =============================================================================
# REGISTRY
# =============================================================================

@dataclass(frozen=True)
class ThemeRegistry:
    """
    Immutable theme lookup with an explicit fallback.

    resolve() never fails: unknown or missing ids fall back to the default
    theme. get() is the strict variant.
    """
    themes: Mapping[str, ThemeTokens] = field(default_factory=lambda: BUILTIN_THEMES)
    default_theme_id: str = DEFAULT_THEME_ID

    def __post_init__(self):
        if self.default_theme_id not in self.themes:
            raise ThemeNotFoundError(
                f"Default theme '{self.default_theme_id}' is not registered. "
                f"Available: {sorted(self.themes)}"
            )
        object.__setattr__(self, "themes", MappingProxyType(dict(self.themes)))

    @property
    def default(self) -> ThemeTokens:
        return self.themes[self.default_theme_id]

    def get(self, theme_id: str) -> ThemeTokens:
        """Strict lookup by id."""
        try:
            return self.themes[theme_id]
        except KeyError:
            raise ThemeNotFoundError(f"Unknown theme: {theme_id}") from None

    def resolve(self, theme_id: Optional[str]) -> ThemeTokens:
        """Lookup by id, falling back to the default theme."""
        if theme_id is None:
            return self.default
        theme = self.themes.get(theme_id)
        if theme is None:
            logger.info("Theme '%s' not found, using default '%s'", theme_id, self.default_theme_id)
            return self.default
        return theme

    def register(self, theme: ThemeTokens) -> "ThemeRegistry":
        """Return a new registry that also contains ``theme``."""
        themes: Dict[str, ThemeTokens] = dict(self.themes)
        themes[theme.id] = theme
        return ThemeRegistry(themes=themes, default_theme_id=self.default_theme_id)

    def ids(self) -> List[str]:
        return sorted(self.themes)


def create_theme_registry(default_theme_id: str = DEFAULT_THEME_ID) -> ThemeRegistry:
    """Registry of the built-in themes with the given fallback theme."""
    return ThemeRegistry(themes=BUILTIN_THEMES, default_theme_id=default_theme_id)


def list_themes(registry: ThemeRegistry) -> List[Dict[str, str]]:
    """Summaries of the registered themes, for pickers and API listings."""
    return [
        {
            "id": theme.id,
            "name": theme.name,
            "description": theme.description or "",
            "primary": theme.palette.primary,
            "background": theme.palette.background,
        }
        for theme in (registry.themes[theme_id] for theme_id in registry.ids())
    ]
