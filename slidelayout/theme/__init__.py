# Theme token store

from .tokens import (
    ThemeTokens,
    Palette,
    TextColors,
    SemanticColors,
    BorderColors,
    StatusColors,
    Typography,
    FontFamilies,
    FontWeights,
    FontSizes,
    RoleScale,
    LineHeights,
    LetterSpacing,
    SpacingScale,
    Radii,
    Shadows,
    CanvasLayout,
    base_layout,
    base_spacing,
    base_typography,
    with_palette,
)

from .themes import (
    BUILTIN_THEMES,
    DEFAULT_THEME_ID,
    NEUTRAL_THEME,
    EXECUTIVE_THEME,
    COLOR_POP_THEME,
    ThemeRegistry,
    create_theme_registry,
    list_themes,
)
