"""
tokens.py — Theme token data model.

A theme is an immutable bundle of palette, typography scale, spacing scale and
canvas constraints. Everything here is plain data; lookup and defaulting live
in themes.py.

All lengths are in INCHES. Font sizes are in points.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple


# =============================================================================
# PALETTE
# =============================================================================

@dataclass(frozen=True)
class TextColors:
    """Text color roles."""
    primary: str = "#0F172A"
    secondary: str = "#475569"
    inverse: str = "#FFFFFF"
    muted: str = "#94A3B8"


@dataclass(frozen=True)
class SemanticColors:
    """Status colors for success/warning/error/info messaging."""
    success: str = "#10B981"
    warning: str = "#F59E0B"
    error: str = "#EF4444"
    info: str = "#3B82F6"


@dataclass(frozen=True)
class BorderColors:
    light: str = "#E2E8F0"
    medium: str = "#CBD5E1"
    strong: str = "#94A3B8"


@dataclass(frozen=True)
class StatusColors:
    active: str = "#10B981"
    inactive: str = "#94A3B8"
    pending: str = "#F59E0B"


@dataclass(frozen=True)
class Palette:
    """Color scheme for a theme."""
    primary: str = "#2563EB"       # Titles and key accents
    secondary: str = "#94A3B8"     # Supporting accents
    accent: str = "#0EA5E9"        # Highlights, trend markers
    background: str = "#FFFFFF"    # Slide background
    surface: str = "#F8FAFC"       # Cards and panels
    text: TextColors = field(default_factory=TextColors)
    semantic: SemanticColors = field(default_factory=SemanticColors)
    borders: BorderColors = field(default_factory=BorderColors)
    chart: Tuple[str, ...] = (
        "#2563EB", "#10B981", "#F59E0B", "#EF4444",
        "#8B5CF6", "#06B6D4", "#84CC16", "#F97316",
    )
    status: StatusColors = field(default_factory=StatusColors)

    def chart_color(self, index: int) -> str:
        """Get chart series color for index (cycles through the chart palette)."""
        return self.chart[index % len(self.chart)]


# =============================================================================
# TYPOGRAPHY
# =============================================================================

@dataclass(frozen=True)
class FontFamilies:
    heading: str = 'Calibri, "Segoe UI", "Helvetica Neue", Arial, sans-serif'
    body: str = 'Calibri, "Segoe UI", "Helvetica Neue", Arial, sans-serif'
    mono: str = '"Consolas", "Courier New", monospace'


@dataclass(frozen=True)
class FontWeights:
    light: int = 300
    normal: int = 400
    medium: int = 500
    semibold: int = 600
    bold: int = 700
    extrabold: int = 800

    def step_up(self, weight: int) -> int:
        """Next heavier weight on the scale (capped at extrabold)."""
        scale = sorted({self.light, self.normal, self.medium, self.semibold, self.bold, self.extrabold})
        for candidate in scale:
            if candidate > weight:
                return candidate
        return scale[-1]


@dataclass(frozen=True)
class FontSizes:
    """Display scale used by preview renderers."""
    display: int = 44
    h1: int = 36
    h2: int = 28
    h3: int = 24
    h4: int = 20
    body: int = 18
    small: int = 14
    tiny: int = 12


@dataclass(frozen=True)
class RoleScale:
    """Base font size per semantic text role, in points."""
    hero: int = 44
    title: int = 28
    subtitle: int = 20
    heading: int = 18
    subheading: int = 16
    body: int = 14
    small: int = 12
    caption: int = 9

    def size_for(self, role: str) -> int:
        try:
            return getattr(self, role)
        except AttributeError:
            return self.body


@dataclass(frozen=True)
class LineHeights:
    tight: float = 1.15
    normal: float = 1.25
    relaxed: float = 1.4
    loose: float = 1.6


@dataclass(frozen=True)
class LetterSpacing:
    tight: float = -0.5
    normal: float = 0.0
    wide: float = 0.5


@dataclass(frozen=True)
class Typography:
    font_families: FontFamilies = field(default_factory=FontFamilies)
    font_weights: FontWeights = field(default_factory=FontWeights)
    font_sizes: FontSizes = field(default_factory=FontSizes)
    scale: RoleScale = field(default_factory=RoleScale)
    line_heights: LineHeights = field(default_factory=LineHeights)
    letter_spacing: LetterSpacing = field(default_factory=LetterSpacing)


# =============================================================================
# SPACING, RADII, SHADOWS, CANVAS
# =============================================================================

@dataclass(frozen=True)
class SpacingScale:
    """Named spacing scale in inches (4px..48px at 72 DPI)."""
    xs: float = 0.056
    sm: float = 0.111
    md: float = 0.167
    lg: float = 0.222
    xl: float = 0.333
    xxl: float = 0.444
    xxxl: float = 0.667

    def get(self, name: str) -> float:
        try:
            return getattr(self, name)
        except AttributeError:
            raise KeyError(f"Unknown spacing value: {name}") from None


@dataclass(frozen=True)
class Radii:
    none: float = 0.0
    sm: float = 0.028
    md: float = 0.056
    lg: float = 0.111
    full: float = 999.0


@dataclass(frozen=True)
class Shadows:
    none: str = "none"
    sm: str = "0 1px 2px 0 rgba(0, 0, 0, 0.05)"
    md: str = "0 4px 6px -1px rgba(0, 0, 0, 0.1)"
    lg: str = "0 10px 15px -3px rgba(0, 0, 0, 0.1)"
    xl: str = "0 20px 25px -5px rgba(0, 0, 0, 0.1)"


@dataclass(frozen=True)
class CanvasLayout:
    """Canvas constraints (16:9)."""
    slide_width: float = 10.0
    slide_height: float = 5.625
    safe_margin: float = 0.5
    grid_columns: int = 12
    grid_rows: int = 8
    top_margin: float = 0.6
    title_top_margin: float = 0.8         # Title slides
    column_gap: float = 0.3
    element_spacing: float = 0.25
    section_spacing: float = 0.5


# =============================================================================
# SHARED DEFAULTS
# =============================================================================

def base_typography(**overrides) -> Typography:
    """
    Typography shared by the built-in themes.

    Overrides replace whole sub-scales, e.g.
    ``base_typography(font_families=FontFamilies(heading="Georgia"))``.
    """
    return replace(Typography(), **overrides)


def base_spacing(**overrides) -> SpacingScale:
    """Spacing scale shared by the built-in themes."""
    return replace(SpacingScale(), **overrides)


def base_layout(**overrides) -> CanvasLayout:
    """16:9 canvas constraints shared by the built-in themes."""
    return replace(CanvasLayout(), **overrides)


# =============================================================================
# THEME
# =============================================================================

@dataclass(frozen=True)
class ThemeTokens:
    """Immutable, named bundle of design tokens."""
    id: str
    name: str
    palette: Palette = field(default_factory=Palette)
    typography: Typography = field(default_factory=Typography)
    spacing: SpacingScale = field(default_factory=SpacingScale)
    radii: Radii = field(default_factory=Radii)
    shadows: Shadows = field(default_factory=Shadows)
    layout: CanvasLayout = field(default_factory=CanvasLayout)
    description: Optional[str] = None

    @property
    def is_dark(self) -> bool:
        """True for themes with a dark background."""
        from ..validation.colors import relative_luminance
        return relative_luminance(self.palette.background) < 0.2


def with_palette(theme: ThemeTokens, theme_id: Optional[str] = None, **overrides) -> ThemeTokens:
    """
    Derive a theme with palette overrides. The original theme is untouched.

    Nested text colors can be overridden with ``text_primary=``,
    ``text_secondary=`` etc.
    """
    text_overrides: Dict[str, str] = {
        key[len("text_"):]: overrides.pop(key)
        for key in list(overrides)
        if key.startswith("text_")
    }
    palette = theme.palette
    if text_overrides:
        palette = replace(palette, text=replace(palette.text, **text_overrides))
    if overrides:
        palette = replace(palette, **overrides)
    return replace(theme, id=theme_id or theme.id, palette=palette)
