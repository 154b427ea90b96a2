"""
typography.py — Text style derivation and text height estimation.

Derives a concrete TextStyle (size, weight, family, line height) for a
semantic text role from the theme and the amount of content, and estimates
how tall a block of text will be at a given width.

Height estimation here is a HEURISTIC: it assumes an average glyph width of
font_size × 0.6 and performs no real text shaping. Use a TextMeasurer from
text_measure.py when real font metrics are needed.
"""

import math
from dataclasses import dataclass, field, replace, asdict
from typing import Dict, List, Optional

from ..theme.tokens import ThemeTokens
from .units import (
    AVG_GLYPH_WIDTH_RATIO,
    POINTS_PER_INCH,
    DEFAULT_TEXT_COLOR,
)

# =============================================================================
# ROLES
# =============================================================================

ROLES = ("hero", "title", "subtitle", "heading", "subheading", "body", "small", "caption")

# Roles rendered with the heading font family
HEADING_ROLES = frozenset({"hero", "title", "subtitle", "heading", "subheading"})

# Responsive sizing context per role
_SIZE_CONTEXT = {
    "hero": "title",
    "title": "title",
    "subtitle": "title",
    "caption": "caption",
}

# Line height category per role
_LINE_HEIGHT_CATEGORY = {
    "hero": "title",
    "title": "title",
    "subtitle": "title",
    "heading": "heading",
    "subheading": "heading",
    "caption": "caption",
}

# Accessibility thresholds
MIN_READABLE_FONT_SIZE = 12
MIN_LINE_HEIGHT = 1.2
MAX_LETTER_SPACING = 2.0
MAX_SHADOW_OPACITY = 0.5


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class TextShadow:
    """Drop shadow behind text. opacity is 0.0 (invisible) to 1.0 (solid)."""
    offset_x: float = 1.0
    offset_y: float = 1.0
    blur: float = 2.0
    color: str = "#000000"
    opacity: float = 0.25


@dataclass(frozen=True)
class TextStyle:
    """
    Concrete text style for one element.

    Derived per call from theme + role + content length; never stored in
    the theme.
    """
    font_size: int                         # Points
    font_family: str
    font_weight: int
    line_height: float                     # Multiple of font size
    color: str = DEFAULT_TEXT_COLOR
    letter_spacing: Optional[float] = None  # Points
    text_transform: Optional[str] = None   # "uppercase", "lowercase", ...
    shadow: Optional[TextShadow] = None
    background: Optional[str] = None
    bold: bool = False
    italic: bool = False
    role: Optional[str] = None

    @property
    def is_bold(self) -> bool:
        return self.bold or self.font_weight >= 700

    @property
    def primary_family(self) -> str:
        """First family in the CSS font stack, unquoted."""
        return self.font_family.split(",")[0].strip().strip('"').strip("'")

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class TypographyAccessibility:
    """Result of validate_typography_accessibility()."""
    is_accessible: bool
    score: int
    issues: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


# =============================================================================
# SIZE AND LINE HEIGHT
# =============================================================================

def responsive_font_size(base_size: float, content_length: int, context: str = "body") -> int:
    """
    Scale a base font size down as content grows.

    Full size up to 150 characters, ×0.95 above 150, ×0.9 above 300,
    ×0.85 above 500. Titles never drop below ×0.9; captions never exceed ×0.9;
    body text never drops below ×0.85.
    """
    scale_factor = 1.0
    if content_length > 500:
        scale_factor = 0.85
    elif content_length > 300:
        scale_factor = 0.9
    elif content_length > 150:
        scale_factor = 0.95

    if context == "title":
        scale_factor = max(scale_factor, 0.9)
    elif context == "caption":
        scale_factor = min(scale_factor, 0.9)
    else:
        scale_factor = max(scale_factor, 0.85)

    # Round half up so 14 × 0.95 = 13.3 → 13 and 44 × 0.9 = 39.6 → 40
    return int(math.floor(base_size * scale_factor + 0.5))


def optimal_line_height(font_size: float, category: str, theme: ThemeTokens) -> float:
    """
    Line height for a content category, nudged by font size.

    Large text (≥24pt) is tightened by ×0.9, small text (≤12pt) loosened by ×1.1.
    """
    heights = theme.typography.line_heights
    base = {
        "title": heights.tight,
        "heading": heights.normal,
        "body": heights.relaxed,
        "caption": heights.normal,
    }.get(category, heights.relaxed)

    if font_size >= 24:
        return round(base * 0.9, 4)
    if font_size <= 12:
        return round(base * 1.1, 4)
    return base


def _font_weight_for(role: str, bold: bool, theme: ThemeTokens) -> int:
    weights = theme.typography.font_weights
    if bold or role in ("hero", "title"):
        return weights.bold
    if role in ("subtitle", "heading"):
        return weights.semibold
    if role == "subheading":
        return weights.medium
    return weights.normal


# =============================================================================
# STYLE DERIVATION
# =============================================================================

def derive_text_style(
    role: str,
    theme: ThemeTokens,
    color: Optional[str] = None,
    bold: bool = False,
    italic: bool = False,
    content_length: int = 0,
    emphasis_level: Optional[str] = None,
) -> TextStyle:
    """
    Derive the text style for a semantic role.

    Args:
        role: hero, title, subtitle, heading, subheading, body, small or caption
              (unknown roles are treated as body)
        theme: Theme supplying the role scale, families and weights
        color: Explicit text color; defaults to the theme's primary text color
        bold: Force bold weight
        italic: Italic flag passed through to the serializer
        content_length: Characters of text the style will render
        emphasis_level: "low", "normal" or "high"

    Returns:
        TextStyle ready to attach to an ElementPosition
    """
    if role not in ROLES:
        role = "body"
    typography = theme.typography

    font_size = responsive_font_size(
        typography.scale.size_for(role),
        content_length,
        _SIZE_CONTEXT.get(role, "body"),
    )
    line_height = optimal_line_height(font_size, _LINE_HEIGHT_CATEGORY.get(role, "body"), theme)
    font_family = (
        typography.font_families.heading if role in HEADING_ROLES
        else typography.font_families.body
    )
    font_weight = _font_weight_for(role, bold, theme)

    text_color = color
    if emphasis_level == "high":
        font_weight = typography.font_weights.step_up(font_weight)
        text_color = text_color or theme.palette.text.primary
    elif emphasis_level == "low":
        text_color = text_color or theme.palette.text.secondary

    return TextStyle(
        font_size=font_size,
        font_family=font_family,
        font_weight=font_weight,
        line_height=line_height,
        color=text_color or theme.palette.text.primary,
        letter_spacing=typography.letter_spacing.normal,
        bold=bold or font_weight >= typography.font_weights.bold,
        italic=italic,
        role=role,
    )


def typography_hierarchy(slide_type: str, theme: ThemeTokens) -> Dict[str, TextStyle]:
    """Title/body/caption styles appropriate for a kind of slide."""
    if slide_type in ("title", "hero"):
        roles = ("hero", "subtitle", "body")
    elif slide_type == "section":
        roles = ("title", "heading", "small")
    else:
        roles = ("title", "body", "caption")
    return {
        key: derive_text_style(role, theme)
        for key, role in zip(("title", "body", "caption"), roles)
    }


# =============================================================================
# HEIGHT ESTIMATION
# =============================================================================

def chars_per_line(font_size: float, max_width: float) -> int:
    """Approximate characters fitting on one line of max_width inches."""
    avg_char_width = font_size * AVG_GLYPH_WIDTH_RATIO
    if avg_char_width <= 0:
        return 1
    return max(1, int(math.floor(max_width * POINTS_PER_INCH / avg_char_width)))


def line_height_inches(style: TextStyle) -> float:
    return style.font_size * style.line_height / POINTS_PER_INCH


def estimate_line_count(content: str, style: TextStyle, max_width: float) -> int:
    if not content:
        return 0
    per_line = chars_per_line(style.font_size, max_width)
    # Hard line breaks start new lines
    return sum(max(1, math.ceil(len(part) / per_line)) for part in content.split("\n"))


def estimate_text_height(content: str, style: TextStyle, max_width: float) -> float:
    """
    Estimate rendered text height in inches (heuristic, see module docstring).

    lines = ceil(len(content) / chars_per_line); height = lines × line height.
    """
    return estimate_line_count(content, style, max_width) * line_height_inches(style)


def fit_font_size(
    content: str,
    style: TextStyle,
    max_width: float,
    max_height: float,
    min_size: int = MIN_READABLE_FONT_SIZE,
) -> TextStyle:
    """
    Step the font size down one point at a time until the text fits.

    Returns the smallest tried style (min_size) if nothing fits.
    """
    candidate = style
    while candidate.font_size > min_size and estimate_text_height(content, candidate, max_width) > max_height:
        candidate = replace(candidate, font_size=candidate.font_size - 1)
    return candidate


# =============================================================================
# ACCESSIBILITY
# =============================================================================

def validate_typography_accessibility(style: TextStyle) -> TypographyAccessibility:
    """
    Check a text style against readability rules.

    Penalties from a score of 100: font size below 12pt (−25), line height
    below 1.2 (−15), light weight at 12pt or smaller (−10), extreme letter
    spacing (−5), heavy shadow (−10).
    """
    issues: List[str] = []
    recommendations: List[str] = []
    score = 100

    if style.font_size < MIN_READABLE_FONT_SIZE:
        score -= 25
        issues.append(f"Font size {style.font_size}pt is below the recommended minimum ({MIN_READABLE_FONT_SIZE}pt)")
        recommendations.append(f"Increase font size to at least {MIN_READABLE_FONT_SIZE}pt for better readability")

    if style.line_height < MIN_LINE_HEIGHT:
        score -= 15
        issues.append("Line height too tight for optimal readability")
        recommendations.append(f"Increase line height to at least {MIN_LINE_HEIGHT} for better text flow")

    if style.font_size <= MIN_READABLE_FONT_SIZE and style.font_weight < 400:
        score -= 10
        issues.append("Light font weight on small text reduces readability")
        recommendations.append("Use normal or medium font weight for small text")

    if style.letter_spacing is not None and abs(style.letter_spacing) > MAX_LETTER_SPACING:
        score -= 5
        issues.append(f"Letter spacing {style.letter_spacing}pt is extreme")
        recommendations.append("Keep letter spacing within ±2pt")

    if style.shadow is not None and style.shadow.opacity >= MAX_SHADOW_OPACITY:
        score -= 10
        issues.append("Opaque text shadow reduces legibility")
        recommendations.append("Use a subtle, mostly transparent shadow or remove it")

    return TypographyAccessibility(
        is_accessible=not issues,
        score=max(0, score),
        issues=issues,
        recommendations=recommendations,
    )
