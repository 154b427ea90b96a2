"""
colors.py — Color parsing, WCAG luminance/contrast and color distance.

Colors are accepted as hex strings ("#RRGGBB", "RRGGBB", "#RGB") or CSS
functional notation ("rgb(r, g, b)", "rgba(r, g, b, a)"). Alpha is ignored
for contrast math.
"""

import re
from typing import Optional, Tuple

import numpy as np

RGB = Tuple[int, int, int]

# WCAG 2.1 contrast thresholds
WCAG_CONTRAST_RATIOS = {
    ("AA", False): 4.5,
    ("AA", True): 3.0,
    ("AAA", False): 7.0,
    ("AAA", True): 4.5,
}

# Distance between black and white in RGB space (sqrt(3 * 255^2))
MAX_RGB_DISTANCE = 441.0

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_FUNC_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+\s*)?\)$",
    re.IGNORECASE,
)


# =============================================================================
# PARSING / CONVERSION
# =============================================================================

def hex_to_rgb(hex_color: str) -> RGB:
    """
    Convert a hex color string to an (r, g, b) tuple.

    Raises:
        ValueError: If the string is not a 3- or 6-digit hex color
    """
    match = _HEX_RE.match(hex_color.strip())
    if not match:
        raise ValueError(f"Invalid hex color: {hex_color}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB values (clamped to 0-255) to an uppercase hex string."""
    r, g, b = (max(0, min(255, int(round(c)))) for c in (r, g, b))
    return f"#{r:02X}{g:02X}{b:02X}"


def parse_css_color(color: Optional[str]) -> Optional[RGB]:
    """Parse hex or rgb()/rgba() notation; None when unparseable."""
    if not color:
        return None
    color = color.strip()
    match = _RGB_FUNC_RE.match(color)
    if match:
        return tuple(min(255, int(v)) for v in match.groups())
    try:
        return hex_to_rgb(color)
    except ValueError:
        return None


def normalize_hex(color: str) -> Optional[str]:
    """Canonical "#RRGGBB" form of any parseable color."""
    rgb = parse_css_color(color)
    return rgb_to_hex(*rgb) if rgb is not None else None


def _rgb(color) -> RGB:
    if isinstance(color, tuple):
        return color
    rgb = parse_css_color(color)
    if rgb is None:
        raise ValueError(f"Invalid color: {color}")
    return rgb


# =============================================================================
# LUMINANCE / CONTRAST
# =============================================================================

def relative_luminance(color) -> float:
    """WCAG relative luminance (0 = black, 1 = white)."""
    r, g, b = _rgb(color)

    def linearize(c):
        c = c / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * linearize(r) + 0.7152 * linearize(g) + 0.0722 * linearize(b)


def contrast_ratio(foreground, background) -> float:
    """WCAG contrast ratio between two colors (1.0 to 21.0)."""
    lum1 = relative_luminance(foreground)
    lum2 = relative_luminance(background)
    return (max(lum1, lum2) + 0.05) / (min(lum1, lum2) + 0.05)


def meets_wcag(foreground, background, level: str = "AA", large_text: bool = False) -> bool:
    """True when the pair meets the WCAG level (AA or AAA)."""
    required = WCAG_CONTRAST_RATIOS[(level.upper(), large_text)]
    return contrast_ratio(foreground, background) >= required


def adjust_color_for_contrast(
    color: str,
    background: str,
    target_ratio: float = 4.5,
    direction: str = "auto",
) -> str:
    """
    Lighten or darken a color until it reaches the target contrast.

    Binary search on the blend factor toward white (lighter) or black
    (darker). "auto" darkens on light backgrounds and lightens on dark ones.
    Returns the original color when it already passes, and the closest
    candidate found otherwise.
    """
    rgb = parse_css_color(color)
    if rgb is None or parse_css_color(background) is None:
        return color
    if contrast_ratio(rgb, background) >= target_ratio:
        return color

    if direction == "auto":
        direction = "darker" if relative_luminance(background) > 0.5 else "lighter"
    target = np.array([255.0, 255.0, 255.0]) if direction == "lighter" else np.zeros(3)
    source = np.array(rgb, dtype=float)

    def blend(factor: float) -> str:
        return rgb_to_hex(*(source + (target - source) * factor))

    best = blend(1.0)
    low, high = 0.0, 1.0
    for _ in range(20):
        mid = (low + high) / 2
        candidate = blend(mid)
        if contrast_ratio(candidate, background) >= target_ratio:
            best = candidate
            high = mid
        else:
            low = mid
    return best


# =============================================================================
# DISTANCE / SIMILARITY
# =============================================================================

def color_distance(color1, color2) -> float:
    """Euclidean distance between two colors in RGB space (0 to ~441)."""
    return float(np.linalg.norm(np.array(_rgb(color1), dtype=float) - np.array(_rgb(color2), dtype=float)))


def color_similarity(color1, color2) -> int:
    """
    Similarity percentage (0-100) of two colors.

    Unparseable colors are 0% similar to anything.
    """
    rgb1 = parse_css_color(color1) if not isinstance(color1, tuple) else color1
    rgb2 = parse_css_color(color2) if not isinstance(color2, tuple) else color2
    if rgb1 is None or rgb2 is None:
        return 0
    if rgb1 == rgb2:
        return 100
    similarity = max(0.0, 100 - color_distance(rgb1, rgb2) / MAX_RGB_DISTANCE * 100)
    return int(similarity + 0.5)
