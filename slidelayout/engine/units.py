"""
units.py — Canvas constants, unit conversions and layout constants.

This is the foundation module. All positioning math uses these constants.
Layout values are in INCHES; font sizes are in POINTS.

Serializers convert to EMU (English Metric Units, 914400 per inch) with
inches_to_emu() / to_emu().
"""

from typing import Dict

from pptx.util import Emu, Inches, Pt

# =============================================================================
# SLIDE DIMENSIONS (16:9)
# =============================================================================

SLIDE_WIDTH_INCHES = 10.0
SLIDE_HEIGHT_INCHES = 5.625
SLIDE_WIDTH_EMU = Inches(SLIDE_WIDTH_INCHES)

# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

EMU_PER_INCH = 914400
POINTS_PER_INCH = 72


def inches_to_emu(inches: float) -> int:
    """Convert inches to EMUs."""
    return int(Inches(inches))


def emu_to_inches(emu: int) -> float:
    """Convert EMUs to inches."""
    return Emu(emu).inches


def pt_to_emu(pt: float) -> int:
    """Convert points to EMUs (for font sizes, line widths)."""
    return int(Pt(pt))


# =============================================================================
# SPACING (inches)
# =============================================================================

# Title slides get more breathing room below the title
TITLE_TO_CONTENT_TITLE = 0.8
TITLE_TO_CONTENT = 0.4

# =============================================================================
# ELEMENT SIZES (inches)
# =============================================================================

TITLE_HEIGHT_TITLE_SLIDE = 1.2
TITLE_HEIGHT = 0.8
SUBTITLE_HEIGHT = 0.6

BULLET_ROW_HEIGHT = 0.4
BULLET_GAP = 0.1

PARAGRAPH_HEIGHT = 1.0
MIN_PARAGRAPH_HEIGHT = 0.6

TABLE_ROW_HEIGHT = 0.4
TABLE_PADDING = 0.2

CHART_BOTTOM_RESERVE = 0.5

IMAGE_WIDTH_RATIO = 0.45
IMAGE_TEXT_WIDTH_RATIO = 0.5
IMAGE_HEIGHT_RATIO = 0.8

CENTERED_INSET_RATIO = 0.1     # Title subtitle and chart inset on each side
CENTERED_WIDTH_RATIO = 0.8

TREND_INDICATOR_SIZE = 0.2

# =============================================================================
# CONTENT LIMITS
# =============================================================================

CONTENT_LIMITS: Dict[str, int] = {
    "max_bullets": 8,
    "max_table_rows": 10,
    "max_table_columns": 6,
    "max_chart_series": 5,
    "max_chart_categories": 12,
    "max_metrics": 12,
    "max_title_length": 80,
}

# More than this many content elements triggers a "simplify layout" hint
MAX_ELEMENTS_BEFORE_SIMPLIFY = 5

# =============================================================================
# TEXT METRICS
# =============================================================================

# Average glyph width as a fraction of the font size (heuristic)
AVG_GLYPH_WIDTH_RATIO = 0.6

DEFAULT_TEXT_COLOR = "#1F2937"

# Floating point slack when comparing coordinates
EPSILON = 1e-6

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between min and max."""
    return max(min_val, min(max_val, value))
