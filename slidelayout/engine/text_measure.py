"""
text_measure.py — Pluggable text measurement providers.

Layout strategies ask a TextMeasurer how tall a block of text will be at a
given width. Two providers ship:

- HeuristicTextMeasurer: the average-glyph-width estimate from typography.py.
  Fast and dependency-free at call time, but only an APPROXIMATION; accuracy
  across font families is unverified.
- PillowTextMeasurer: wraps words using real glyph advances from TrueType
  fonts loaded with Pillow. Falls back to bundled/system fonts and finally to
  Pillow's default bitmap font.

Swap providers without touching any strategy code: strategies only see the
TextMeasurer interface.
"""

import logging
import os
import platform
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from PIL import ImageFont

from ..errors import MeasurementError
from .typography import TextStyle, estimate_text_height, line_height_inches
from .units import POINTS_PER_INCH

logger = logging.getLogger(__name__)

# =============================================================================
# FONT CONFIGURATION
# =============================================================================

# Font file mapping (family → regular/bold file names)
FONT_MAP = {
    'Calibri': 'calibri.ttf',
    'Calibri Bold': 'calibrib.ttf',
    'Arial': 'arial.ttf',
    'Arial Bold': 'arialbd.ttf',
    'Segoe UI': 'segoeui.ttf',
    'Segoe UI Bold': 'segoeuib.ttf',
    'Consolas': 'consola.ttf',
    'DejaVu Sans': 'DejaVuSans.ttf',
    'DejaVu Sans Bold': 'DejaVuSans-Bold.ttf',
}

FALLBACK_FONT_FILE = 'DejaVuSans.ttf'


def _system_font_candidates() -> List[Path]:
    if platform.system() == 'Windows':
        windows_fonts = Path(os.environ.get('WINDIR', 'C:/Windows')) / 'Fonts'
        return [
            windows_fonts / 'calibri.ttf',
            windows_fonts / 'arial.ttf',
            windows_fonts / 'segoeui.ttf',
        ]
    return [
        Path('/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf'),
        Path('/usr/share/fonts/TTF/DejaVuSans.ttf'),
        Path('/Library/Fonts/Arial.ttf'),
    ]


# =============================================================================
# MEASURER INTERFACE
# =============================================================================

class TextMeasurer(ABC):
    """Estimates rendered text height for a style and box width."""

    name: str = "base"

    @abstractmethod
    def estimate_height(self, text: str, style: TextStyle, max_width: float) -> float:
        """
        Estimate the height of text wrapped to max_width.

        Args:
            text: Text content (may contain hard line breaks)
            style: Text style (size in points, line height multiple)
            max_width: Box width in inches

        Returns:
            Height in inches
        """

    def fitting_chars(self, text: str, style: TextStyle, max_width: float, max_height: float) -> int:
        """
        Number of leading characters of text that fit inside the box.

        Binary search over prefixes using estimate_height().
        """
        if self.estimate_height(text, style, max_width) <= max_height:
            return len(text)
        lo, hi = 0, len(text)
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if self.estimate_height(text[:mid], style, max_width) <= max_height:
                lo = mid
            else:
                hi = mid - 1
        return lo


class HeuristicTextMeasurer(TextMeasurer):
    """Average glyph width estimate (font_size × 0.6 per character)."""

    name = "heuristic"

    def estimate_height(self, text: str, style: TextStyle, max_width: float) -> float:
        return estimate_text_height(text, style, max_width)


class PillowTextMeasurer(TextMeasurer):
    """Real glyph advances from TrueType fonts via Pillow."""

    name = "pillow"

    def __init__(self, font_dir: Optional[str] = None):
        self.font_dir = Path(font_dir) if font_dir else None
        self._font_cache: Dict[Tuple[str, int, bool], ImageFont.ImageFont] = {}
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Font loading
    # -------------------------------------------------------------------------

    def _font_path(self, family: str, bold: bool) -> Optional[Path]:
        font_key = f"{family} Bold" if bold else family
        filename = FONT_MAP.get(font_key, FONT_MAP.get(family, FALLBACK_FONT_FILE))

        candidates: List[Path] = []
        if self.font_dir is not None:
            candidates.append(self.font_dir / filename)
            candidates.append(self.font_dir / FALLBACK_FONT_FILE)
        candidates.extend(_system_font_candidates())

        for path in candidates:
            if path.exists():
                return path
        return None

    def get_font(self, family: str, size_pt: int, bold: bool = False) -> ImageFont.ImageFont:
        """Load (and cache) a font for measurement. Falls back gracefully."""
        cache_key = (family, size_pt, bold)
        font = self._font_cache.get(cache_key)
        if font is not None:
            return font

        font_path = self._font_path(family, bold)
        try:
            if font_path is None:
                raise OSError(f"No font file found for {family}")
            font = ImageFont.truetype(str(font_path), size_pt)
        except OSError:
            logger.debug("Falling back to Pillow default font for %s", family)
            font = ImageFont.load_default()

        with self._lock:
            self._font_cache[cache_key] = font
        return font

    def clear_font_cache(self):
        """Clear the font cache (useful for testing)."""
        with self._lock:
            self._font_cache.clear()

    # -------------------------------------------------------------------------
    # Measurement
    # -------------------------------------------------------------------------

    def text_width(self, text: str, style: TextStyle) -> float:
        """Width of a single line of text in inches (Pillow sizes at 72 DPI)."""
        font = self.get_font(style.primary_family, style.font_size, style.is_bold)
        return font.getlength(text) / POINTS_PER_INCH

    def split_word(self, word: str, style: TextStyle, max_width: float) -> List[str]:
        """Break a word wider than max_width into chunks that fit (URLs, identifiers)."""
        chunks: List[str] = []
        current = ""
        for char in word:
            if current and self.text_width(current + char, style) > max_width:
                chunks.append(current)
                current = char
            else:
                current += char
        chunks.append(current)
        return chunks

    def wrap(self, text: str, style: TextStyle, max_width: float) -> List[str]:
        """Greedy word wrap using measured widths."""
        lines: List[str] = []
        for paragraph in text.split("\n"):
            pieces: List[str] = []
            for word in paragraph.split():
                if self.text_width(word, style) > max_width:
                    pieces.extend(self.split_word(word, style, max_width))
                else:
                    pieces.append(word)
            if not pieces:
                lines.append("")
                continue
            current = pieces[0]
            for piece in pieces[1:]:
                candidate = f"{current} {piece}"
                if self.text_width(candidate, style) <= max_width:
                    current = candidate
                else:
                    lines.append(current)
                    current = piece
            lines.append(current)
        return lines

    def estimate_height(self, text: str, style: TextStyle, max_width: float) -> float:
        if not text:
            return 0.0
        return len(self.wrap(text, style, max_width)) * line_height_inches(style)


# =============================================================================
# FACTORY
# =============================================================================

MEASURERS = {
    'heuristic': HeuristicTextMeasurer,
    'pillow': PillowTextMeasurer,
}


def create_measurer(name: str = 'heuristic', font_dir: Optional[str] = None) -> TextMeasurer:
    """Create a text measurement provider by name."""
    key = (name or 'heuristic').lower()
    if key == 'pillow':
        return PillowTextMeasurer(font_dir=font_dir)
    if key == 'heuristic':
        return HeuristicTextMeasurer()
    raise MeasurementError(f"Unknown measurement provider: {name}. Available: {list(MEASURERS.keys())}")
