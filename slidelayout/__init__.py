"""
slidelayout — Slide layout and validation engine.

Turns a content spec (title, bullets, tables, charts, grids, metric cards)
tagged with a layout archetype into positioned, styled elements on a 16:9
canvas, and scores the result for accessibility, typography, color harmony
and layout quality.
"""

__version__ = "0.1.0"

from .errors import (
    SlideLayoutError,
    UnknownArchetypeError,
    MalformedContentError,
    ThemeNotFoundError,
    MeasurementError,
)
from .config import Settings, get_settings
from .logging_config import configure_logging
from .dsl import Archetype, ContentSpec, parse_content_spec
from .theme import ThemeTokens, ThemeRegistry, create_theme_registry
from .engine import (
    LayoutEngine,
    LayoutOutcome,
    LayoutSuccess,
    LayoutDegraded,
    calculate_slide_layout,
    create_engine,
)
from .validation import ValidationResult, score
