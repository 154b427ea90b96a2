"""
layout_config.py — Canvas, margins and spacing for one slide archetype.

create_layout_config() is the single place where margins and spacing are
decided. Strategies read everything from the returned LayoutConfig; they never
hard-code gutters.
"""

from dataclasses import dataclass, field

from ..theme.tokens import ThemeTokens
from .units import TITLE_TO_CONTENT, TITLE_TO_CONTENT_TITLE


@dataclass(frozen=True)
class Margins:
    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in inches."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2


@dataclass(frozen=True)
class SpacingConfig:
    title_to_content: float
    element_spacing: float
    column_gap: float
    section_spacing: float


@dataclass(frozen=True)
class GridDimensions:
    columns: int = 12
    rows: int = 8
    gutter_width: float = 0.3
    gutter_height: float = 0.25


@dataclass(frozen=True)
class LayoutConfig:
    """
    Canvas constraints for one slide.

    content_area is the canvas minus margins.
    """
    slide_width: float
    slide_height: float
    margins: Margins
    content_area: Rect
    spacing: SpacingConfig
    grid: GridDimensions = field(default_factory=GridDimensions)

    @property
    def content_bottom(self) -> float:
        return self.content_area.bottom

    def remaining_height(self, cursor_y: float) -> float:
        """Content-area height left below cursor_y."""
        return self.content_area.height - (cursor_y - self.content_area.y)


def is_title_archetype(archetype: str) -> bool:
    return str(getattr(archetype, "value", archetype)) == "title"


def create_layout_config(archetype: str, theme: ThemeTokens) -> LayoutConfig:
    """
    Build the layout configuration for an archetype.

    Title slides get a larger top margin (0.8 vs 0.6) and more room between
    title and content (0.8 vs 0.4). Other margins come from the theme's safe
    margin (0.5).
    """
    canvas = theme.layout
    title_slide = is_title_archetype(archetype)

    margins = Margins(
        top=canvas.title_top_margin if title_slide else canvas.top_margin,
        right=canvas.safe_margin,
        bottom=canvas.safe_margin,
        left=canvas.safe_margin,
    )
    content_area = Rect(
        x=margins.left,
        y=margins.top,
        width=canvas.slide_width - margins.left - margins.right,
        height=canvas.slide_height - margins.top - margins.bottom,
    )
    spacing = SpacingConfig(
        title_to_content=TITLE_TO_CONTENT_TITLE if title_slide else TITLE_TO_CONTENT,
        element_spacing=canvas.element_spacing,
        column_gap=canvas.column_gap,
        section_spacing=canvas.section_spacing,
    )
    grid = GridDimensions(
        columns=canvas.grid_columns,
        rows=canvas.grid_rows,
        gutter_width=spacing.column_gap,
        gutter_height=spacing.element_spacing,
    )
    return LayoutConfig(
        slide_width=canvas.slide_width,
        slide_height=canvas.slide_height,
        margins=margins,
        content_area=content_area,
        spacing=spacing,
        grid=grid,
    )
