"""
grid_layout.py — 12-column grid and cell partitioning.

Converts archetype-relative positions ("content-narrow column, 1.2 inches
below the content top") into absolute canvas coordinates, and partitions a
rectangle into N x M cells for grid-of-cells slides.

All outputs are in INCHES. Every box returned lies inside the grid's
container (the slide's content area).
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .layout_config import LayoutConfig, Margins, Rect
from .positioned import ElementPosition, ElementType, HorizontalAlignment
from .units import EPSILON


# =============================================================================
# GRID CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class GridConfig:
    """Column grid laid over the content area."""
    columns: int
    gutter: float
    container_width: float
    container_height: float
    margin: Margins          # Offsets of the container from the canvas edges

    @property
    def container(self) -> Rect:
        return Rect(self.margin.left, self.margin.top, self.container_width, self.container_height)


@dataclass(frozen=True)
class GridColumn:
    """Column span on the grid (1-based start)."""
    start: int
    span: int


def create_grid_config(config: LayoutConfig) -> GridConfig:
    """Grid over the content area, with the configured column gap as gutter."""
    area = config.content_area
    return GridConfig(
        columns=config.grid.columns,
        gutter=config.grid.gutter_width,
        container_width=area.width,
        container_height=area.height,
        margin=Margins(
            top=area.y,
            right=config.slide_width - area.right,
            bottom=config.slide_height - area.bottom,
            left=area.x,
        ),
    )


# =============================================================================
# PRESETS
# =============================================================================

LAYOUT_PRESETS: Dict[str, GridColumn] = {
    "FULL": GridColumn(1, 12),
    "HALF_LEFT": GridColumn(1, 6),
    "HALF_RIGHT": GridColumn(7, 6),
    "THIRD_LEFT": GridColumn(1, 4),
    "THIRD_CENTER": GridColumn(5, 4),
    "THIRD_RIGHT": GridColumn(9, 4),
    "SIDEBAR_LEFT": GridColumn(1, 3),
    "MAIN_RIGHT": GridColumn(4, 9),
    "MAIN_LEFT": GridColumn(1, 9),
    "SIDEBAR_RIGHT": GridColumn(10, 3),
    "CONTENT_NARROW": GridColumn(2, 10),
    "CONTENT_MEDIUM": GridColumn(3, 8),
    "CONTENT_TIGHT": GridColumn(4, 6),
}

# Short names used by strategies and callers
PRESET_ALIASES = {
    "full": "FULL",
    "narrow": "CONTENT_NARROW",
    "medium": "CONTENT_MEDIUM",
    "tight": "CONTENT_TIGHT",
}


def get_preset(name: str) -> GridColumn:
    """Look up a column preset by preset name or short alias."""
    key = PRESET_ALIASES.get(name.lower(), name.upper().replace("-", "_"))
    try:
        return LAYOUT_PRESETS[key]
    except KeyError:
        raise ValueError(f"Unknown grid preset: {name}. Available: {list(LAYOUT_PRESETS.keys())}") from None


# =============================================================================
# COLUMN / ROW MATH
# =============================================================================

def column_width(config: GridConfig) -> float:
    """Width of a single grid column."""
    total_gutter_width = (config.columns - 1) * config.gutter
    return (config.container_width - total_gutter_width) / config.columns


def validate_grid_column(column: GridColumn, config: GridConfig) -> bool:
    """True when the span fits inside the grid."""
    return (
        1 <= column.start <= config.columns
        and column.span >= 1
        and column.start + column.span - 1 <= config.columns
    )


def column_position(column: GridColumn, config: GridConfig) -> tuple:
    """(x, width) of a column span in canvas coordinates."""
    col_w = column_width(config)
    start_index = column.start - 1
    x = config.margin.left + start_index * col_w + start_index * config.gutter
    width = column.span * col_w + (column.span - 1) * config.gutter
    return x, width


def row_position(row: int, row_height: float, row_gutter: float, config: GridConfig) -> tuple:
    """(y, height) of a 1-based row of fixed height."""
    row_index = row - 1
    y = config.margin.top + row_index * row_height + row_index * row_gutter
    return y, row_height


def create_grid_box(
    preset: Union[str, GridColumn],
    config: GridConfig,
    height: float,
    y_offset: float = 0.0,
    alignment: HorizontalAlignment = HorizontalAlignment.LEFT,
    element_type: ElementType = ElementType.PARAGRAPH,
) -> ElementPosition:
    """
    Place a box on the grid.

    Args:
        preset: Preset name ("narrow", "FULL", ...) or GridColumn
        config: Grid configuration
        height: Requested height in inches
        y_offset: Distance below the top of the content area

    Returns:
        ElementPosition clipped to stay inside the content area

    Raises:
        ValueError: If the column span does not fit the grid
    """
    column = get_preset(preset) if isinstance(preset, str) else preset
    if not validate_grid_column(column, config):
        raise ValueError(f"Column span {column} does not fit a {config.columns}-column grid")

    x, width = column_position(column, config)
    y_offset = min(max(0.0, y_offset), config.container_height)
    height = max(0.0, min(height, config.container_height - y_offset))
    return ElementPosition(
        x=x,
        y=config.margin.top + y_offset,
        width=width,
        height=height,
        alignment=alignment,
        element_type=element_type,
    )


def create_multi_column_layout(
    columns: List[Union[str, GridColumn]],
    config: GridConfig,
    height: float,
    y_offset: float = 0.0,
) -> List[ElementPosition]:
    """One grid box per column span, all at the same vertical offset."""
    return [create_grid_box(column, config, height, y_offset) for column in columns]


def responsive_column(content_width: float, config: GridConfig) -> GridColumn:
    """
    Pick the widest preset that suits content of the given width.

    ≥12 columns → FULL, ≥8 → CONTENT_NARROW, ≥6 → CONTENT_MEDIUM,
    otherwise CONTENT_TIGHT.
    """
    col_w = column_width(config)
    max_columns = int(content_width // col_w) if col_w > 0 else 0
    if max_columns >= 12:
        return LAYOUT_PRESETS["FULL"]
    if max_columns >= 8:
        return LAYOUT_PRESETS["CONTENT_NARROW"]
    if max_columns >= 6:
        return LAYOUT_PRESETS["CONTENT_MEDIUM"]
    return LAYOUT_PRESETS["CONTENT_TIGHT"]


# =============================================================================
# CELL PARTITIONING
# =============================================================================

@dataclass(frozen=True)
class GridCell:
    """A single cell in the grid with its computed position."""
    row: int
    col: int
    x_inches: float
    y_inches: float
    width_inches: float
    height_inches: float

    @property
    def center_x(self) -> float:
        return self.x_inches + self.width_inches / 2

    @property
    def center_y(self) -> float:
        return self.y_inches + self.height_inches / 2

    def to_rect(self) -> Rect:
        return Rect(self.x_inches, self.y_inches, self.width_inches, self.height_inches)


@dataclass(frozen=True)
class GridLayout:
    """Result of partition_cells() with all cell positions."""
    cells: tuple
    num_rows: int
    num_cols: int
    cell_width: float
    cell_height: float
    total_width: float
    total_height: float

    def get_cell(self, row: int, col: int) -> Optional[GridCell]:
        """Get cell at specific row/column."""
        for cell in self.cells:
            if cell.row == row and cell.col == col:
                return cell
        return None

    def get_row(self, row: int) -> List[GridCell]:
        """Get all cells in a specific row."""
        return [c for c in self.cells if c.row == row]

    def get_column(self, col: int) -> List[GridCell]:
        """Get all cells in a specific column."""
        return [c for c in self.cells if c.col == col]


def partition_cells(area: Rect, num_cols: int, num_rows: int, gap: float) -> GridLayout:
    """
    Split a rectangle into num_cols x num_rows equal cells.

    Cells are separated by gap in both directions; the outer edges of the
    grid coincide with the area's edges. Row/column indices are zero-based.
    """
    if num_cols <= 0 or num_rows <= 0 or area.width <= EPSILON or area.height <= EPSILON:
        return GridLayout(
            cells=(),
            num_rows=0,
            num_cols=0,
            cell_width=0.0,
            cell_height=0.0,
            total_width=0.0,
            total_height=0.0,
        )

    # Shrink the gap when the area is too small to hold it
    gap_h = min(gap, area.width / (2 * num_cols)) if num_cols > 1 else 0.0
    gap_v = min(gap, area.height / (2 * num_rows)) if num_rows > 1 else 0.0

    cell_width = (area.width - gap_h * (num_cols - 1)) / num_cols
    cell_height = (area.height - gap_v * (num_rows - 1)) / num_rows

    cells = tuple(
        GridCell(
            row=row,
            col=col,
            x_inches=area.x + col * (cell_width + gap_h),
            y_inches=area.y + row * (cell_height + gap_v),
            width_inches=cell_width,
            height_inches=cell_height,
        )
        for row in range(num_rows)
        for col in range(num_cols)
    )
    return GridLayout(
        cells=cells,
        num_rows=num_rows,
        num_cols=num_cols,
        cell_width=cell_width,
        cell_height=cell_height,
        total_width=area.width,
        total_height=area.height,
    )
