"""
grid_cells_strategy.py — User-specified N x M grid of content cells.

The free content area is partitioned into columns x rows cells separated by
the spacing preset gap (tight → sm, normal → md, spacious → lg from the theme
scale). Each declared cell gets its sub-box and content built from the same
primitives as whole slides (text boxes, bullet rows, metric cards, image and
chart boxes).

A bad cell never fails the slide: cells missing the data their type needs,
and grid positions nobody declared, become empty placeholders. Cells outside
the grid or declared twice are skipped with a warning.
"""

from typing import Dict, List, Optional, Tuple

from ..grid_layout import GridCell, partition_cells
from ..layout_config import Rect
from ..positioned import (
    ElementPosition,
    ElementType,
    HorizontalAlignment,
    VerticalAlignment,
)
from ..typography import derive_text_style
from ..units import TREND_INDICATOR_SIZE
from .base_strategy import BaseLayoutStrategy, Placement, StrategyContext, combine

# Cell spacing preset → theme spacing scale name
CELL_SPACING_SCALE = {
    "tight": "sm",
    "normal": "md",
    "spacious": "lg",
}

# Field each cell type requires
REQUIRED_FIELD = {
    "header": "title",
    "bullets": "bullets",
    "paragraph": "paragraph",
    "metric": "metric",
    "image": "image",
    "chart": "chart",
}

CELL_TITLE_HEIGHT = 0.35
CELL_TITLE_RATIO = 0.3
CELL_BULLET_ROW_HEIGHT = 0.4

# Layering when borders are drawn: frame behind content, indicators on top
FRAME_Z = 0
CONTENT_Z = 1
INDICATOR_Z = 2


def _enum_value(value) -> str:
    return getattr(value, "value", value)


class GridCellsStrategy(BaseLayoutStrategy):
    """Partitioned grid with per-cell content."""

    def place(self, spec, ctx: StrategyContext) -> Placement:
        grid = spec.grid
        spacing_name = CELL_SPACING_SCALE.get(_enum_value(grid.cell_spacing), "md")
        gap = ctx.theme.spacing.get(spacing_name)
        layout = partition_cells(ctx.free_area, grid.columns, grid.rows, gap)

        if not layout.cells:
            return Placement().with_warning("No space left below the title for the grid")

        declared, placement = self._index_cells(grid)
        content_z = CONTENT_Z if grid.show_borders else None

        undeclared = 0
        cell_placements: List[Placement] = []
        for cell in layout.cells:
            if grid.show_borders:
                cell_placements.append(Placement(elements=(self._frame(cell, declared.get((cell.row, cell.col)), ctx),)))

            cell_spec = declared.get((cell.row, cell.col))
            if cell_spec is None:
                undeclared += 1
                cell_placements.append(Placement(elements=(self._placeholder(cell.to_rect(), cell, content_z),)))
                continue
            cell_placements.append(self._place_cell(cell_spec, cell, ctx, content_z))

        placement = placement.plus(combine(cell_placements))
        if undeclared:
            placement = placement.with_warning(
                f"{undeclared} grid cell(s) have no content and were left empty"
            )
        return placement

    # =========================================================================
    # CELL INDEXING
    # =========================================================================

    def _index_cells(self, grid) -> Tuple[Dict[Tuple[int, int], object], Placement]:
        declared: Dict[Tuple[int, int], object] = {}
        placement = Placement()
        for cell in grid.cells:
            key = (cell.row, cell.column)
            if not (0 <= cell.row < grid.rows and 0 <= cell.column < grid.columns):
                placement = placement.with_warning(
                    f"Cell ({cell.row},{cell.column}) is outside the {grid.columns}x{grid.rows} grid and was skipped"
                )
                continue
            if key in declared:
                placement = placement.with_warning(
                    f"Cell ({cell.row},{cell.column}) is declared more than once; keeping the first"
                )
                continue
            declared[key] = cell
        return declared, placement

    # =========================================================================
    # CELL CONTENT
    # =========================================================================

    def _place_cell(self, cell_spec, cell: GridCell, ctx: StrategyContext, z_index: Optional[int]) -> Placement:
        cell_type = _enum_value(cell_spec.type)
        inner = self._inset(cell.to_rect(), ctx.theme.spacing.xs)

        if cell_type == "empty":
            return Placement(elements=(self._placeholder(inner, cell, z_index),))

        required = REQUIRED_FIELD.get(cell_type)
        if required is None or not getattr(cell_spec, required, None):
            return Placement(elements=(self._placeholder(inner, cell, z_index),)).with_warning(
                f"Cell ({cell.row},{cell.col}) of type '{cell_type}' is missing its {required or 'type'}; left empty"
            )

        styling = cell_spec.styling
        alignment = HorizontalAlignment(styling.alignment) if styling else HorizontalAlignment.LEFT
        payload = f"cell:{cell.row},{cell.col}"
        builder = getattr(self, f"_place_{cell_type}")
        return builder(cell_spec, inner, cell, ctx, z_index, alignment, payload)

    def _place_header(self, cell_spec, inner, cell, ctx, z_index, alignment, payload) -> Placement:
        style = self._cell_style("heading", cell_spec, ctx, len(cell_spec.title))
        style = self.fit_style(ctx, cell_spec.title, style, inner.width, inner.height)
        header = self.text_element(
            ctx, inner.x, inner.y, inner.width, inner.height, cell_spec.title,
            element_type=ElementType.HEADER,
            alignment=alignment,
            vertical_alignment=VerticalAlignment.MIDDLE,
            style=style,
            z_index=z_index,
            payload=payload,
            fill_color=self._highlight_fill(cell_spec, ctx),
        )
        return Placement(elements=(header,))

    def _place_bullets(self, cell_spec, inner, cell, ctx, z_index, alignment, payload) -> Placement:
        elements, body = self._cell_title(cell_spec, inner, ctx, z_index, alignment, payload)
        bullets = list(cell_spec.bullets)
        gap = min(ctx.theme.spacing.xs, body.height / (2 * len(bullets)))
        row_height = min(CELL_BULLET_ROW_HEIGHT, (body.height - gap * (len(bullets) - 1)) / len(bullets))
        elements += self.stack_bullets(
            ctx, bullets, body.x, body.y, body.width,
            row_height=row_height, gap=gap, role="small",
            z_index=z_index, payload=payload,
        )
        return Placement(elements=elements)

    def _place_paragraph(self, cell_spec, inner, cell, ctx, z_index, alignment, payload) -> Placement:
        elements, body = self._cell_title(cell_spec, inner, ctx, z_index, alignment, payload)
        paragraph = self.text_element(
            ctx, body.x, body.y, body.width, body.height, cell_spec.paragraph,
            role="small",
            alignment=alignment,
            style=self._cell_style("small", cell_spec, ctx, len(cell_spec.paragraph)),
            z_index=z_index,
            payload=payload,
        )
        return Placement(elements=elements + (paragraph,))

    def _place_metric(self, cell_spec, inner, cell, ctx, z_index, alignment, payload) -> Placement:
        metric = cell_spec.metric
        value_height = inner.height * 0.6
        value_style = self._cell_style("title", cell_spec, ctx, len(metric.value))
        value_style = self.fit_style(ctx, metric.value, value_style, inner.width, value_height)
        value = self.text_element(
            ctx, inner.x, inner.y, inner.width, value_height, metric.value,
            element_type=ElementType.METRIC,
            alignment=HorizontalAlignment.CENTER,
            vertical_alignment=VerticalAlignment.BOTTOM,
            style=value_style,
            z_index=z_index,
            payload=payload,
            fill_color=self._highlight_fill(cell_spec, ctx),
        )
        label = self.text_element(
            ctx, inner.x, inner.y + value_height, inner.width, inner.height - value_height, metric.label,
            role="small",
            element_type=ElementType.PARAGRAPH,
            alignment=HorizontalAlignment.CENTER,
            z_index=z_index,
            payload=payload,
        )
        elements = (value, label)
        if metric.trend and metric.trend != "neutral":
            size = min(TREND_INDICATOR_SIZE, inner.width / 4, inner.height / 4)
            semantic = ctx.theme.palette.semantic
            elements += (ElementPosition(
                x=inner.x + inner.width - size,
                y=inner.y,
                width=size,
                height=size,
                z_index=INDICATOR_Z,
                element_type=ElementType.INDICATOR,
                payload=f"trend:{metric.trend}",
                fill_color=semantic.success if metric.trend == "up" else semantic.error,
            ),)
        return Placement(elements=elements)

    def _place_image(self, cell_spec, inner, cell, ctx, z_index, alignment, payload) -> Placement:
        elements, body = self._cell_title(cell_spec, inner, ctx, z_index, alignment, payload)
        image = ElementPosition(
            x=body.x, y=body.y, width=body.width, height=body.height,
            z_index=z_index,
            alignment=HorizontalAlignment.CENTER,
            element_type=ElementType.IMAGE,
            payload=cell_spec.image.src,
        )
        return Placement(elements=elements + (image,))

    def _place_chart(self, cell_spec, inner, cell, ctx, z_index, alignment, payload) -> Placement:
        elements, body = self._cell_title(cell_spec, inner, ctx, z_index, alignment, payload)
        chart = ElementPosition(
            x=body.x, y=body.y, width=body.width, height=body.height,
            z_index=z_index,
            alignment=HorizontalAlignment.CENTER,
            element_type=ElementType.CHART,
            payload=cell_spec.chart.type,
        )
        placement = Placement(elements=elements + (chart,))
        message = self.limit_warning(len(cell_spec.chart.series), "max_chart_series", "chart series")
        return placement.with_warning(message) if message else placement

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _cell_title(self, cell_spec, inner: Rect, ctx, z_index, alignment, payload) -> Tuple[tuple, Rect]:
        """Optional title strip at the top of a cell; returns it and the body rect below."""
        if not cell_spec.title:
            return (), inner
        height = min(CELL_TITLE_HEIGHT, inner.height * CELL_TITLE_RATIO)
        style = self._cell_style("subheading", cell_spec, ctx, len(cell_spec.title))
        title = self.text_element(
            ctx, inner.x, inner.y, inner.width, height, cell_spec.title,
            element_type=ElementType.HEADER,
            alignment=alignment,
            style=self.fit_style(ctx, cell_spec.title, style, inner.width, height),
            z_index=z_index,
            payload=payload,
        )
        body = Rect(inner.x, inner.y + height, inner.width, max(0.0, inner.height - height))
        return (title,), body

    def _cell_style(self, role: str, cell_spec, ctx, length: int):
        styling = cell_spec.styling
        bold = styling is not None and styling.emphasis in ("bold", "highlight")
        color = styling.text_color if styling else None
        if styling is not None and styling.emphasis == "highlight" and color is None:
            color = ctx.theme.palette.text.inverse
        return derive_text_style(role, ctx.theme, color=color, bold=bold, content_length=length)

    def _highlight_fill(self, cell_spec, ctx) -> Optional[str]:
        styling = cell_spec.styling
        if styling is None:
            return None
        if styling.background_color:
            return styling.background_color
        if styling.emphasis == "highlight":
            return ctx.theme.palette.accent
        return None

    def _frame(self, cell: GridCell, cell_spec, ctx) -> ElementPosition:
        fill = None
        if cell_spec is not None and cell_spec.styling is not None:
            fill = cell_spec.styling.background_color
        return ElementPosition(
            x=cell.x_inches,
            y=cell.y_inches,
            width=cell.width_inches,
            height=cell.height_inches,
            z_index=FRAME_Z,
            element_type=ElementType.CELL,
            payload=f"cell:{cell.row},{cell.col}",
            fill_color=fill or ctx.theme.palette.surface,
        )

    @staticmethod
    def _placeholder(rect: Rect, cell: GridCell, z_index: Optional[int]) -> ElementPosition:
        return ElementPosition(
            x=rect.x,
            y=rect.y,
            width=rect.width,
            height=rect.height,
            z_index=z_index,
            element_type=ElementType.PLACEHOLDER,
            payload=f"cell:{cell.row},{cell.col}",
        )

    @staticmethod
    def _inset(rect: Rect, padding: float) -> Rect:
        pad = min(padding, rect.width / 4, rect.height / 4)
        return Rect(rect.x + pad, rect.y + pad, rect.width - 2 * pad, rect.height - 2 * pad)
