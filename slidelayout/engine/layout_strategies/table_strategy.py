"""
table_strategy.py — Comparison table.

One full-width box, (rows + 1) × 0.4" tall (header row included) plus 0.2"
padding, clipped to the space left below the title.
"""

from ...errors import MalformedContentError
from ..positioned import ElementPosition, ElementType, HorizontalAlignment
from ..units import TABLE_PADDING, TABLE_ROW_HEIGHT
from .base_strategy import BaseLayoutStrategy, Placement, StrategyContext


class TableStrategy(BaseLayoutStrategy):
    """Single clipped table box."""

    def place(self, spec, ctx: StrategyContext) -> Placement:
        table = spec.table
        if table is None:
            return Placement().with_warning("Table slide has no table data")

        column_count = len(table.headers)
        for index, row in enumerate(table.rows):
            if column_count and len(row) != column_count:
                raise MalformedContentError(
                    f"Table row {index + 1} has {len(row)} cells but the header has {column_count}"
                )

        area = ctx.content_area
        table_height = (len(table.rows) + 1) * TABLE_ROW_HEIGHT + TABLE_PADDING
        element = ElementPosition(
            x=area.x,
            y=ctx.cursor_y,
            width=area.width,
            height=max(0.0, min(table_height, ctx.remaining_height)),
            alignment=HorizontalAlignment.CENTER,
            element_type=ElementType.TABLE,
            payload="table",
        )

        diagnostics = self.limit_diagnostics([
            (len(table.rows), "max_table_rows", "table rows"),
            (column_count, "max_table_columns", "table columns"),
        ])
        if table_height > ctx.remaining_height:
            diagnostics = diagnostics.with_warning(
                f"Table needs {table_height:.2f}in but only {ctx.remaining_height:.2f}in is available; rows will be clipped"
            )
        return Placement(elements=(element,), diagnostics=diagnostics)
