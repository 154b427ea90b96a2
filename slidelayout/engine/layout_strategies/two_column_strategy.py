"""
two_column_strategy.py — Two equal columns separated by the column gap.

Columns are the HALF_LEFT / HALF_RIGHT spans of the 12-column grid, whose
gutter is the layout's column gap, so each is (width - gap) / 2 wide. Each
column spans the remaining content height. A side is emitted only if its
sub-spec is present, so a left-only slide yields a single box at the left
column's x-offset.
"""

from ..grid_layout import create_grid_config, create_multi_column_layout
from .base_strategy import BaseLayoutStrategy, Placement, StrategyContext

COLUMN_PRESETS = ("HALF_LEFT", "HALF_RIGHT")


class TwoColumnStrategy(BaseLayoutStrategy):
    """Left/right column boxes."""

    def place(self, spec, ctx: StrategyContext) -> Placement:
        grid = create_grid_config(ctx.config)
        left_box, right_box = create_multi_column_layout(
            list(COLUMN_PRESETS),
            grid,
            height=ctx.remaining_height,
            y_offset=ctx.cursor_y - ctx.content_area.y,
        )

        sides = (
            ("left", spec.left, left_box),
            ("right", spec.right, right_box),
        )
        placement = Placement()
        for name, column, box in sides:
            if column is None:
                continue
            text = column.text
            placement = placement.with_elements([
                self.text_element(
                    ctx, x=box.x, y=box.y, width=box.width, height=box.height, text=text, payload=name,
                )
            ])
            if not text:
                placement = placement.with_warning(f"The {name} column is empty")

        if spec.left is None and spec.right is None:
            placement = placement.with_warning("Two-column slide has no column content")
        return placement
