"""
chart_strategy.py — A single centered chart.

The chart box is inset 10% on each side and fills the remaining height less
a 0.5" reserve for axis labels and legends.
"""

from ..positioned import ElementPosition, ElementType, HorizontalAlignment
from ..units import CENTERED_INSET_RATIO, CENTERED_WIDTH_RATIO, CHART_BOTTOM_RESERVE
from .base_strategy import BaseLayoutStrategy, Placement, StrategyContext


class ChartStrategy(BaseLayoutStrategy):
    """Centered chart box."""

    def place(self, spec, ctx: StrategyContext) -> Placement:
        chart = spec.chart
        if chart is None:
            return Placement().with_warning("Chart slide has no chart data")

        area = ctx.content_area
        element = ElementPosition(
            x=area.x + area.width * CENTERED_INSET_RATIO,
            y=ctx.cursor_y,
            width=area.width * CENTERED_WIDTH_RATIO,
            height=max(0.0, ctx.remaining_height - CHART_BOTTOM_RESERVE),
            alignment=HorizontalAlignment.CENTER,
            element_type=ElementType.CHART,
            payload=chart.type,
        )
        diagnostics = self.limit_diagnostics([
            (len(chart.series), "max_chart_series", "chart series"),
            (len(chart.categories), "max_chart_categories", "chart categories"),
        ])
        if not chart.series:
            diagnostics = diagnostics.with_warning("Chart has no data series")
        return Placement(elements=(element,), diagnostics=diagnostics)
