"""
metrics_strategy.py — KPI dashboards built from metric cards.

An optional subtitle strip sits under the title; the cards fill what is left
of the content area in one of four arrangements:

    row       one row, equal widths
    column    one centered column at 80% width
    featured  one large card, up to four supporting cards below it
    grid      max_per_row cards per row, as many rows as needed

Trend arrows are separate INDICATOR elements layered above their card.
"""

import math
from typing import List, Tuple

from ..layout_config import Rect
from ..positioned import (
    ElementPosition,
    ElementType,
    HorizontalAlignment,
    VerticalAlignment,
)
from ..typography import derive_text_style
from ..units import CONTENT_LIMITS, TREND_INDICATOR_SIZE
from .base_strategy import BaseLayoutStrategy, Placement, StrategyContext

SUBTITLE_STRIP_HEIGHT = 0.5
MIN_CARD_HEIGHT = 0.3
MAX_ROW_CARD_HEIGHT = 1.5
MAX_COLUMN_CARD_HEIGHT = 1.0
MAX_GRID_CARD_HEIGHT = 1.2
MAX_SUPPORTING_METRICS = 4

CARD_Z = 1
INDICATOR_Z = 2


def _value_text(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class MetricsStrategy(BaseLayoutStrategy):
    """Metric cards in row/column/featured/grid arrangements."""

    def place(self, spec, ctx: StrategyContext) -> Placement:
        area = ctx.content_area
        placement = Placement()

        if spec.subtitle:
            subtitle = self.text_element(
                ctx,
                x=area.x,
                y=ctx.cursor_y,
                width=area.width,
                height=min(SUBTITLE_STRIP_HEIGHT, max(0.0, ctx.remaining_height)),
                text=spec.subtitle,
                role="subtitle",
                element_type=ElementType.SUBTITLE,
                vertical_alignment=VerticalAlignment.MIDDLE,
                style=derive_text_style(
                    "subtitle", ctx.theme, color=ctx.theme.palette.text.secondary,
                    content_length=len(spec.subtitle),
                ),
            )
            placement = placement.with_elements([subtitle])
            ctx = ctx.advanced(SUBTITLE_STRIP_HEIGHT + ctx.theme.spacing.md)

        metrics = list(spec.metrics)
        if not metrics:
            return placement.plus(self._empty(ctx)).with_warning("No metrics provided")

        if len(metrics) > CONTENT_LIMITS["max_metrics"]:
            placement = placement.with_warning(
                f"Too many metrics ({len(metrics)}) may reduce readability"
            )

        arrangement = getattr(spec.arrangement, "value", spec.arrangement)
        builder = {
            "row": self._row_boxes,
            "column": self._column_boxes,
            "featured": self._featured_boxes,
        }.get(arrangement, self._grid_boxes)
        boxes, shown = builder(spec, len(metrics), ctx)

        if shown < len(metrics):
            placement = placement.with_warning(
                f"Limited supporting metrics to {MAX_SUPPORTING_METRICS} in featured layout"
            )

        for index, (metric, box) in enumerate(zip(metrics[:shown], boxes)):
            # Supporting cards in the featured arrangement use the neutral surface
            neutral = arrangement == "featured" and index > 0
            placement = placement.with_elements(self._card(spec, metric, box, ctx, neutral))
        return placement

    # =========================================================================
    # ARRANGEMENTS
    # =========================================================================

    def _available(self, ctx: StrategyContext) -> float:
        return max(0.0, ctx.remaining_height)

    def _row_boxes(self, spec, count: int, ctx: StrategyContext) -> Tuple[List[Rect], int]:
        area = ctx.content_area
        gap = ctx.theme.spacing.md
        width = max(0.0, (area.width - (count - 1) * gap) / count)
        height = max(MIN_CARD_HEIGHT, min(MAX_ROW_CARD_HEIGHT, self._available(ctx) * 0.8))
        boxes = [Rect(area.x + i * (width + gap), ctx.cursor_y, width, height) for i in range(count)]
        return boxes, count

    def _column_boxes(self, spec, count: int, ctx: StrategyContext) -> Tuple[List[Rect], int]:
        area = ctx.content_area
        gap = ctx.theme.spacing.sm
        width = area.width * 0.8
        height = max(MIN_CARD_HEIGHT, min(MAX_COLUMN_CARD_HEIGHT, self._available(ctx) / count - gap))
        x = area.x + (area.width - width) / 2
        boxes = [Rect(x, ctx.cursor_y + i * (height + gap), width, height) for i in range(count)]
        return boxes, count

    def _featured_boxes(self, spec, count: int, ctx: StrategyContext) -> Tuple[List[Rect], int]:
        area = ctx.content_area
        available = self._available(ctx)
        featured_width = area.width * 0.6
        featured_height = max(MIN_CARD_HEIGHT, available * 0.5)
        boxes = [Rect(area.x + (area.width - featured_width) / 2, ctx.cursor_y, featured_width, featured_height)]

        supporting = min(count - 1, MAX_SUPPORTING_METRICS)
        if supporting > 0:
            slot = area.width / supporting
            y = ctx.cursor_y + featured_height + ctx.theme.spacing.lg
            height = max(MIN_CARD_HEIGHT, available * 0.3)
            boxes.extend(Rect(area.x + i * slot, y, slot * 0.9, height) for i in range(supporting))
        return boxes, 1 + supporting

    def _grid_boxes(self, spec, count: int, ctx: StrategyContext) -> Tuple[List[Rect], int]:
        area = ctx.content_area
        gap = ctx.theme.spacing.md
        per_row = min(spec.max_per_row, count)
        rows = math.ceil(count / per_row)
        width = (area.width - (per_row - 1) * gap) / per_row
        height = max(MIN_CARD_HEIGHT, min(MAX_GRID_CARD_HEIGHT, (self._available(ctx) - (rows - 1) * gap) / rows))
        boxes = [
            Rect(
                area.x + (i % per_row) * (width + gap),
                ctx.cursor_y + (i // per_row) * (height + gap),
                width,
                height,
            )
            for i in range(count)
        ]
        return boxes, count

    # =========================================================================
    # CARDS
    # =========================================================================

    def _card_colors(self, metric, ctx: StrategyContext, neutral: bool) -> Tuple[str, str]:
        """(fill, text color) for a card."""
        palette = ctx.theme.palette
        if neutral:
            return palette.surface, palette.text.primary
        fills = {
            "primary": palette.primary,
            "success": palette.semantic.success,
            "warning": palette.semantic.warning,
            "error": palette.semantic.error,
            "info": palette.semantic.info,
        }
        return fills[metric.color or "primary"], palette.text.inverse

    def _card(self, spec, metric, box: Rect, ctx: StrategyContext, neutral: bool) -> Tuple[ElementPosition, ...]:
        lines = [_value_text(metric.value), metric.label]
        if metric.description and not neutral:
            lines.append(metric.description)
        if spec.show_targets and metric.target is not None:
            lines.append(f"Target: {_value_text(metric.target)}")
        text = "\n".join(lines)

        fill, text_color = self._card_colors(metric, ctx, neutral)
        style = derive_text_style("heading", ctx.theme, color=text_color, bold=True, content_length=len(text))
        style = self.fit_style(ctx, text, style, box.width, box.height)
        card = self.text_element(
            ctx, box.x, box.y, box.width, box.height, text,
            element_type=ElementType.METRIC,
            alignment=HorizontalAlignment.CENTER,
            vertical_alignment=VerticalAlignment.MIDDLE,
            style=style,
            z_index=CARD_Z,
            fill_color=fill,
        )
        if not (spec.show_trends and metric.trend):
            return (card,)
        return (card, self._trend_indicator(metric.trend, box, ctx))

    def _trend_indicator(self, trend, box: Rect, ctx: StrategyContext) -> ElementPosition:
        palette = ctx.theme.palette
        color = {
            "up": palette.semantic.success,
            "down": palette.semantic.error,
        }.get(trend.direction, palette.text.muted)
        inset = ctx.theme.spacing.xs
        size = min(TREND_INDICATOR_SIZE, box.width / 4, box.height / 4)
        text = f"{trend.percentage:g}%" if trend.percentage is not None else None
        return ElementPosition(
            x=box.x + box.width - size - inset,
            y=box.y + inset,
            width=size,
            height=size,
            z_index=INDICATOR_Z,
            element_type=ElementType.INDICATOR,
            text=text,
            payload=f"trend:{trend.direction}",
            fill_color=color,
        )

    def _empty(self, ctx: StrategyContext) -> Placement:
        area = ctx.free_area
        message = "No metrics data available"
        placeholder = self.text_element(
            ctx, area.x, area.y, area.width, area.height, message,
            element_type=ElementType.PLACEHOLDER,
            alignment=HorizontalAlignment.CENTER,
            vertical_alignment=VerticalAlignment.MIDDLE,
        )
        return Placement(elements=(placeholder,))
