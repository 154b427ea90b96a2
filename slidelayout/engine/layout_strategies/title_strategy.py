"""
title_strategy.py — Title slide.

The title itself is placed by the engine. This strategy adds the optional
subtitle: a centered box inset 10% on each side, directly below the title.
"""

from ..positioned import ElementType, HorizontalAlignment, VerticalAlignment
from ..units import CENTERED_INSET_RATIO, CENTERED_WIDTH_RATIO, SUBTITLE_HEIGHT
from .base_strategy import BaseLayoutStrategy, Placement, StrategyContext


class TitleStrategy(BaseLayoutStrategy):
    """Centered subtitle under a centered title."""

    def place(self, spec, ctx: StrategyContext) -> Placement:
        subtitle = spec.subtitle or spec.paragraph
        if not subtitle:
            return Placement()

        area = ctx.content_area
        element = self.text_element(
            ctx,
            x=area.x + area.width * CENTERED_INSET_RATIO,
            y=ctx.cursor_y,
            width=area.width * CENTERED_WIDTH_RATIO,
            height=SUBTITLE_HEIGHT,
            text=subtitle,
            role="subtitle",
            element_type=ElementType.SUBTITLE,
            alignment=HorizontalAlignment.CENTER,
            vertical_alignment=VerticalAlignment.MIDDLE,
        )
        return Placement(elements=(element,))
