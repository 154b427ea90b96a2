"""
paragraph_strategy.py — Paragraph slides and the single-column fallback.

ParagraphStrategy sizes one paragraph box to its estimated text height.
SingleColumnStrategy handles unmatched archetypes: a fixed paragraph box
followed by stacked bullets.
"""

from ..positioned import ElementType
from ..typography import derive_text_style
from ..units import MIN_PARAGRAPH_HEIGHT, PARAGRAPH_HEIGHT, clamp
from .base_strategy import BaseLayoutStrategy, Placement, StrategyContext


class ParagraphStrategy(BaseLayoutStrategy):
    """Title + one paragraph sized to its text."""

    def place(self, spec, ctx: StrategyContext) -> Placement:
        if not spec.paragraph:
            return Placement().with_warning("Paragraph slide has no paragraph text")

        area = ctx.content_area
        style = derive_text_style("body", ctx.theme, content_length=len(spec.paragraph))
        needed = ctx.measurer.estimate_height(spec.paragraph, style, area.width)
        # Never shorter than the minimum; never taller than the space left unless it must be
        height = clamp(needed, MIN_PARAGRAPH_HEIGHT, max(MIN_PARAGRAPH_HEIGHT, ctx.remaining_height))

        element = self.text_element(
            ctx,
            x=area.x,
            y=ctx.cursor_y,
            width=area.width,
            height=height,
            text=spec.paragraph,
            style=style,
        )
        return Placement(elements=(element,))


class SingleColumnStrategy(BaseLayoutStrategy):
    """Paragraph box (if any) followed by bullet rows (if any)."""

    def place(self, spec, ctx: StrategyContext) -> Placement:
        area = ctx.content_area
        placement = Placement()
        paragraph = getattr(spec, "paragraph", None)
        bullets = [b for b in getattr(spec, "bullets", ()) if b and b.strip()]

        if paragraph:
            placement = placement.with_elements([
                self.text_element(
                    ctx,
                    x=area.x,
                    y=ctx.cursor_y,
                    width=area.width,
                    height=PARAGRAPH_HEIGHT,
                    text=paragraph,
                    element_type=ElementType.PARAGRAPH,
                )
            ])
            ctx = ctx.advanced(PARAGRAPH_HEIGHT + ctx.config.spacing.element_spacing)

        if bullets:
            placement = placement.with_elements(
                self.stack_bullets(ctx, bullets, x=area.x, y=ctx.cursor_y, width=area.width)
            )
            message = self.limit_warning(len(bullets), "max_bullets", "bullets")
            if message:
                placement = placement.with_warning(message)

        if not placement.elements:
            placement = placement.with_warning("Slide has no body content")
        return placement
