"""
bullets_strategy.py — Title + bullet list.

One fixed-height row (0.4") per bullet with a 0.1" gap, full content width,
stacked from the cursor. Rows are never shrunk to fit; long lists overflow
and the engine reports it.
"""

from .base_strategy import BaseLayoutStrategy, Placement, StrategyContext


class BulletsStrategy(BaseLayoutStrategy):
    """Stacked bullet rows."""

    def place(self, spec, ctx: StrategyContext) -> Placement:
        bullets = [b for b in spec.bullets if b and b.strip()]
        if not bullets:
            return Placement().with_warning("Bullet slide has no bullets")

        area = ctx.content_area
        elements = self.stack_bullets(ctx, bullets, x=area.x, y=ctx.cursor_y, width=area.width)
        diagnostics = self.limit_diagnostics([(len(bullets), "max_bullets", "bullets")])
        return Placement(elements=elements, diagnostics=diagnostics)
