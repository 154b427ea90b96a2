"""
base_strategy.py — Abstract base class for archetype layout strategies.

Every archetype has exactly one strategy. A strategy receives the content
spec and a StrategyContext (layout config, theme, measurer, vertical cursor
below the title) and returns a Placement: the content elements plus
diagnostics. Strategies are pure; they never mutate the context.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Sequence, Tuple

from ...theme.tokens import ThemeTokens
from ..layout_config import LayoutConfig, Rect
from ..positioned import (
    Diagnostics,
    ElementPosition,
    ElementType,
    HorizontalAlignment,
    VerticalAlignment,
)
from ..spacing import distribute_vertically
from ..text_measure import TextMeasurer
from ..typography import TextStyle, derive_text_style
from ..units import BULLET_GAP, BULLET_ROW_HEIGHT, CONTENT_LIMITS, EPSILON


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class StrategyContext:
    """
    Everything a strategy needs besides the content spec.

    cursor_y is the top of the free space below the title.
    """
    config: LayoutConfig
    theme: ThemeTokens
    measurer: TextMeasurer
    cursor_y: float

    @property
    def content_area(self) -> Rect:
        return self.config.content_area

    @property
    def remaining_height(self) -> float:
        """Content-area height left below the cursor."""
        return self.config.remaining_height(self.cursor_y)

    @property
    def free_area(self) -> Rect:
        """Content-area rectangle below the cursor."""
        area = self.content_area
        return Rect(area.x, self.cursor_y, area.width, max(0.0, self.remaining_height))

    def advanced(self, dy: float) -> "StrategyContext":
        return replace(self, cursor_y=self.cursor_y + dy)


@dataclass(frozen=True)
class Placement:
    """
    Result from strategy computation.

    Placements are combined with plus(); nothing is appended in place.
    """
    elements: Tuple[ElementPosition, ...] = ()
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def plus(self, other: "Placement") -> "Placement":
        return Placement(
            elements=self.elements + other.elements,
            diagnostics=self.diagnostics.merge(other.diagnostics),
        )

    def with_elements(self, elements: Iterable[ElementPosition]) -> "Placement":
        return replace(self, elements=self.elements + tuple(elements))

    def with_warning(self, message: str) -> "Placement":
        return replace(self, diagnostics=self.diagnostics.with_warning(message))

    @property
    def warnings(self) -> Tuple[str, ...]:
        return self.diagnostics.warnings


def combine(placements: Iterable[Placement]) -> Placement:
    """Concatenate placements in order."""
    result = Placement()
    for placement in placements:
        result = result.plus(placement)
    return result


# =============================================================================
# BASE STRATEGY
# =============================================================================

class BaseLayoutStrategy(ABC):
    """
    Abstract base class for archetype layout computation.

    Subclasses implement place(). Helpers below are shared by all strategies
    so that bullets, text boxes and limits behave the same everywhere.
    """

    @abstractmethod
    def place(self, spec, ctx: StrategyContext) -> Placement:
        """
        Compute content element positions for a slide.

        Args:
            spec: The archetype's content spec
            ctx: Layout config, theme, measurer and cursor

        Returns:
            Placement with content elements (title excluded) and diagnostics
        """

    # =========================================================================
    # HELPER METHODS (Available to all strategies)
    # =========================================================================

    def text_element(
        self,
        ctx: StrategyContext,
        x: float,
        y: float,
        width: float,
        height: float,
        text: Optional[str],
        role: str = "body",
        element_type: ElementType = ElementType.PARAGRAPH,
        alignment: HorizontalAlignment = HorizontalAlignment.LEFT,
        vertical_alignment: VerticalAlignment = VerticalAlignment.TOP,
        style: Optional[TextStyle] = None,
        content_length: Optional[int] = None,
        **extra,
    ) -> ElementPosition:
        """Element with a style derived for its role and text length."""
        if style is None:
            length = content_length if content_length is not None else len(text or "")
            style = derive_text_style(role, ctx.theme, content_length=length)
        return ElementPosition(
            x=x,
            y=y,
            width=width,
            height=height,
            alignment=alignment,
            vertical_alignment=vertical_alignment,
            element_type=element_type,
            text=text,
            style=style,
            **extra,
        )

    def stack_bullets(
        self,
        ctx: StrategyContext,
        bullets: Sequence[str],
        x: float,
        y: float,
        width: float,
        row_height: float = BULLET_ROW_HEIGHT,
        gap: float = BULLET_GAP,
        role: str = "body",
        **extra,
    ) -> Tuple[ElementPosition, ...]:
        """One box per bullet, stacked top-to-bottom from y."""
        # All bullets share one style so the list reads evenly
        style = derive_text_style(role, ctx.theme, content_length=sum(len(b) for b in bullets))
        rows = [
            self.text_element(
                ctx,
                x=x,
                y=y,
                width=width,
                height=row_height,
                text=bullet,
                element_type=ElementType.BULLET,
                style=style,
                **extra,
            )
            for bullet in bullets
        ]
        # Rows keep their height even past the content bottom; the engine reports overflow
        return tuple(distribute_vertically(
            rows, ctx.config.content_bottom - y, gap, alignment="start", container_top=y,
        ))

    def fit_style(
        self,
        ctx: StrategyContext,
        text: str,
        style: TextStyle,
        width: float,
        height: float,
        min_size: int = 12,
    ) -> TextStyle:
        """Shrink a style one point at a time until the measurer says it fits."""
        candidate = style
        while (
            candidate.font_size > min_size
            and ctx.measurer.estimate_height(text, candidate, width) > height + EPSILON
        ):
            candidate = replace(candidate, font_size=candidate.font_size - 1)
        return candidate

    def limit_warning(self, count: int, limit_key: str, what: str) -> Optional[str]:
        """Warning text when count exceeds a content limit, else None."""
        limit = CONTENT_LIMITS[limit_key]
        if count > limit:
            return f"Too many {what} ({count}); at most {limit} are recommended per slide"
        return None

    def limit_diagnostics(self, checks: Iterable[Tuple[int, str, str]]) -> Diagnostics:
        diagnostics = Diagnostics()
        for count, limit_key, what in checks:
            message = self.limit_warning(count, limit_key, what)
            if message:
                diagnostics = diagnostics.with_warning(message)
        return diagnostics
