"""
positioned.py — The contract between the layout engine and its consumers.

The layout engine outputs LayoutOutcome values. Serializers and preview
renderers consume LayoutResult.content verbatim — they NEVER compute
positions themselves.

All coordinates are in INCHES (converted to EMU/pixels at render time).
Every value here is immutable; diagnostics are accumulated by returning new
Diagnostics values rather than appending to shared lists.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .typography import TextStyle
from .units import EPSILON, inches_to_emu


class ElementType(Enum):
    """Kinds of placed content."""
    TITLE = "title"
    SUBTITLE = "subtitle"
    PARAGRAPH = "paragraph"
    BULLET = "bullet"
    IMAGE = "image"
    CHART = "chart"
    TABLE = "table"
    CELL = "cell"               # Grid cell frame (border/background)
    HEADER = "header"           # Grid cell or column heading
    METRIC = "metric"           # Metric card
    INDICATOR = "indicator"     # Trend indicator layered on a metric card
    PLACEHOLDER = "placeholder"  # Empty or degraded slot
    BACKGROUND = "background"   # Full-canvas background fill


class HorizontalAlignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlignment(Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


# =============================================================================
# ELEMENT POSITION
# =============================================================================

@dataclass(frozen=True)
class ElementPosition:
    """
    A fully positioned, render-ready content block.

    All position and size values are in INCHES. Two elements may only share
    area when they are explicitly layered with different z_index values.
    """
    x: float
    y: float
    width: float
    height: float
    z_index: Optional[int] = None
    alignment: HorizontalAlignment = HorizontalAlignment.LEFT
    vertical_alignment: VerticalAlignment = VerticalAlignment.TOP
    element_type: ElementType = ElementType.PARAGRAPH
    text: Optional[str] = None              # Text the serializer renders in the box
    style: Optional[TextStyle] = None       # Text style (None for images/charts)
    payload: Optional[str] = None           # Key into the spec: image src, chart id, cell:r,c
    fill_color: Optional[str] = None        # Card/cell background

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def area(self) -> float:
        return max(0.0, self.width) * max(0.0, self.height)

    @property
    def layer(self) -> int:
        """Effective z order (unlayered elements sit on layer 0)."""
        return self.z_index or 0

    def intersection_area(self, other: "ElementPosition") -> float:
        """Area shared with another element (0 when they only touch)."""
        overlap_w = min(self.right_edge, other.right_edge) - max(self.x, other.x)
        overlap_h = min(self.bottom_edge, other.bottom_edge) - max(self.y, other.y)
        if overlap_w <= EPSILON or overlap_h <= EPSILON:
            return 0.0
        return overlap_w * overlap_h

    def overlaps(self, other: "ElementPosition") -> bool:
        return self.intersection_area(other) > 0.0

    def is_within(self, left: float, top: float, right: float, bottom: float) -> bool:
        """True when the element lies inside the given rectangle."""
        return (
            self.x >= left - EPSILON
            and self.y >= top - EPSILON
            and self.right_edge <= right + EPSILON
            and self.bottom_edge <= bottom + EPSILON
        )

    def moved(self, dx: float = 0.0, dy: float = 0.0) -> "ElementPosition":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def to_emu(self) -> Dict[str, int]:
        """Position and size in EMU for presentation-file serializers."""
        return {
            "x": inches_to_emu(self.x),
            "y": inches_to_emu(self.y),
            "width": inches_to_emu(self.width),
            "height": inches_to_emu(self.height),
        }

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "alignment": self.alignment.value,
            "verticalAlignment": self.vertical_alignment.value,
            "type": self.element_type.value,
        }
        if self.z_index is not None:
            data["zIndex"] = self.z_index
        if self.text is not None:
            data["text"] = self.text
        if self.style is not None:
            data["style"] = self.style.to_dict()
        if self.payload is not None:
            data["payload"] = self.payload
        if self.fill_color is not None:
            data["fillColor"] = self.fill_color
        return data


def to_emu(position: ElementPosition) -> Dict[str, int]:
    """Convert an element's geometry to EMU."""
    return position.to_emu()


# =============================================================================
# DIAGNOSTICS
# =============================================================================

@dataclass(frozen=True)
class Diagnostics:
    """
    Immutable warnings/errors/recommendations.

    Each with_* method returns a new value; merge() concatenates preserving
    order.
    """
    warnings: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    def with_warning(self, message: str) -> "Diagnostics":
        return replace(self, warnings=self.warnings + (message,))

    def with_warnings(self, messages: Iterable[str]) -> "Diagnostics":
        return replace(self, warnings=self.warnings + tuple(messages))

    def with_error(self, message: str) -> "Diagnostics":
        return replace(self, errors=self.errors + (message,))

    def with_recommendation(self, message: str) -> "Diagnostics":
        return replace(self, recommendations=self.recommendations + (message,))

    def merge(self, other: "Diagnostics") -> "Diagnostics":
        return Diagnostics(
            warnings=self.warnings + other.warnings,
            errors=self.errors + other.errors,
            recommendations=self.recommendations + other.recommendations,
        )

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


# =============================================================================
# LAYOUT RESULT
# =============================================================================

@dataclass(frozen=True)
class LayoutResult:
    """
    Geometry for one slide.

    content excludes the title; boxes is the title followed by content.
    """
    title: ElementPosition
    content: Tuple[ElementPosition, ...] = ()
    background: Optional[ElementPosition] = None
    total_height: float = 0.0
    is_overflowing: bool = False
    recommendations: Tuple[str, ...] = ()

    @property
    def boxes(self) -> Tuple[ElementPosition, ...]:
        return (self.title,) + self.content

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title.to_dict(),
            "content": [c.to_dict() for c in self.content],
            "background": self.background.to_dict() if self.background else None,
            "totalHeight": self.total_height,
            "isOverflowing": self.is_overflowing,
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class LayoutMetadata:
    """Per-slide build diagnostics."""
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    shape_count: int = 0
    used_text: int = 0       # Characters placed on the slide
    overflow_text: int = 0   # Characters estimated not to fit their box

    def to_dict(self) -> Dict[str, Any]:
        return {
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "shapeCount": self.shape_count,
            "usedText": self.used_text,
            "overflowText": self.overflow_text,
        }


# =============================================================================
# OUTCOMES
# =============================================================================

@dataclass(frozen=True)
class LayoutSuccess:
    """Layout computed by the archetype's strategy."""
    layout: LayoutResult
    metadata: LayoutMetadata
    archetype: str
    kind: str = field(default="success", init=False)

    @property
    def is_degraded(self) -> bool:
        return False


@dataclass(frozen=True)
class LayoutDegraded:
    """
    Title-only fallback produced when a strategy failed.

    reason carries the failure message; it is also recorded in
    metadata.errors.
    """
    layout: LayoutResult
    metadata: LayoutMetadata
    archetype: str
    reason: str
    kind: str = field(default="degraded", init=False)

    @property
    def is_degraded(self) -> bool:
        return True


LayoutOutcome = Union[LayoutSuccess, LayoutDegraded]
