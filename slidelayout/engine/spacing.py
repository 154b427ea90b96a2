"""
spacing.py — Spacing scale helpers and box distribution.

Spacing values come from the theme's named scale (xs..xxxl); raw numbers
(inches) are accepted wherever a scale name is.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Union

from ..theme.tokens import ThemeTokens
from .positioned import ElementPosition

SpacingValue = Union[str, float]

DISTRIBUTIONS = ("start", "center", "end", "space-between", "space-around")

# Named spacing roles → scale names
SPACING_PRESETS = {
    "TITLE_TOP": "xl",
    "TITLE_CONTENT": "lg",
    "SECTION": "md",
    "LIST_ITEM": "sm",
    "CARD_PADDING": "lg",
    "BUTTON_PADDING": "md",
    "FOOTER_BOTTOM": "md",
}


@dataclass(frozen=True)
class Insets:
    """Top/right/bottom/left distances in inches."""
    top: float
    right: float
    bottom: float
    left: float


def get_spacing(value: str, theme: ThemeTokens) -> float:
    """Resolve a spacing scale name (xs..xxxl) to inches."""
    return theme.spacing.get(value)


def create_spacing(
    top: SpacingValue,
    right: Optional[SpacingValue] = None,
    bottom: Optional[SpacingValue] = None,
    left: Optional[SpacingValue] = None,
    theme: Optional[ThemeTokens] = None,
) -> Insets:
    """
    Build insets with CSS shorthand semantics.

    create_spacing("md") is uniform; create_spacing("md", "lg") is vertical /
    horizontal; missing sides mirror their opposite side.

    Raises:
        ValueError: If a scale name is used without a theme
    """
    def resolve(value: SpacingValue) -> float:
        if isinstance(value, (int, float)):
            return float(value)
        if theme is None:
            raise ValueError("Theme required for spacing value")
        return get_spacing(value, theme)

    right_value = right if right is not None else top
    return Insets(
        top=resolve(top),
        right=resolve(right_value),
        bottom=resolve(bottom if bottom is not None else top),
        left=resolve(left if left is not None else right_value),
    )


def apply_padding(box: ElementPosition, padding: Insets) -> ElementPosition:
    """Shrink a box by its inner padding."""
    return replace(
        box,
        x=box.x + padding.left,
        y=box.y + padding.top,
        width=max(0.0, box.width - padding.left - padding.right),
        height=max(0.0, box.height - padding.top - padding.bottom),
    )


# Margins and padding shrink a box the same way; they differ only in intent
apply_margin = apply_padding


def _distribute(
    sizes: Sequence[float],
    container_size: float,
    spacing: float,
    alignment: str,
) -> List[float]:
    """Offsets for consecutive items of the given sizes."""
    if alignment not in DISTRIBUTIONS:
        raise ValueError(f"Unknown distribution: {alignment}. Available: {list(DISTRIBUTIONS)}")
    if not sizes:
        return []

    available = container_size - sum(sizes) - (len(sizes) - 1) * spacing
    offset = 0.0
    if alignment == "center":
        offset = available / 2
    elif alignment == "end":
        offset = available
    elif alignment == "space-between":
        spacing = (container_size - sum(sizes)) / (len(sizes) - 1) if len(sizes) > 1 else 0.0
    elif alignment == "space-around":
        space_around = (container_size - sum(sizes)) / len(sizes)
        offset = space_around / 2
        spacing = space_around

    offsets = []
    for size in sizes:
        offsets.append(offset)
        offset += size + spacing
    return offsets


def distribute_vertically(
    boxes: Sequence[ElementPosition],
    container_height: float,
    spacing: float,
    alignment: str = "start",
    container_top: float = 0.0,
) -> List[ElementPosition]:
    """Re-position boxes top-to-bottom inside a container."""
    offsets = _distribute([b.height for b in boxes], container_height, spacing, alignment)
    return [replace(box, y=container_top + offset) for box, offset in zip(boxes, offsets)]


def distribute_horizontally(
    boxes: Sequence[ElementPosition],
    container_width: float,
    spacing: float,
    alignment: str = "start",
    container_left: float = 0.0,
) -> List[ElementPosition]:
    """Re-position boxes left-to-right inside a container."""
    offsets = _distribute([b.width for b in boxes], container_width, spacing, alignment)
    return [replace(box, x=container_left + offset) for box, offset in zip(boxes, offsets)]
