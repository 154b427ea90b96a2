"""
image_strategy.py — Image beside text (image-left / image-right).

The image box takes 45% of the content width and 80% of the available
height; the text box takes 50% of the width and the full available height.
The side the image sits on comes from the archetype name.
"""

from ..positioned import ElementPosition, ElementType, HorizontalAlignment
from ..units import IMAGE_HEIGHT_RATIO, IMAGE_TEXT_WIDTH_RATIO, IMAGE_WIDTH_RATIO
from .base_strategy import BaseLayoutStrategy, Placement, StrategyContext


class ImageTextStrategy(BaseLayoutStrategy):
    """Image box paired with a text box."""

    def place(self, spec, ctx: StrategyContext) -> Placement:
        area = ctx.content_area
        gap = ctx.config.spacing.column_gap
        image_width = area.width * IMAGE_WIDTH_RATIO
        text_width = area.width * IMAGE_TEXT_WIDTH_RATIO
        available_height = ctx.remaining_height
        image_left = spec.archetype == "image-left"

        if image_left:
            image_x, image_alignment = area.x, HorizontalAlignment.LEFT
            text_x = area.x + image_width + gap
        else:
            text_x = area.x
            image_x, image_alignment = area.x + text_width + gap, HorizontalAlignment.RIGHT

        image = ElementPosition(
            x=image_x,
            y=ctx.cursor_y,
            width=image_width,
            height=available_height * IMAGE_HEIGHT_RATIO,
            alignment=image_alignment,
            element_type=ElementType.IMAGE,
            payload=spec.image.src if spec.image else None,
        )
        body = spec.paragraph or "\n".join(spec.bullets) or None
        text = self.text_element(ctx, x=text_x, y=ctx.cursor_y, width=text_width, height=available_height, text=body)

        placement = Placement(elements=(image, text) if image_left else (text, image))
        if spec.image is None:
            placement = placement.with_warning("No image provided; the image box will be empty")
        if body is None:
            placement = placement.with_warning("No supporting text provided for the image")
        return placement
