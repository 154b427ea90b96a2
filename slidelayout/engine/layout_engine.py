"""
layout_engine.py — Layout orchestrator.

The engine coordinates layout generation for one slide:
1. Builds the LayoutConfig for the archetype
2. Places the title at the top of the content area
3. Looks up the archetype's strategy and places the content below the title
4. Assembles the LayoutResult: overflow, recommendations, text accounting

Any exception raised while laying out a slide (strategy, text measurement)
is converted into a LayoutDegraded outcome (title-only layout with the error
recorded); nothing propagates to the caller.

This is the main entry point for layout generation.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from ..config import Settings, get_settings
from ..dsl.schema import ContentSpec, normalize_archetype, parse_content_spec
from ..theme.themes import ThemeRegistry, create_theme_registry
from ..theme.tokens import CanvasLayout, ThemeTokens
from .layout_config import LayoutConfig, create_layout_config, is_title_archetype
from .layout_strategies import StrategyContext, get_strategy
from .positioned import (
    ElementPosition,
    ElementType,
    HorizontalAlignment,
    LayoutDegraded,
    LayoutMetadata,
    LayoutOutcome,
    LayoutResult,
    LayoutSuccess,
    VerticalAlignment,
)
from .text_measure import HeuristicTextMeasurer, TextMeasurer, create_measurer
from .typography import derive_text_style, fit_font_size
from .units import (
    CONTENT_LIMITS,
    EPSILON,
    MAX_ELEMENTS_BEFORE_SIMPLIFY,
    TITLE_HEIGHT,
    TITLE_HEIGHT_TITLE_SLIDE,
)

logger = logging.getLogger(__name__)

OVERFLOW_RECOMMENDATION = (
    "Content exceeds slide boundaries - consider reducing content or splitting into multiple slides"
)
SIMPLIFY_RECOMMENDATION = "Consider simplifying layout - too many elements may reduce readability"

# Titles shrink to fit their box, but not below this size
MIN_TITLE_FONT_SIZE = 20


# =============================================================================
# SLIDE LAYOUT
# =============================================================================

def _title_element(
    title: str,
    archetype: str,
    config: LayoutConfig,
    theme: ThemeTokens,
) -> ElementPosition:
    """Title box at the top of the content area, fitted to its box."""
    title_slide = is_title_archetype(archetype)
    area = config.content_area
    height = TITLE_HEIGHT_TITLE_SLIDE if title_slide else TITLE_HEIGHT
    style = derive_text_style("hero" if title_slide else "title", theme, content_length=len(title))
    style = fit_font_size(title, style, area.width, height, min_size=MIN_TITLE_FONT_SIZE)
    return ElementPosition(
        x=area.x,
        y=area.y,
        width=area.width,
        height=height,
        alignment=HorizontalAlignment.CENTER if title_slide else HorizontalAlignment.LEFT,
        vertical_alignment=VerticalAlignment.MIDDLE,
        element_type=ElementType.TITLE,
        text=title,
        style=style,
    )


def _background_element(config: LayoutConfig, theme: ThemeTokens) -> ElementPosition:
    return ElementPosition(
        x=0.0,
        y=0.0,
        width=config.slide_width,
        height=config.slide_height,
        element_type=ElementType.BACKGROUND,
        fill_color=theme.palette.background,
    )


def _text_accounting(
    boxes: Iterable[ElementPosition],
    measurer: TextMeasurer,
) -> Tuple[int, int, Tuple[str, ...]]:
    """
    Placed characters, characters that do not fit their box, and a warning
    per overflowing box.
    """
    used_text = 0
    overflow_text = 0
    warnings: List[str] = []
    for box in boxes:
        if not box.text or box.style is None:
            continue
        used_text += len(box.text)
        needed = measurer.estimate_height(box.text, box.style, box.width)
        if needed <= box.height + EPSILON:
            continue
        fitting = measurer.fitting_chars(box.text, box.style, box.width, box.height)
        overflow_text += len(box.text) - fitting
        warnings.append(
            f"Text in {box.element_type.value} box may overflow "
            f"({needed:.2f}in needed, {box.height:.2f}in available)"
        )
    return used_text, overflow_text, tuple(warnings)


def degraded_outcome(
    title: str,
    archetype: str,
    theme: ThemeTokens,
    reason: str,
) -> LayoutDegraded:
    """
    Title-only layout recording why the archetype could not be built.

    Needs no text measurer. When the theme's canvas itself is unusable the
    title falls back to the default canvas margins with no derived style.
    """
    try:
        config = create_layout_config(archetype, theme)
        title_box = _title_element(title, archetype, config, theme)
        background = _background_element(config, theme)
    except Exception as e:
        logger.warning(f"Title-only layout for '{archetype}' fell back to the default canvas: {e}")
        canvas = CanvasLayout()
        title_box = ElementPosition(
            x=canvas.safe_margin,
            y=canvas.top_margin,
            width=canvas.slide_width - 2 * canvas.safe_margin,
            height=TITLE_HEIGHT,
            element_type=ElementType.TITLE,
            text=title,
        )
        background = None
    layout = LayoutResult(
        title=title_box,
        content=(),
        background=background,
        total_height=title_box.bottom_edge,
        is_overflowing=False,
    )
    metadata = LayoutMetadata(
        errors=(reason,),
        warnings=(),
        shape_count=1,
        used_text=len(title),
        overflow_text=0,
    )
    return LayoutDegraded(layout=layout, metadata=metadata, archetype=archetype, reason=reason)


def calculate_slide_layout(
    spec: ContentSpec,
    theme: ThemeTokens,
    measurer: Optional[TextMeasurer] = None,
    max_elements: int = MAX_ELEMENTS_BEFORE_SIMPLIFY,
) -> LayoutOutcome:
    """
    Compute the geometry of one slide.

    Args:
        spec: Validated content spec; its archetype selects the strategy
        theme: Theme tokens for typography, colors and spacing
        measurer: Text measurement provider (heuristic when omitted)
        max_elements: Content element count above which a "simplify"
            recommendation is added

    Returns:
        LayoutSuccess, or LayoutDegraded when any step failed (configuration,
        strategy placement or text measurement)
    """
    measurer = measurer or HeuristicTextMeasurer()
    try:
        return _layout_slide(spec, theme, measurer, max_elements)
    except Exception as e:
        archetype = spec.archetype
        reason = f"Failed to build {archetype} slide: {e}"
        logger.warning(f"Layout for '{archetype}' degraded to title only: {e}")
        logger.debug("Layout failure", exc_info=True)
        return degraded_outcome(spec.title, archetype, theme, reason)


def _layout_slide(
    spec: ContentSpec,
    theme: ThemeTokens,
    measurer: TextMeasurer,
    max_elements: int,
) -> LayoutSuccess:
    archetype = spec.archetype
    config = create_layout_config(archetype, theme)
    title = _title_element(spec.title, archetype, config, theme)
    ctx = StrategyContext(
        config=config,
        theme=theme,
        measurer=measurer,
        cursor_y=title.bottom_edge + config.spacing.title_to_content,
    )
    placement = get_strategy(archetype).place(spec, ctx)

    content = placement.elements
    boxes = (title,) + content
    total_height = max([box.bottom_edge for box in boxes] + [ctx.cursor_y])
    is_overflowing = total_height > config.content_bottom + EPSILON

    diagnostics = placement.diagnostics
    if is_overflowing:
        diagnostics = diagnostics.with_recommendation(OVERFLOW_RECOMMENDATION)
    if len(content) > max_elements:
        diagnostics = diagnostics.with_recommendation(SIMPLIFY_RECOMMENDATION)

    max_title = CONTENT_LIMITS["max_title_length"]
    if len(spec.title) > max_title:
        diagnostics = diagnostics.with_warning(
            f"Title is {len(spec.title)} characters; keep titles under {max_title}"
        )

    used_text, overflow_text, overflow_warnings = _text_accounting(boxes, measurer)
    diagnostics = diagnostics.with_warnings(overflow_warnings)

    layout = LayoutResult(
        title=title,
        content=content,
        background=_background_element(config, theme),
        total_height=total_height,
        is_overflowing=is_overflowing,
        recommendations=diagnostics.recommendations,
    )
    metadata = LayoutMetadata(
        errors=diagnostics.errors,
        warnings=diagnostics.warnings,
        shape_count=len(boxes),
        used_text=used_text,
        overflow_text=overflow_text,
    )
    return LayoutSuccess(layout=layout, metadata=metadata, archetype=archetype)


# =============================================================================
# LAYOUT ENGINE
# =============================================================================

class LayoutEngine:
    """
    Main layout orchestrator.

    Holds the collaborators every slide needs (theme registry, text
    measurer, thresholds) so callers only pass content and a theme id.
    """

    def __init__(
        self,
        theme_registry: Optional[ThemeRegistry] = None,
        measurer: Optional[TextMeasurer] = None,
        max_elements: int = MAX_ELEMENTS_BEFORE_SIMPLIFY,
        max_workers: int = 1,
    ):
        """
        Initialize the layout engine.

        Args:
            theme_registry: Themes and the fallback theme (built-ins when omitted)
            measurer: Text measurement provider (heuristic when omitted)
            max_elements: "Simplify layout" threshold
            max_workers: Threads used by layout_deck (1 = sequential)
        """
        self.theme_registry = theme_registry or create_theme_registry()
        self.measurer = measurer or HeuristicTextMeasurer()
        self.max_elements = max_elements
        self.max_workers = max(1, max_workers)

    def layout(
        self,
        spec: Union[ContentSpec, Dict[str, Any]],
        theme_id: Optional[str] = None,
    ) -> LayoutOutcome:
        """
        Lay out one slide.

        Raw dicts are validated first; content that fails validation yields a
        degraded title-only outcome instead of raising.
        """
        theme = self.theme_registry.resolve(theme_id)
        if isinstance(spec, dict):
            try:
                spec = parse_content_spec(spec)
            except (ValidationError, TypeError, ValueError) as e:
                archetype = normalize_archetype(spec.get("archetype") or spec.get("layout"))
                message = e.errors()[0]["msg"] if isinstance(e, ValidationError) else str(e)
                logger.warning(f"Invalid content for '{archetype}' slide: {message}")
                return degraded_outcome(
                    str(spec.get("title") or ""),
                    archetype,
                    theme,
                    f"Invalid {archetype} content: {message}",
                )
        return calculate_slide_layout(spec, theme, self.measurer, self.max_elements)

    def layout_deck(
        self,
        specs: Iterable[Union[ContentSpec, Dict[str, Any]]],
        theme_id: Optional[str] = None,
    ) -> List[LayoutOutcome]:
        """Lay out slides independently, preserving input order."""
        specs = list(specs)
        if self.max_workers > 1 and len(specs) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                return list(pool.map(lambda spec: self.layout(spec, theme_id), specs))
        return [self.layout(spec, theme_id) for spec in specs]


def create_engine(settings: Optional[Settings] = None) -> LayoutEngine:
    """Build a LayoutEngine from environment settings."""
    settings = settings or get_settings()
    return LayoutEngine(
        theme_registry=create_theme_registry(settings.default_theme_id),
        measurer=create_measurer(settings.measurement, settings.font_dir),
        max_elements=settings.max_elements,
        max_workers=settings.max_workers,
    )
