# Slide layout engine

from .units import (
    SLIDE_WIDTH_INCHES,
    SLIDE_HEIGHT_INCHES,
    CONTENT_LIMITS,
    inches_to_emu,
    emu_to_inches,
)

from .typography import (
    TextStyle,
    TextShadow,
    TypographyAccessibility,
    derive_text_style,
    responsive_font_size,
    optimal_line_height,
    typography_hierarchy,
    estimate_text_height,
    fit_font_size,
    validate_typography_accessibility,
)

from .positioned import (
    ElementPosition,
    ElementType,
    HorizontalAlignment,
    VerticalAlignment,
    Diagnostics,
    LayoutResult,
    LayoutMetadata,
    LayoutSuccess,
    LayoutDegraded,
    LayoutOutcome,
    to_emu,
)

from .text_measure import (
    TextMeasurer,
    HeuristicTextMeasurer,
    PillowTextMeasurer,
    create_measurer,
)

from .layout_config import (
    LayoutConfig,
    Margins,
    Rect,
    create_layout_config,
)

from .grid_layout import (
    GridConfig,
    GridColumn,
    GridCell,
    GridLayout,
    LAYOUT_PRESETS,
    create_grid_config,
    create_grid_box,
    create_multi_column_layout,
    column_width,
    column_position,
    row_position,
    responsive_column,
    validate_grid_column,
    partition_cells,
)

from .spacing import (
    Insets,
    SPACING_PRESETS,
    get_spacing,
    create_spacing,
    apply_padding,
    apply_margin,
    distribute_vertically,
    distribute_horizontally,
)

from .layout_strategies import STRATEGIES, get_strategy

from .layout_engine import (
    LayoutEngine,
    calculate_slide_layout,
    create_engine,
    degraded_outcome,
)
