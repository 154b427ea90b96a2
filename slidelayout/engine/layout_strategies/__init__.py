"""
layout_strategies — One layout strategy per slide archetype.

- TitleStrategy: Centered title with optional subtitle
- BulletsStrategy: Stacked bullet rows
- ParagraphStrategy: One paragraph sized to its text
- TwoColumnStrategy: Left/right columns
- ImageTextStrategy: Image beside text (image-left, image-right)
- ChartStrategy: Single centered chart
- TableStrategy: Comparison table
- GridCellsStrategy: User-specified N x M grid of cells
- MetricsStrategy: KPI metric cards
- SingleColumnStrategy: Paragraph + bullets; fallback for unknown archetypes

STRATEGIES maps every Archetype to its strategy class; the layout engine
looks strategies up here instead of branching on archetype names.
"""

from typing import Dict, Type, Union

from ...dsl.schema import Archetype
from ...errors import UnknownArchetypeError
from .base_strategy import BaseLayoutStrategy, Placement, StrategyContext, combine
from .bullets_strategy import BulletsStrategy
from .chart_strategy import ChartStrategy
from .grid_cells_strategy import GridCellsStrategy
from .image_strategy import ImageTextStrategy
from .metrics_strategy import MetricsStrategy
from .paragraph_strategy import ParagraphStrategy, SingleColumnStrategy
from .table_strategy import TableStrategy
from .title_strategy import TitleStrategy
from .two_column_strategy import TwoColumnStrategy

__all__ = [
    'BaseLayoutStrategy',
    'Placement',
    'StrategyContext',
    'combine',
    'TitleStrategy',
    'BulletsStrategy',
    'ParagraphStrategy',
    'SingleColumnStrategy',
    'TwoColumnStrategy',
    'ImageTextStrategy',
    'ChartStrategy',
    'TableStrategy',
    'GridCellsStrategy',
    'MetricsStrategy',
    'get_strategy',
    'STRATEGIES',
    'FALLBACK_STRATEGY',
]


# Strategy registry for lookup by archetype
STRATEGIES: Dict[Archetype, Type[BaseLayoutStrategy]] = {
    Archetype.TITLE: TitleStrategy,
    Archetype.BULLETS: BulletsStrategy,
    Archetype.PARAGRAPH: ParagraphStrategy,
    Archetype.TWO_COLUMN: TwoColumnStrategy,
    Archetype.IMAGE_LEFT: ImageTextStrategy,
    Archetype.IMAGE_RIGHT: ImageTextStrategy,
    Archetype.CHART: ChartStrategy,
    Archetype.COMPARISON_TABLE: TableStrategy,
    Archetype.GRID_OF_CELLS: GridCellsStrategy,
    Archetype.METRICS: MetricsStrategy,
    Archetype.SINGLE_COLUMN: SingleColumnStrategy,
}

FALLBACK_STRATEGY = SingleColumnStrategy


def get_strategy(archetype: Union[Archetype, str], strict: bool = False) -> BaseLayoutStrategy:
    """
    Get a strategy instance for an archetype.

    Unknown archetypes get the single-column fallback unless strict is set.

    Raises:
        UnknownArchetypeError: If strict and the archetype is not registered
    """
    try:
        key = Archetype(getattr(archetype, "value", archetype))
    except ValueError:
        if strict:
            raise UnknownArchetypeError(
                f"Unknown archetype: {archetype}. Available: {[a.value for a in STRATEGIES]}"
            ) from None
        return FALLBACK_STRATEGY()
    return STRATEGIES[key]()
