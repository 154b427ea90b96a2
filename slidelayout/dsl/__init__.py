"""Slide content specification models."""

from slidelayout.dsl.schema import (
    Archetype,
    BulletsSlideSpec,
    CellMetric,
    CellSpacing,
    CellStyling,
    ChartData,
    ChartSeries,
    ChartSlideSpec,
    ColumnSpec,
    ComparisonTable,
    ContentSpec,
    GridCellSpec,
    GridCellType,
    GridSlideSpec,
    GridSpec,
    ImageRef,
    ImageSlideSpec,
    MetricData,
    MetricsArrangement,
    MetricsSlideSpec,
    MetricTrend,
    ParagraphSlideSpec,
    SingleColumnSlideSpec,
    TableSlideSpec,
    TitleSlideSpec,
    TwoColumnSlideSpec,
    normalize_archetype,
    parse_content_spec,
)

__all__ = [
    "Archetype",
    "BulletsSlideSpec",
    "CellMetric",
    "CellSpacing",
    "CellStyling",
    "ChartData",
    "ChartSeries",
    "ChartSlideSpec",
    "ColumnSpec",
    "ComparisonTable",
    "ContentSpec",
    "GridCellSpec",
    "GridCellType",
    "GridSlideSpec",
    "GridSpec",
    "ImageRef",
    "ImageSlideSpec",
    "MetricData",
    "MetricsArrangement",
    "MetricsSlideSpec",
    "MetricTrend",
    "ParagraphSlideSpec",
    "SingleColumnSlideSpec",
    "TableSlideSpec",
    "TitleSlideSpec",
    "TwoColumnSlideSpec",
    "normalize_archetype",
    "parse_content_spec",
]
