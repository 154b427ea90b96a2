"""Pydantic v2 models for slide content specifications.

A content spec is a tagged union keyed by the layout archetype. Each variant
carries only the fields its archetype uses. Specs are frozen once validated.

Fields that an archetype needs for a non-degenerate slide (bullets for a
bullet slide, rows for a table) are optional at the model level: the layout
strategies report missing content as warnings instead of rejecting the slide.
"""

import logging
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

logger = logging.getLogger(__name__)


class Archetype(str, Enum):
    """Named slide layout archetypes."""

    TITLE = "title"
    BULLETS = "title-bullets"
    PARAGRAPH = "title-paragraph"
    TWO_COLUMN = "two-column"
    IMAGE_LEFT = "image-left"
    IMAGE_RIGHT = "image-right"
    CHART = "chart"
    COMPARISON_TABLE = "comparison-table"
    GRID_OF_CELLS = "grid-of-cells"
    METRICS = "metrics"
    SINGLE_COLUMN = "single-column"


# Alternative names accepted from upstream content producers
ARCHETYPE_ALIASES: dict[str, str] = {
    "bullets": Archetype.BULLETS.value,
    "paragraph": Archetype.PARAGRAPH.value,
    "table": Archetype.COMPARISON_TABLE.value,
    "grid": Archetype.GRID_OF_CELLS.value,
    "grid-layout": Archetype.GRID_OF_CELLS.value,
    "metrics-dashboard": Archetype.METRICS.value,
}


# ============================================================================
# Shared Models
# ============================================================================


class _SpecModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ImageRef(_SpecModel):
    """Reference to an image resolved by the serializer."""

    src: str = Field(description="URL, path or asset id")
    alt: Optional[str] = None


class ColumnSpec(_SpecModel):
    """One side of a two-column slide."""

    heading: Optional[str] = None
    paragraph: Optional[str] = None
    bullets: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        """Column body as a single string (paragraph, then bullets)."""
        parts = [p for p in (self.heading, self.paragraph) if p]
        parts.extend(self.bullets)
        return "\n".join(parts)


class ChartSeries(_SpecModel):
    name: str
    values: tuple[float, ...] = ()


class ChartData(_SpecModel):
    """Chart payload; rendering is left to the serializer."""

    type: str = Field(default="bar", description="bar, line, pie, area, ...")
    categories: tuple[str, ...] = ()
    series: tuple[ChartSeries, ...] = ()
    title: Optional[str] = None


class ComparisonTable(_SpecModel):
    """Comparison table with a header row."""

    headers: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()


# ============================================================================
# Grid-of-cells Models
# ============================================================================


class GridCellType(str, Enum):
    HEADER = "header"
    BULLETS = "bullets"
    PARAGRAPH = "paragraph"
    METRIC = "metric"
    IMAGE = "image"
    CHART = "chart"
    EMPTY = "empty"


class CellSpacing(str, Enum):
    TIGHT = "tight"
    NORMAL = "normal"
    SPACIOUS = "spacious"


class CellMetric(_SpecModel):
    value: str
    label: str
    trend: Optional[Literal["up", "down", "neutral"]] = None


class CellStyling(_SpecModel):
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    emphasis: Literal["normal", "bold", "highlight"] = "normal"
    alignment: Literal["left", "center", "right"] = "left"


class GridCellSpec(_SpecModel):
    """A declared cell of an N x M grid (zero-based row/column)."""

    row: int
    column: int
    type: GridCellType = GridCellType.EMPTY
    title: Optional[str] = None
    bullets: Optional[tuple[str, ...]] = None
    paragraph: Optional[str] = None
    metric: Optional[CellMetric] = None
    image: Optional[ImageRef] = None
    chart: Optional[ChartData] = None
    styling: Optional[CellStyling] = None


class GridSpec(_SpecModel):
    columns: int = Field(ge=1, le=6)
    rows: int = Field(ge=1, le=6)
    cells: tuple[GridCellSpec, ...] = ()
    show_borders: bool = False
    cell_spacing: CellSpacing = CellSpacing.NORMAL


# ============================================================================
# Metrics Models
# ============================================================================


class MetricTrend(_SpecModel):
    direction: Literal["up", "down", "flat"] = "flat"
    percentage: Optional[float] = None
    period: Optional[str] = None


class MetricData(_SpecModel):
    """A single KPI shown as a metric card."""

    value: Union[str, float]
    label: str
    description: Optional[str] = None
    trend: Optional[MetricTrend] = None
    target: Optional[Union[str, float]] = None
    color: Optional[Literal["primary", "success", "warning", "error", "info"]] = None


class MetricsArrangement(str, Enum):
    GRID = "grid"
    ROW = "row"
    COLUMN = "column"
    FEATURED = "featured"


# ============================================================================
# Slide Specs (one per archetype)
# ============================================================================


class _SlideSpec(_SpecModel):
    title: str = ""
    notes: Optional[str] = None

    @property
    def archetype_enum(self) -> Archetype:
        return Archetype(self.archetype)


class TitleSlideSpec(_SlideSpec):
    archetype: Literal["title"] = "title"
    subtitle: Optional[str] = None
    paragraph: Optional[str] = None


class BulletsSlideSpec(_SlideSpec):
    archetype: Literal["title-bullets"] = "title-bullets"
    bullets: tuple[str, ...] = ()


class ParagraphSlideSpec(_SlideSpec):
    archetype: Literal["title-paragraph"] = "title-paragraph"
    paragraph: str = ""


class TwoColumnSlideSpec(_SlideSpec):
    archetype: Literal["two-column"] = "two-column"
    left: Optional[ColumnSpec] = None
    right: Optional[ColumnSpec] = None


class ImageSlideSpec(_SlideSpec):
    archetype: Literal["image-left", "image-right"] = "image-left"
    image: Optional[ImageRef] = None
    paragraph: Optional[str] = None
    bullets: tuple[str, ...] = ()


class ChartSlideSpec(_SlideSpec):
    archetype: Literal["chart"] = "chart"
    chart: Optional[ChartData] = None


class TableSlideSpec(_SlideSpec):
    archetype: Literal["comparison-table"] = "comparison-table"
    table: Optional[ComparisonTable] = None


class GridSlideSpec(_SlideSpec):
    archetype: Literal["grid-of-cells"] = "grid-of-cells"
    grid: GridSpec


class MetricsSlideSpec(_SlideSpec):
    archetype: Literal["metrics"] = "metrics"
    subtitle: Optional[str] = None
    metrics: tuple[MetricData, ...] = ()
    arrangement: MetricsArrangement = MetricsArrangement.GRID
    max_per_row: int = Field(default=4, ge=1, le=6)
    show_trends: bool = True
    show_targets: bool = False


class SingleColumnSlideSpec(_SlideSpec):
    archetype: Literal["single-column"] = "single-column"
    paragraph: Optional[str] = None
    bullets: tuple[str, ...] = ()


ContentSpec = Annotated[
    Union[
        TitleSlideSpec,
        BulletsSlideSpec,
        ParagraphSlideSpec,
        TwoColumnSlideSpec,
        ImageSlideSpec,
        ChartSlideSpec,
        TableSlideSpec,
        GridSlideSpec,
        MetricsSlideSpec,
        SingleColumnSlideSpec,
    ],
    Field(discriminator="archetype"),
]

_content_spec_adapter: TypeAdapter = TypeAdapter(ContentSpec)


def normalize_archetype(name: Any) -> str:
    """Map aliases and unknown archetype names onto a registered archetype.

    Unknown names, including non-string values, map to the single-column
    fallback.
    """
    if not name:
        return Archetype.SINGLE_COLUMN.value
    key = str(getattr(name, "value", name)).strip().lower()
    key = ARCHETYPE_ALIASES.get(key, key)
    if key not in {a.value for a in Archetype}:
        logger.info("Unknown archetype '%s', using single-column fallback", name)
        return Archetype.SINGLE_COLUMN.value
    return key


def parse_content_spec(data: dict[str, Any]) -> "ContentSpec":
    """Validate a raw dict into a content spec.

    Args:
        data: Raw slide description. ``archetype`` (or ``layout``) selects the
            variant; aliases and unknown names are normalized first.

    Returns:
        The frozen spec model for the archetype.

    Raises:
        pydantic.ValidationError: If the data does not match the variant.
    """
    payload = dict(data)
    name = payload.pop("layout", None) if "archetype" not in payload else payload["archetype"]
    payload["archetype"] = normalize_archetype(name)
    return _content_spec_adapter.validate_python(payload)
