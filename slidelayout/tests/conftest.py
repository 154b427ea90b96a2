"""Pytest configuration and fixtures."""

import pytest

from slidelayout.dsl.schema import (
    BulletsSlideSpec,
    ColumnSpec,
    TitleSlideSpec,
    TwoColumnSlideSpec,
)
from slidelayout.engine.layout_engine import LayoutEngine
from slidelayout.engine.text_measure import HeuristicTextMeasurer
from slidelayout.theme.themes import (
    EXECUTIVE_THEME,
    NEUTRAL_THEME,
    ThemeRegistry,
    create_theme_registry,
)
from slidelayout.theme.tokens import ThemeTokens


@pytest.fixture
def theme() -> ThemeTokens:
    """The default light theme."""
    return NEUTRAL_THEME


@pytest.fixture
def dark_theme() -> ThemeTokens:
    return EXECUTIVE_THEME


@pytest.fixture
def registry() -> ThemeRegistry:
    return create_theme_registry()


@pytest.fixture
def measurer() -> HeuristicTextMeasurer:
    return HeuristicTextMeasurer()


@pytest.fixture
def engine(registry: ThemeRegistry, measurer: HeuristicTextMeasurer) -> LayoutEngine:
    """Sequential engine over the built-in themes."""
    return LayoutEngine(theme_registry=registry, measurer=measurer)


@pytest.fixture
def title_spec() -> TitleSlideSpec:
    return TitleSlideSpec(title="Quarterly Results")


@pytest.fixture
def bullets_spec() -> BulletsSlideSpec:
    """Four short bullets; fits comfortably."""
    return BulletsSlideSpec(
        title="Key Highlights of the Quarter",
        bullets=(
            "Revenue grew 12% year over year",
            "Operating margin reached 21%",
            "Two new regions launched",
            "Customer churn fell below 3%",
        ),
    )


@pytest.fixture
def two_column_spec() -> TwoColumnSlideSpec:
    return TwoColumnSlideSpec(
        title="Before and After Migration",
        left=ColumnSpec(heading="Before", bullets=("Manual deploys", "Weekly releases")),
        right=ColumnSpec(heading="After", bullets=("Automated pipeline", "Daily releases")),
    )
