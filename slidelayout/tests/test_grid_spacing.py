"""Tests for layout config, the column grid, cell partitioning and spacing."""

import pytest

from slidelayout.engine.grid_layout import (
    GridColumn,
    column_position,
    column_width,
    create_grid_box,
    create_grid_config,
    create_multi_column_layout,
    get_preset,
    partition_cells,
    responsive_column,
    validate_grid_column,
)
from slidelayout.engine.layout_config import Rect, create_layout_config
from slidelayout.engine.positioned import ElementPosition
from slidelayout.engine.spacing import (
    apply_padding,
    create_spacing,
    distribute_horizontally,
    distribute_vertically,
    get_spacing,
)
from slidelayout.theme.tokens import ThemeTokens


# ============================================================================
# Layout Config Tests
# ============================================================================

class TestLayoutConfig:
    """Tests for create_layout_config()."""

    def test_content_slide_margins(self, theme: ThemeTokens) -> None:
        config = create_layout_config("title-bullets", theme)
        assert config.margins.top == 0.6
        assert config.content_area.x == 0.5
        assert config.content_area.width == pytest.approx(9.0)
        assert config.content_bottom == pytest.approx(5.125)
        assert config.spacing.title_to_content == 0.4

    def test_title_slide_gets_more_room(self, theme: ThemeTokens) -> None:
        config = create_layout_config("title", theme)
        assert config.margins.top == 0.8
        assert config.spacing.title_to_content == 0.8

    def test_remaining_height(self, theme: ThemeTokens) -> None:
        config = create_layout_config("chart", theme)
        assert config.remaining_height(1.8) == pytest.approx(5.125 - 1.8)


# ============================================================================
# Column Grid Tests
# ============================================================================

@pytest.fixture
def grid(theme: ThemeTokens):
    return create_grid_config(create_layout_config("title-bullets", theme))


class TestColumnGrid:
    """Tests for the 12-column grid."""

    def test_column_width(self, grid) -> None:
        # (9.0 - 11 × 0.3) / 12
        assert column_width(grid) == pytest.approx(0.475)

    def test_full_preset_spans_content_area(self, grid) -> None:
        x, width = column_position(get_preset("FULL"), grid)
        assert x == pytest.approx(0.5)
        assert width == pytest.approx(9.0)

    def test_half_right(self, grid) -> None:
        x, width = column_position(get_preset("HALF_RIGHT"), grid)
        assert x == pytest.approx(5.15)
        assert width == pytest.approx(4.35)

    def test_alias_lookup(self) -> None:
        assert get_preset("narrow") == GridColumn(2, 10)

    def test_unknown_preset(self) -> None:
        with pytest.raises(ValueError):
            get_preset("QUARTER")

    def test_span_validation(self, grid) -> None:
        assert validate_grid_column(GridColumn(1, 12), grid)
        assert not validate_grid_column(GridColumn(10, 4), grid)
        assert not validate_grid_column(GridColumn(0, 2), grid)

    def test_grid_box_rejects_bad_span(self, grid) -> None:
        with pytest.raises(ValueError):
            create_grid_box(GridColumn(11, 3), grid, height=1.0)

    def test_grid_box_clipped_to_container(self, grid) -> None:
        box = create_grid_box("full", grid, height=10.0, y_offset=1.0)
        assert box.y == pytest.approx(1.6)
        assert box.bottom_edge == pytest.approx(5.125)

    def test_multi_column_layout(self, grid) -> None:
        left, right = create_multi_column_layout(["HALF_LEFT", "HALF_RIGHT"], grid, height=2.0)
        assert left.y == right.y
        assert left.right_edge < right.x

    def test_responsive_column(self, grid) -> None:
        assert responsive_column(9.0, grid) == get_preset("FULL")
        assert responsive_column(1.0, grid) == get_preset("CONTENT_TIGHT")


# ============================================================================
# Cell Partitioning Tests
# ============================================================================

class TestPartitionCells:
    """Tests for partition_cells()."""

    def test_cell_geometry(self) -> None:
        layout = partition_cells(Rect(0.0, 0.0, 10.0, 6.0), num_cols=3, num_rows=2, gap=0.2)
        assert len(layout.cells) == 6
        assert layout.cell_width == pytest.approx(3.2)
        assert layout.cell_height == pytest.approx(2.9)
        cell = layout.get_cell(1, 2)
        assert cell.x_inches == pytest.approx(6.8)
        assert cell.y_inches == pytest.approx(3.1)

    def test_cells_tile_the_area(self) -> None:
        area = Rect(0.5, 1.8, 9.0, 3.0)
        layout = partition_cells(area, num_cols=4, num_rows=3, gap=0.167)
        for cell in layout.cells:
            assert cell.x_inches >= area.x - 1e-9
            assert cell.y_inches >= area.y - 1e-9
            assert cell.x_inches + cell.width_inches <= area.right + 1e-9
            assert cell.y_inches + cell.height_inches <= area.bottom + 1e-9
        last = layout.get_cell(2, 3)
        assert last.x_inches + last.width_inches == pytest.approx(area.right)
        assert last.y_inches + last.height_inches == pytest.approx(area.bottom)

    def test_row_major_order(self) -> None:
        layout = partition_cells(Rect(0.0, 0.0, 4.0, 4.0), num_cols=2, num_rows=2, gap=0.1)
        assert [(c.row, c.col) for c in layout.cells] == [(0, 0), (0, 1), (1, 0), (1, 1)]
        assert len(layout.get_row(0)) == 2
        assert len(layout.get_column(1)) == 2

    def test_gap_shrinks_in_tiny_area(self) -> None:
        layout = partition_cells(Rect(0.0, 0.0, 1.0, 1.0), num_cols=4, num_rows=1, gap=0.5)
        assert layout.cell_width > 0
        second = layout.get_cell(0, 1)
        assert second.x_inches - layout.cell_width == pytest.approx(0.125)

    def test_empty_area_yields_no_cells(self) -> None:
        layout = partition_cells(Rect(0.0, 0.0, 5.0, 0.0), num_cols=2, num_rows=2, gap=0.1)
        assert layout.cells == ()


# ============================================================================
# Spacing Tests
# ============================================================================

def _box(width: float = 1.0, height: float = 1.0) -> ElementPosition:
    return ElementPosition(x=0.0, y=0.0, width=width, height=height)


class TestSpacing:
    """Tests for the spacing scale and box distribution."""

    def test_scale_lookup(self, theme: ThemeTokens) -> None:
        assert get_spacing("md", theme) == pytest.approx(0.167)

    def test_unknown_scale_name(self, theme: ThemeTokens) -> None:
        with pytest.raises(KeyError):
            get_spacing("huge", theme)

    def test_shorthand_mirrors_sides(self) -> None:
        insets = create_spacing(0.1, 0.2)
        assert (insets.top, insets.right, insets.bottom, insets.left) == (0.1, 0.2, 0.1, 0.2)

    def test_named_spacing_requires_theme(self) -> None:
        with pytest.raises(ValueError):
            create_spacing("md")

    def test_named_spacing_with_theme(self, theme: ThemeTokens) -> None:
        insets = create_spacing("sm", theme=theme)
        assert insets.left == pytest.approx(0.111)

    def test_apply_padding(self) -> None:
        padded = apply_padding(_box(2.0, 2.0), create_spacing(0.25))
        assert (padded.x, padded.y, padded.width, padded.height) == (0.25, 0.25, 1.5, 1.5)

    def test_apply_padding_never_negative(self) -> None:
        padded = apply_padding(_box(0.2, 0.2), create_spacing(0.5))
        assert padded.width == 0.0
        assert padded.height == 0.0

    @pytest.mark.parametrize(
        "alignment,expected",
        [
            ("start", [0.0, 1.5]),
            ("center", [0.75, 2.25]),
            ("end", [1.5, 3.0]),
            ("space-between", [0.0, 3.0]),
            ("space-around", [0.5, 2.5]),
        ],
    )
    def test_distribute_vertically(self, alignment: str, expected: list) -> None:
        boxes = distribute_vertically([_box(), _box()], container_height=4.0, spacing=0.5, alignment=alignment)
        assert [b.y for b in boxes] == pytest.approx(expected)

    def test_distribute_horizontally_offsets_container(self) -> None:
        boxes = distribute_horizontally([_box(), _box()], container_width=4.0, spacing=0.5, container_left=1.0)
        assert [b.x for b in boxes] == pytest.approx([1.0, 2.5])

    def test_single_box_space_between(self) -> None:
        (box,) = distribute_vertically([_box()], container_height=4.0, spacing=0.5, alignment="space-between")
        assert box.y == 0.0

    def test_unknown_distribution(self) -> None:
        with pytest.raises(ValueError):
            distribute_vertically([_box()], container_height=4.0, spacing=0.5, alignment="justify")

    def test_inputs_not_mutated(self) -> None:
        original = _box()
        distribute_vertically([original], container_height=4.0, spacing=0.0, alignment="end")
        assert original.y == 0.0
