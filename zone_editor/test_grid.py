"""
Tests for the grid partitioner.

Covers row/column selection, percent splits and the cell -> zone map.
"""
import math

import numpy as np
import pytest

from zone_editor.services.zone_templates.grid import (
    build_grid_layout,
    build_strip_layouts,
    compute_cell_map,
    compute_dimensions,
    compute_percents,
)
from zone_editor.services.zone_templates.template_model import MULTIPLIER


# ============================================================================
# Dimensions
# ============================================================================

class TestComputeDimensions:
    @pytest.mark.parametrize("zone_count, expected", [
        (1, (1, 1)),
        (2, (1, 2)),
        (3, (1, 3)),
        (4, (2, 2)),
        (5, (2, 3)),
        (6, (2, 3)),
        (7, (2, 4)),
        (8, (2, 4)),
        (9, (3, 3)),
        (10, (3, 4)),
        (12, (3, 4)),
        (16, (4, 4)),
        (17, (4, 5)),
    ])
    def test_known_counts(self, zone_count, expected):
        assert compute_dimensions(zone_count) == expected

    def test_three_zones_is_a_single_row(self):
        """The loop stops at rows=2 (3 // 2 < 2) and steps back to 1."""
        assert compute_dimensions(3) == (1, 3)

    @pytest.mark.parametrize("zone_count", range(1, 51))
    def test_properties_hold(self, zone_count):
        rows, columns = compute_dimensions(zone_count)
        assert rows * columns >= zone_count
        assert rows <= columns
        # Largest r with zone_count // r >= r
        largest = max(r for r in range(1, zone_count + 1) if zone_count // r >= r)
        assert rows == largest == math.isqrt(zone_count)
        # Fewest columns that still cover every zone
        assert rows * (columns - 1) < zone_count

    @pytest.mark.parametrize("bad", [0, -1, -10])
    def test_rejects_non_positive(self, bad):
        with pytest.raises(ValueError):
            compute_dimensions(bad)


# ============================================================================
# Percents
# ============================================================================

class TestComputePercents:
    def test_even_split(self):
        assert compute_percents(4) == (2500, 2500, 2500, 2500)

    def test_remainder_is_dropped(self):
        percents = compute_percents(3)
        assert percents == (3333, 3333, 3333)
        assert sum(percents) == 9999

    @pytest.mark.parametrize("count", range(1, 30))
    def test_entries_are_truncated_shares(self, count):
        percents = compute_percents(count)
        assert len(percents) == count
        assert all(p == MULTIPLIER // count for p in percents)
        assert sum(percents) <= MULTIPLIER

    def test_rejects_zero(self):
        with pytest.raises(ValueError):
            compute_percents(0)


# ============================================================================
# Cell map
# ============================================================================

class TestComputeCellMap:
    def test_fill_runs_from_last_column_bottom_row(self):
        cell_map = compute_cell_map(3, 4, 12)
        assert cell_map.tolist() == [
            [11, 8, 5, 2],
            [10, 7, 4, 1],
            [9, 6, 3, 0],
        ]

    def test_overflow_cells_repeat_last_zone(self):
        cell_map = compute_cell_map(2, 3, 5)
        assert cell_map.tolist() == [
            [4, 3, 1],
            [4, 2, 0],
        ]

    def test_single_row(self):
        assert compute_cell_map(1, 3, 3).tolist() == [[2, 1, 0]]

    def test_fewer_cells_than_zones(self):
        cell_map = compute_cell_map(2, 2, 10)
        assert cell_map.max() == 3
        assert sorted(cell_map.ravel().tolist()) == [0, 1, 2, 3]

    @pytest.mark.parametrize("rows, columns, zone_count", [
        (1, 1, 1), (2, 2, 3), (3, 4, 10), (4, 4, 16), (4, 5, 17), (3, 3, 20), (5, 2, 1),
    ])
    def test_values_in_range(self, rows, columns, zone_count):
        cell_map = compute_cell_map(rows, columns, zone_count)
        assert cell_map.shape == (rows, columns)
        assert cell_map.min() >= 0
        assert cell_map.max() <= zone_count - 1
        assert cell_map.max() == min(zone_count, rows * columns) - 1

    def test_is_read_only(self):
        cell_map = compute_cell_map(2, 2, 4)
        with pytest.raises(ValueError):
            cell_map[0, 0] = 9

    @pytest.mark.parametrize("args", [(0, 1, 1), (1, 0, 1), (1, 1, 0)])
    def test_rejects_non_positive(self, args):
        with pytest.raises(ValueError):
            compute_cell_map(*args)


# ============================================================================
# Layout builders
# ============================================================================

class TestLayoutBuilders:
    def test_grid_layout_for_five(self):
        layout = build_grid_layout(5)
        assert (layout.rows, layout.columns) == (2, 3)
        assert layout.row_percents == (5000, 5000)
        assert layout.column_percents == (3333, 3333, 3333)
        assert layout.cell_map.tolist() == [[4, 3, 1], [4, 2, 0]]

    def test_strip_layouts_are_transposed(self):
        rows_layout, columns_layout = build_strip_layouts(4)
        assert (rows_layout.rows, rows_layout.columns) == (4, 1)
        assert (columns_layout.rows, columns_layout.columns) == (1, 4)
        assert rows_layout.row_percents == columns_layout.column_percents == (2500,) * 4
        assert rows_layout.column_percents == columns_layout.row_percents == (MULTIPLIER,)
        assert rows_layout.cell_map.tolist() == [[0], [1], [2], [3]]
        assert columns_layout.cell_map.tolist() == [[0, 1, 2, 3]]

    def test_strip_layouts_do_not_share_arrays(self):
        rows_layout, columns_layout = build_strip_layouts(3)
        assert not np.shares_memory(rows_layout.cell_map, columns_layout.cell_map)

    def test_same_shape_different_cells_are_not_equal(self):
        grid = build_grid_layout(3)
        _, columns_layout = build_strip_layouts(3)
        # Both are 1 x 3 with 3333 percents; only the cell map differs
        assert (grid.rows, grid.columns) == (columns_layout.rows, columns_layout.columns)
        assert grid.column_percents == columns_layout.column_percents
        assert grid != columns_layout
        assert not grid.same_as(columns_layout)

    def test_equality_is_identity_and_same_as_compares_values(self):
        a, b = build_grid_layout(7), build_grid_layout(7)
        assert a == a
        assert a != b
        assert a.same_as(b)
