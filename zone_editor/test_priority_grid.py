"""Tests for the Priority Grid table and the grid template codec."""
import pytest

from zone_editor.services.zone_templates.grid import build_grid_layout
from zone_editor.services.zone_templates.priority_grid import (
    PRIORITY_GRID_DATA,
    decode,
    encode,
    lookup,
    priority_layout,
)
from zone_editor.services.zone_templates.template_model import (
    PRIORITY_GRID_ID,
    GridLayoutTemplate,
)

# (rows, columns) each table entry decodes to, for 1..11 zones
REFERENCE_DIMENSIONS = [
    (1, 1), (1, 2), (1, 3), (2, 3), (2, 3), (3, 3),
    (3, 3), (3, 4), (3, 4), (3, 4), (3, 4),
]


class TestLookup:
    def test_covers_one_to_eleven(self):
        assert len(PRIORITY_GRID_DATA) == 11
        for zone_count in range(1, 12):
            assert lookup(zone_count) is PRIORITY_GRID_DATA[zone_count - 1]

    @pytest.mark.parametrize("zone_count", [0, -1, 12, 40])
    def test_outside_table(self, zone_count):
        assert lookup(zone_count) is None


class TestDecode:
    @pytest.mark.parametrize("zone_count", range(1, 12))
    def test_reference_dimensions(self, zone_count):
        layout = decode(lookup(zone_count))
        assert (layout.rows, layout.columns) == REFERENCE_DIMENSIONS[zone_count - 1]
        assert len(layout.row_percents) == layout.rows
        assert len(layout.column_percents) == layout.columns
        assert layout.cell_map.shape == (layout.rows, layout.columns)
        # Every zone appears in the map
        assert sorted(set(layout.cell_map.ravel().tolist())) == list(range(zone_count))

    def test_single_zone(self):
        layout = decode(lookup(1))
        assert layout.row_percents == (10000,)
        assert layout.column_percents == (10000,)
        assert layout.cell_map.tolist() == [[0]]

    def test_two_zones_uneven_columns(self):
        layout = decode(lookup(2))
        assert layout.column_percents == (6667, 3333)
        assert layout.cell_map.tolist() == [[0, 1]]

    def test_four_zones_large_center(self):
        layout = decode(lookup(4))
        assert layout.row_percents == (5000, 5000)
        assert layout.column_percents == (2500, 5000, 2500)
        assert layout.cell_map.tolist() == [[0, 1, 2], [0, 1, 3]]

    def test_six_zones(self):
        layout = decode(lookup(6))
        assert layout.row_percents == (3333, 3334, 3333)
        assert sum(layout.row_percents) == 10000
        assert layout.column_percents == (2500, 5000, 2500)
        assert layout.cell_map.tolist() == [[0, 1, 2], [0, 1, 3], [4, 1, 5]]

    def test_eleven_zones(self):
        layout = decode(lookup(11))
        assert layout.column_percents == (2500, 2500, 2500, 2500)
        assert layout.cell_map.tolist() == [
            [0, 1, 2, 3],
            [4, 1, 5, 6],
            [7, 8, 9, 10],
        ]

    def test_cell_map_is_read_only(self):
        layout = decode(lookup(3))
        with pytest.raises(ValueError):
            layout.cell_map[0, 0] = 5

    def test_rejects_short_header(self):
        with pytest.raises(ValueError, match="too short"):
            decode(bytes([0, 0, 0]))

    def test_rejects_truncated_body(self):
        with pytest.raises(ValueError, match="must be"):
            decode(lookup(4)[:-1])

    def test_rejects_trailing_bytes(self):
        with pytest.raises(ValueError, match="must be"):
            decode(lookup(4) + b"\x00")

    def test_rejects_canvas_type(self):
        data = bytearray(lookup(1))
        data[4] = 1
        with pytest.raises(ValueError, match="Not a grid"):
            decode(bytes(data))

    def test_rejects_empty_grid(self):
        with pytest.raises(ValueError, match="no cells"):
            decode(bytes([0, 0, 0, 0, 0, 0, 1, 39, 16]))

    def test_rejects_sparse_zone_indices(self):
        data = bytearray(lookup(2))
        data[-1] = 5
        with pytest.raises(ValueError, match="densely"):
            decode(bytes(data))


class TestEncode:
    @pytest.mark.parametrize("zone_count", range(1, 12))
    def test_table_entries_reencode_identically(self, zone_count):
        template = GridLayoutTemplate("Priority Grid", 0)
        template.apply(decode(lookup(zone_count)))
        assert encode(template) == lookup(zone_count)

    def test_writes_template_id(self):
        template = GridLayoutTemplate("Priority Grid", PRIORITY_GRID_ID)
        template.apply(decode(lookup(3)))
        data = encode(template)
        assert data[2:4] == bytes([0xFF, 0xFB])
        assert decode(data).same_as(template.layout)

    def test_rejects_oversized_grid(self):
        template = GridLayoutTemplate("Grid", 1)
        template.apply(build_grid_layout(300))
        # 17 x 18 grid is fine, 300 zones are not addressable in one byte
        with pytest.raises(ValueError):
            encode(template)


class TestFallback:
    def test_table_wins_up_to_eleven(self):
        grid = build_grid_layout(3)
        layout = priority_layout(3, grid)
        assert layout.cell_map.tolist() == [[0, 1, 2]]
        assert not layout.same_as(grid)

    @pytest.mark.parametrize("zone_count", [12, 13, 20, 64])
    def test_grid_beyond_table(self, zone_count):
        grid = build_grid_layout(zone_count)
        assert priority_layout(zone_count, grid) is grid
