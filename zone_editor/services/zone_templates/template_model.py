"""
Layout template model.

A template is either grid-shaped (rows x columns of cells, each cell
pointing at a zone index) or canvas-shaped (a free list of zone
rectangles).  Template objects live for the whole editor session and
have their field values replaced wholesale on every rebuild.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
from shapely.geometry import Polygon, box
from shapely.ops import unary_union


# Fixed-point scale for row / column percents (10000 == 100 %)
MULTIPLIER = 10000

# Reserved identifiers, top of the 16-bit id space
FOCUS_ID = 0xFFFF
ROWS_ID = 0xFFFE
COLUMNS_ID = 0xFFFD
GRID_ID = 0xFFFC
PRIORITY_GRID_ID = 0xFFFB
BLANK_CUSTOM_ID = 0xFFFA

LOWEST_BUILT_IN_ID = PRIORITY_GRID_ID
LOWEST_RESERVED_ID = BLANK_CUSTOM_ID
MAX_USER_TEMPLATE_ID = LOWEST_RESERVED_ID - 1

BUILT_IN_IDS = (FOCUS_ID, ROWS_ID, COLUMNS_ID, GRID_ID, PRIORITY_GRID_ID)


@dataclass(frozen=True)
class ZoneRect:
    """Integer rectangle in work-area coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    def offset(self, dx: int, dy: int) -> "ZoneRect":
        return ZoneRect(self.x + dx, self.y + dy, self.width, self.height)

    def to_polygon(self) -> Polygon:
        """Convert to a Shapely Polygon."""
        return box(self.x, self.y, self.x + self.width, self.y + self.height)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True, eq=False)
class GridLayout:
    """
    The computed shape of a grid template.

    ``cell_map`` is a read-only ``rows x columns`` integer array.  Compare
    layouts with ``same_as``.
    """

    rows: int
    columns: int
    row_percents: Tuple[int, ...]
    column_percents: Tuple[int, ...]
    cell_map: np.ndarray

    def same_as(self, other: "GridLayout") -> bool:
        return (
            self.rows == other.rows
            and self.columns == other.columns
            and self.row_percents == other.row_percents
            and self.column_percents == other.column_percents
            and np.array_equal(self.cell_map, other.cell_map)
        )


def read_only(cell_map: np.ndarray) -> np.ndarray:
    """Return *cell_map* with its write flag cleared."""
    cell_map.setflags(write=False)
    return cell_map


class LayoutTemplate:
    """Base class for the named templates shown in the editor."""

    kind = "template"

    def __init__(self, name: str, template_id: int):
        if not 0 <= template_id <= 0xFFFF:
            raise ValueError(f"Template id must fit in 16 bits: {template_id}")
        self.name = name
        self.template_id = template_id

    @property
    def is_built_in(self) -> bool:
        return is_built_in(self.template_id)

    def to_dict(self) -> dict:
        return {
            "id": self.template_id,
            "name": self.name,
            "type": self.kind,
            "built_in": self.is_built_in,
        }


class GridLayoutTemplate(LayoutTemplate):
    """Template made of percent-sized rows and columns."""

    kind = "grid"

    def __init__(self, name: str, template_id: int):
        super().__init__(name, template_id)
        self.rows = 1
        self.columns = 1
        self.row_percents: Tuple[int, ...] = (MULTIPLIER,)
        self.column_percents: Tuple[int, ...] = (MULTIPLIER,)
        self.cell_map: np.ndarray = read_only(np.zeros((1, 1), dtype=int))

    @property
    def layout(self) -> GridLayout:
        return GridLayout(
            rows=self.rows,
            columns=self.columns,
            row_percents=self.row_percents,
            column_percents=self.column_percents,
            cell_map=self.cell_map,
        )

    def apply(self, layout: GridLayout) -> None:
        """Replace every grid field with the values from *layout*."""
        self.rows = layout.rows
        self.columns = layout.columns
        self.row_percents = layout.row_percents
        self.column_percents = layout.column_percents
        self.cell_map = layout.cell_map

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            "rows": self.rows,
            "columns": self.columns,
            "row_percents": list(self.row_percents),
            "column_percents": list(self.column_percents),
            "cell_map": self.cell_map.tolist(),
        })
        return data

    def __repr__(self) -> str:
        return (
            f"GridLayoutTemplate(id={self.template_id:#06x}, name='{self.name}', "
            f"rows={self.rows}, columns={self.columns})"
        )


class CanvasLayoutTemplate(LayoutTemplate):
    """Template made of freely placed (possibly overlapping) rectangles."""

    kind = "canvas"

    def __init__(self, name: str, template_id: int,
                 reference_width: int, reference_height: int):
        super().__init__(name, template_id)
        self.reference_width = reference_width
        self.reference_height = reference_height
        self.zones: List[ZoneRect] = []

    def apply(self, zones: List[ZoneRect]) -> None:
        self.zones = list(zones)

    @property
    def covered_area(self) -> float:
        """Area covered by the union of all zones (overlaps counted once)."""
        if not self.zones:
            return 0.0
        return unary_union([z.to_polygon() for z in self.zones]).area

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            "reference_width": self.reference_width,
            "reference_height": self.reference_height,
            "zones": [
                {**z.to_dict(), "polygon": [list(c) for c in z.to_polygon().exterior.coords]}
                for z in self.zones
            ],
            "covered_area": round(self.covered_area, 2),
        })
        return data

    def __repr__(self) -> str:
        return (
            f"CanvasLayoutTemplate(id={self.template_id:#06x}, name='{self.name}', "
            f"zones={len(self.zones)})"
        )


def is_built_in(template_id: int) -> bool:
    """True for the five built-in template ids."""
    return LOWEST_BUILT_IN_ID <= template_id <= 0xFFFF


def is_reserved_id(template_id: int) -> bool:
    """True for every id user templates may not take."""
    return LOWEST_RESERVED_ID <= template_id <= 0xFFFF
