"""
Zone template engine.

Derives the built-in zone templates (Focus, Columns, Rows, Grid and
Priority Grid) from a zone count.  Grid-shaped templates are described by
percent splits and a cell map; Focus by a list of rectangles.
"""

from .focus import generate as generate_focus_zones
from .grid import (
    build_grid_layout,
    build_strip_layouts,
    compute_cell_map,
    compute_dimensions,
    compute_percents,
)
from .priority_grid import decode, encode, lookup, priority_layout
from .template_model import (
    BUILT_IN_IDS,
    MULTIPLIER,
    CanvasLayoutTemplate,
    GridLayout,
    GridLayoutTemplate,
    LayoutTemplate,
    ZoneRect,
    is_built_in,
    is_reserved_id,
)

__all__ = [
    "BUILT_IN_IDS",
    "MULTIPLIER",
    "CanvasLayoutTemplate",
    "GridLayout",
    "GridLayoutTemplate",
    "LayoutTemplate",
    "ZoneRect",
    "build_grid_layout",
    "build_strip_layouts",
    "compute_cell_map",
    "compute_dimensions",
    "compute_percents",
    "decode",
    "encode",
    "generate_focus_zones",
    "is_built_in",
    "is_reserved_id",
    "lookup",
    "priority_layout",
]
