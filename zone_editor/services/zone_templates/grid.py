"""
Grid partitioning.

Splits a zone count into rows x columns, equal percent splits and a
cell -> zone index map.  Used by the Grid, Rows and Columns templates and
as the Priority Grid fallback.
"""

import logging
from typing import Tuple

import numpy as np

from .template_model import MULTIPLIER, GridLayout, read_only

logger = logging.getLogger(__name__)


def _require_positive(name: str, value: int) -> None:
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")


def compute_dimensions(zone_count: int) -> Tuple[int, int]:
    """
    Return ``(rows, columns)`` covering *zone_count* cells.

    ``rows`` grows while ``zone_count // rows >= rows`` and is then stepped
    back once; ``columns`` is the ceiling of ``zone_count / rows``.  The
    result always has ``rows <= columns``.
    """
    _require_positive("zone_count", zone_count)

    rows = 1
    while zone_count // rows >= rows:
        rows += 1
    rows -= 1

    columns = zone_count // rows
    if zone_count % rows != 0:
        columns += 1
    return rows, columns


def compute_percents(count: int) -> Tuple[int, ...]:
    """*count* equal shares of MULTIPLIER; the division remainder is dropped."""
    _require_positive("count", count)
    return (MULTIPLIER // count,) * count


def compute_cell_map(rows: int, columns: int, zone_count: int) -> np.ndarray:
    """
    Assign zone indices to a ``rows x columns`` grid.

    Cells are visited column by column from the last column to the first,
    and bottom row to top row within a column.  Indices count up from 0 and
    stop at ``zone_count - 1``; every remaining cell reuses that index.
    """
    _require_positive("rows", rows)
    _require_positive("columns", columns)
    _require_positive("zone_count", zone_count)

    cell_map = np.zeros((rows, columns), dtype=int)
    index = 0
    for col in range(columns - 1, -1, -1):
        for row in range(rows - 1, -1, -1):
            cell_map[row, col] = index
            index += 1
            if index == zone_count:
                index -= 1
    return read_only(cell_map)


def build_grid_layout(zone_count: int) -> GridLayout:
    """Full Grid template shape for *zone_count* zones."""
    rows, columns = compute_dimensions(zone_count)
    logger.debug("Grid for %d zones: %d x %d", zone_count, rows, columns)
    return GridLayout(
        rows=rows,
        columns=columns,
        row_percents=compute_percents(rows),
        column_percents=compute_percents(columns),
        cell_map=compute_cell_map(rows, columns, zone_count),
    )


def build_strip_layouts(zone_count: int) -> Tuple[GridLayout, GridLayout]:
    """
    Rows and Columns template shapes for *zone_count* zones.

    Both come from one percent computation; each layout owns its own
    tuples and arrays.
    """
    percents = compute_percents(zone_count)
    indices = np.arange(zone_count, dtype=int)

    rows_layout = GridLayout(
        rows=zone_count,
        columns=1,
        row_percents=tuple(percents),
        column_percents=(MULTIPLIER,),
        cell_map=read_only(indices.reshape(zone_count, 1).copy()),
    )
    columns_layout = GridLayout(
        rows=1,
        columns=zone_count,
        row_percents=(MULTIPLIER,),
        column_percents=tuple(percents),
        cell_map=read_only(indices.reshape(1, zone_count).copy()),
    )
    return rows_layout, columns_layout
