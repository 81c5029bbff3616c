"""
Priority Grid lookup table and grid template byte codec.

The Priority Grid templates for 1..11 zones are a fixed dataset; above
that the Priority Grid is the same as the Grid template.

Encoded grid layout (multi-byte values big-endian)::

    offset  size           field
    0       2              format version
    2       2              template id
    4       1              template type (0 = grid)
    5       1              rows
    6       1              columns
    7       2 * rows       row percents
    ...     2 * columns    column percents
    ...     rows * columns cell map, row-major, one byte per cell
"""

import logging
import struct
from typing import Optional, Tuple

import numpy as np

from .template_model import GridLayout, GridLayoutTemplate, read_only

logger = logging.getLogger(__name__)

GRID_TYPE = 0
FORMAT_VERSION = 0
HEADER_SIZE = 7

# Layouts for 1..11 zones that differ from the plain Grid
PRIORITY_GRID_DATA: Tuple[bytes, ...] = (
    bytes([0, 0, 0, 0, 0, 1, 1, 39, 16, 39, 16, 0]),
    bytes([0, 0, 0, 0, 0, 1, 2, 39, 16, 26, 11, 13, 5, 0, 1]),
    bytes([0, 0, 0, 0, 0, 1, 3, 39, 16, 9, 196, 19, 136, 9, 196, 0, 1, 2]),
    bytes([0, 0, 0, 0, 0, 2, 3, 19, 136, 19, 136, 9, 196, 19, 136, 9, 196, 0, 1, 2, 0, 1, 3]),
    bytes([0, 0, 0, 0, 0, 2, 3, 19, 136, 19, 136, 9, 196, 19, 136, 9, 196, 0, 1, 2, 3, 1, 4]),
    bytes([0, 0, 0, 0, 0, 3, 3, 13, 5, 13, 6, 13, 5, 9, 196, 19, 136, 9, 196, 0, 1, 2, 0, 1, 3, 4, 1, 5]),
    bytes([0, 0, 0, 0, 0, 3, 3, 13, 5, 13, 6, 13, 5, 9, 196, 19, 136, 9, 196, 0, 1, 2, 3, 1, 4, 5, 1, 6]),
    bytes([0, 0, 0, 0, 0, 3, 4, 13, 5, 13, 6, 13, 5, 9, 196, 9, 196, 9, 196, 9, 196, 0, 1, 2, 3, 4, 1, 2, 5, 6, 1, 2, 7]),
    bytes([0, 0, 0, 0, 0, 3, 4, 13, 5, 13, 6, 13, 5, 9, 196, 9, 196, 9, 196, 9, 196, 0, 1, 2, 3, 4, 1, 2, 5, 6, 1, 7, 8]),
    bytes([0, 0, 0, 0, 0, 3, 4, 13, 5, 13, 6, 13, 5, 9, 196, 9, 196, 9, 196, 9, 196, 0, 1, 2, 3, 4, 1, 5, 6, 7, 1, 8, 9]),
    bytes([0, 0, 0, 0, 0, 3, 4, 13, 5, 13, 6, 13, 5, 9, 196, 9, 196, 9, 196, 9, 196, 0, 1, 2, 3, 4, 1, 5, 6, 7, 8, 9, 10]),
)


def lookup(zone_count: int) -> Optional[bytes]:
    """Encoded Priority Grid for *zone_count*, or None outside the table."""
    if 1 <= zone_count <= len(PRIORITY_GRID_DATA):
        return PRIORITY_GRID_DATA[zone_count - 1]
    return None


def decode(data: bytes) -> GridLayout:
    """
    Rebuild a grid layout from its encoded bytes.

    Raises ValueError for anything that is not a complete, well-formed
    grid encoding.
    """
    if len(data) < HEADER_SIZE:
        raise ValueError(f"Encoded grid too short: {len(data)} bytes")

    _version, _template_id, kind, rows, columns = struct.unpack_from(">HHBBB", data)
    if kind != GRID_TYPE:
        raise ValueError(f"Not a grid encoding (type byte {kind})")
    if rows == 0 or columns == 0:
        raise ValueError(f"Encoded grid has no cells: {rows} x {columns}")

    expected = HEADER_SIZE + 2 * rows + 2 * columns + rows * columns
    if len(data) != expected:
        raise ValueError(
            f"Encoded {rows} x {columns} grid must be {expected} bytes, got {len(data)}"
        )

    offset = HEADER_SIZE
    row_percents = struct.unpack_from(f">{rows}H", data, offset)
    offset += 2 * rows
    column_percents = struct.unpack_from(f">{columns}H", data, offset)
    offset += 2 * columns

    cell_map = np.frombuffer(data, dtype=np.uint8, offset=offset).astype(int)
    cell_map = cell_map.reshape(rows, columns)

    # Zone indices must be dense: 0..max all used
    used = np.unique(cell_map)
    if not np.array_equal(used, np.arange(used.size)):
        raise ValueError(f"Cell map does not reference zones 0..{used.size - 1} densely")

    return GridLayout(
        rows=rows,
        columns=columns,
        row_percents=tuple(row_percents),
        column_percents=tuple(column_percents),
        cell_map=read_only(cell_map),
    )


def encode(template: GridLayoutTemplate) -> bytes:
    """Serialize a grid template into the layout read by ``decode``."""
    if not (1 <= template.rows <= 0xFF and 1 <= template.columns <= 0xFF):
        raise ValueError(
            f"Grid of {template.rows} x {template.columns} cannot be encoded"
        )
    percents = (*template.row_percents, *template.column_percents)
    if any(not 0 <= p <= 0xFFFF for p in percents):
        raise ValueError("Percent values must fit in 16 bits")
    if template.cell_map.min() < 0 or template.cell_map.max() > 0xFF:
        raise ValueError("Cell map indices must fit in one byte")

    header = struct.pack(
        ">HHBBB",
        FORMAT_VERSION,
        template.template_id,
        GRID_TYPE,
        template.rows,
        template.columns,
    )
    body = struct.pack(f">{len(percents)}H", *percents)
    cells = template.cell_map.astype(np.uint8).tobytes(order="C")
    return header + body + cells


def priority_layout(zone_count: int, grid_layout: GridLayout) -> GridLayout:
    """Priority Grid for *zone_count*, falling back to *grid_layout*."""
    data = lookup(zone_count)
    if data is None:
        logger.debug("No priority grid for %d zones, reusing grid", zone_count)
        return grid_layout
    return decode(data)
