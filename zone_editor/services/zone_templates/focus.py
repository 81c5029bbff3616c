"""
Focus template generation.

Produces equally sized rectangles cascading diagonally from the top-left
of the reference area toward the bottom-right.
"""

from typing import List

from .template_model import ZoneRect


def generate(zone_count: int, reference_width: int, reference_height: int) -> List[ZoneRect]:
    """
    Return *zone_count* cascading rectangles.

    The first rectangle starts at 10 % of the reference size and covers
    60 % of it; each following one is shifted by an equal share of the
    remaining 20 % on both axes.
    """
    if zone_count < 1:
        raise ValueError(f"zone_count must be >= 1, got {zone_count}")
    if reference_width <= 0 or reference_height <= 0:
        raise ValueError(
            f"Reference size must be positive: {reference_width} x {reference_height}"
        )

    base = ZoneRect(
        int(reference_width * 0.1),
        int(reference_height * 0.1),
        int(reference_width * 0.6),
        int(reference_height * 0.6),
    )
    if zone_count <= 1:
        step_x = step_y = 0
    else:
        step_x = int(reference_width * 0.2) // (zone_count - 1)
        step_y = int(reference_height * 0.2) // (zone_count - 1)

    return [base.offset(i * step_x, i * step_y) for i in range(zone_count)]
