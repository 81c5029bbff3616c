"""
Editor launch context.

The zone editor is started by the zone engine with the target monitor
described on the command line::

    editor <unique key> <layout id> <monitor> <X_Y_Width_Height> <resolution key> <dpi>

Those values are parsed once into an immutable ``EditorContext``.
"""

import locale
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from zone_editor.config import DEFAULT_WORK_AREA, SETTINGS_ROOT
from zone_editor.services.zone_templates.template_model import ZoneRect

logger = logging.getLogger(__name__)

EXPECTED_ARGC = 7


@dataclass(frozen=True)
class EditorContext:
    """Monitor and work area the editor was opened for."""

    work_area: ZoneRect = field(default_factory=lambda: ZoneRect(*DEFAULT_WORK_AREA))
    unique_key: str = ""
    layout_id: Optional[int] = None
    monitor: int = 0
    work_area_key: str = ""
    dpi: float = 1.0

    @property
    def settings_path(self) -> str:
        """Key path for this monitor's persisted settings."""
        if self.unique_key:
            return f"{SETTINGS_ROOT}\\{self.unique_key}"
        return SETTINGS_ROOT


def parse_work_area(text: str) -> ZoneRect:
    """Parse ``X_Y_Width_Height`` into a rectangle."""
    parts = text.split("_")
    if len(parts) != 4:
        raise ValueError(f"Work area must be X_Y_Width_Height, got '{text}'")
    try:
        x, y, width, height = (int(p) for p in parts)
    except ValueError:
        raise ValueError(f"Work area values must be integers, got '{text}'") from None
    if width <= 0 or height <= 0:
        raise ValueError(f"Work area must have a positive size, got '{text}'")
    return ZoneRect(x, y, width, height)


def parse_dpi(text: str, default: float = 1.0) -> float:
    """
    Parse a DPI scale written with either '.' or the locale's decimal mark.

    Returns *default* when no convention fits.
    """
    candidates = (
        float,
        locale.atof,
        lambda s: float(s.replace(",", ".")),
    )
    for parse in candidates:
        try:
            return parse(text)
        except ValueError:
            continue
    logger.warning("Could not parse DPI value %r, using %s", text, default)
    return default


def _parse_uint(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        return 0
    return value if value >= 0 else 0


def _parse_layout_id(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


def parse_editor_args(argv: Sequence[str]) -> EditorContext:
    """
    Build the context from the process arguments (``argv[0]`` included).

    Anything other than the full argument set yields the default context.
    """
    args: List[str] = list(argv)
    if len(args) != EXPECTED_ARGC:
        if len(args) > 1:
            logger.warning(
                "Expected %d editor arguments, got %d; using defaults",
                EXPECTED_ARGC - 1, len(args) - 1,
            )
        return EditorContext()

    _, unique_key, layout_id, monitor, work_area, work_area_key, dpi = args
    return EditorContext(
        work_area=parse_work_area(work_area),
        unique_key=unique_key,
        layout_id=_parse_layout_id(layout_id),
        monitor=_parse_uint(monitor),
        work_area_key=work_area_key,
        dpi=parse_dpi(dpi),
    )
