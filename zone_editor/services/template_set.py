"""
The five built-in templates and the editor settings that drive them.

``TemplateSet`` owns the Focus, Columns, Rows, Grid and Priority Grid
templates and rebuilds all of them whenever the zone count changes.
Observers are told which setting changed through ``SettingsField``.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Union

from zone_editor.config import DEFAULT_SHOW_SPACING, DEFAULT_SPACING, DEFAULT_ZONE_COUNT
from zone_editor.services.editor_context import EditorContext
from zone_editor.services.zone_templates import focus
from zone_editor.services.zone_templates.grid import build_grid_layout, build_strip_layouts
from zone_editor.services.zone_templates.priority_grid import priority_layout
from zone_editor.services.zone_templates.template_model import (
    COLUMNS_ID,
    FOCUS_ID,
    GRID_ID,
    PRIORITY_GRID_ID,
    ROWS_ID,
    CanvasLayoutTemplate,
    GridLayout,
    GridLayoutTemplate,
    LayoutTemplate,
    ZoneRect,
    is_built_in,
)

logger = logging.getLogger(__name__)


class SettingsField(enum.Enum):
    """Observable settings."""

    ZONE_COUNT = "ZoneCount"
    SPACING = "Spacing"
    SHOW_SPACING = "ShowSpacing"
    IS_SHIFT_KEY_PRESSED = "IsShiftKeyPressed"
    IS_CTRL_KEY_PRESSED = "IsCtrlKeyPressed"


Observer = Callable[[SettingsField], None]


@dataclass(frozen=True)
class _Rebuild:
    """Replacement values for all five templates."""

    focus: List[ZoneRect]
    rows: GridLayout
    columns: GridLayout
    grid: GridLayout
    priority_grid: GridLayout


class IntSettingsStore(Protocol):
    def read_int(self, name: str, default: int) -> int: ...

    def write_int(self, name: str, value: int) -> None: ...


class TemplateSet:
    """Built-in templates plus the settings they depend on."""

    def __init__(self, context: Optional[EditorContext] = None,
                 store: Optional[IntSettingsStore] = None):
        self.context = context or EditorContext()
        self.store = store
        self.work_area = self.context.work_area
        self._observers: List[Observer] = []

        # Focus geometry is fixed to the work area seen at startup
        self.focus = CanvasLayoutTemplate(
            "Focus", FOCUS_ID, self.work_area.width, self.work_area.height
        )
        self.columns = GridLayoutTemplate("Columns", COLUMNS_ID)
        self.rows = GridLayoutTemplate("Rows", ROWS_ID)
        self.grid = GridLayoutTemplate("Grid", GRID_ID)
        self.priority_grid = GridLayoutTemplate("Priority Grid", PRIORITY_GRID_ID)

        self._zone_count = self._read("ZoneCount", DEFAULT_ZONE_COUNT)
        if self._zone_count < 1:
            logger.warning("Stored zone count %d is invalid, using %d",
                           self._zone_count, DEFAULT_ZONE_COUNT)
            self._zone_count = DEFAULT_ZONE_COUNT
        self._spacing = self._read("Spacing", DEFAULT_SPACING)
        if self._spacing < 0:
            logger.warning("Stored spacing %d is invalid, using %d",
                           self._spacing, DEFAULT_SPACING)
            self._spacing = DEFAULT_SPACING
        self._show_spacing = self._read("ShowSpacing", int(DEFAULT_SHOW_SPACING)) == 1
        self._is_shift_key_pressed = False
        self._is_ctrl_key_pressed = False

        self.rebuild_all()

    # ── Templates ────────────────────────────────────────────────────────

    @property
    def templates(self) -> List[LayoutTemplate]:
        """Built-ins in picker order."""
        return [self.focus, self.columns, self.rows, self.grid, self.priority_grid]

    def get_template(self, template_id: int) -> LayoutTemplate:
        for template in self.templates:
            if template.template_id == template_id:
                return template
        raise KeyError(f"No built-in template with id {template_id:#06x}")

    @staticmethod
    def is_built_in(template: Union[LayoutTemplate, int]) -> bool:
        template_id = template if isinstance(template, int) else template.template_id
        return is_built_in(template_id)

    def rebuild_all(self) -> None:
        """Recompute all five templates for the current zone count."""
        self._apply(self._compute(self._zone_count))
        logger.debug("Rebuilt built-in templates for %d zones", self._zone_count)

    def _compute(self, n: int) -> _Rebuild:
        focus_zones = focus.generate(n, self.focus.reference_width, self.focus.reference_height)
        rows_layout, columns_layout = build_strip_layouts(n)
        grid_layout = build_grid_layout(n)
        return _Rebuild(
            focus=focus_zones,
            rows=rows_layout,
            columns=columns_layout,
            grid=grid_layout,
            priority_grid=priority_layout(n, grid_layout),
        )

    def _apply(self, rebuild: _Rebuild) -> None:
        self.focus.apply(rebuild.focus)
        self.rows.apply(rebuild.rows)
        self.columns.apply(rebuild.columns)
        self.grid.apply(rebuild.grid)
        self.priority_grid.apply(rebuild.priority_grid)

    # ── Settings ─────────────────────────────────────────────────────────

    @property
    def zone_count(self) -> int:
        return self._zone_count

    def set_zone_count(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"Zone count must be >= 1, got {value}")
        if value == self._zone_count:
            return
        # Compute and persist before touching the count or any template
        rebuild = self._compute(value)
        self._write("ZoneCount", value)
        logger.info("Zone count %d -> %d", self._zone_count, value)
        self._zone_count = value
        self._apply(rebuild)
        self._notify(SettingsField.ZONE_COUNT)

    @property
    def spacing(self) -> int:
        return self._spacing

    def set_spacing(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"Spacing must be >= 0, got {value}")
        if value == self._spacing:
            return
        self._write("Spacing", value)
        self._spacing = value
        self._notify(SettingsField.SPACING)

    @property
    def show_spacing(self) -> bool:
        return self._show_spacing

    def set_show_spacing(self, value: bool) -> None:
        if value == self._show_spacing:
            return
        self._write("ShowSpacing", int(value))
        self._show_spacing = value
        self._notify(SettingsField.SHOW_SPACING)

    @property
    def is_shift_key_pressed(self) -> bool:
        return self._is_shift_key_pressed

    def set_shift_key_pressed(self, value: bool) -> None:
        if value != self._is_shift_key_pressed:
            self._is_shift_key_pressed = value
            self._notify(SettingsField.IS_SHIFT_KEY_PRESSED)

    @property
    def is_ctrl_key_pressed(self) -> bool:
        return self._is_ctrl_key_pressed

    def set_ctrl_key_pressed(self, value: bool) -> None:
        if value != self._is_ctrl_key_pressed:
            self._is_ctrl_key_pressed = value
            self._notify(SettingsField.IS_CTRL_KEY_PRESSED)

    def set_work_area(self, work_area: ZoneRect) -> None:
        """Record a new work area. Templates are not rebuilt."""
        if work_area.width <= 0 or work_area.height <= 0:
            raise ValueError(
                f"Work area must have a positive size: {work_area.width} x {work_area.height}"
            )
        self.work_area = work_area

    # ── Observers ────────────────────────────────────────────────────────

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register *observer*; returns a function that removes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, changed: SettingsField) -> None:
        for observer in list(self._observers):
            observer(changed)

    # ── Persistence ──────────────────────────────────────────────────────

    def _read(self, name: str, default: int) -> int:
        if self.store is None:
            return default
        return self.store.read_int(name, default)

    def _write(self, name: str, value: int) -> None:
        if self.store is not None:
            self.store.write_int(name, value)
