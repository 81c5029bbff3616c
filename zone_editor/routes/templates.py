"""Zone template and editor settings routes.

Endpoints:
  GET   /api/templates                      — The five built-in templates
  GET   /api/templates/{id}                 — One built-in template
  GET   /api/templates/{id}/data            — Encoded grid template (hex)
  GET   /api/templates/classify/{id}        — Built-in / reserved flags for any id
  GET   /api/settings                       — Current editor settings
  PUT   /api/settings/zone-count            — Change zone count, rebuild templates
  PATCH /api/settings                       — Change spacing / show-spacing
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Request

from zone_editor.schemas import (
    ClassificationOut,
    EncodedTemplateOut,
    SettingsOut,
    SettingsUpdate,
    TemplatesOut,
    WorkAreaOut,
    ZoneCountUpdate,
)
from zone_editor.services.template_set import TemplateSet
from zone_editor.services.zone_templates import (
    GridLayoutTemplate,
    encode,
    is_built_in,
    is_reserved_id,
)

router = APIRouter(prefix="/api", tags=["templates"])


def get_template_set(request: Request) -> TemplateSet:
    """Dependency returning the application's template set."""
    return request.app.state.template_set


def _templates_payload(template_set: TemplateSet) -> dict:
    return {
        "zone_count": template_set.zone_count,
        "templates": [t.to_dict() for t in template_set.templates],
    }


def _settings_payload(template_set: TemplateSet) -> dict:
    area = template_set.work_area
    return {
        "zone_count": template_set.zone_count,
        "spacing": template_set.spacing,
        "show_spacing": template_set.show_spacing,
        "work_area": WorkAreaOut(**area.to_dict()),
        "monitor": template_set.context.monitor,
        "dpi": template_set.context.dpi,
    }


# ---------- Templates ----------

@router.get("/templates", response_model=TemplatesOut)
def list_templates(template_set: TemplateSet = Depends(get_template_set)):
    """All built-in templates in picker order."""
    return _templates_payload(template_set)


@router.get("/templates/classify/{template_id}", response_model=ClassificationOut)
def classify_template(template_id: int = Path(..., ge=0, le=0xFFFF)):
    """Tell whether *template_id* belongs to a built-in or reserved template."""
    return {
        "template_id": template_id,
        "built_in": is_built_in(template_id),
        "reserved": is_reserved_id(template_id),
    }


@router.get("/templates/{template_id}")
def get_template(
    template_id: int = Path(..., ge=0, le=0xFFFF),
    template_set: TemplateSet = Depends(get_template_set),
):
    try:
        return template_set.get_template(template_id).to_dict()
    except KeyError:
        raise HTTPException(status_code=404, detail="Template not found")


@router.get("/templates/{template_id}/data", response_model=EncodedTemplateOut)
def get_template_data(
    template_id: int = Path(..., ge=0, le=0xFFFF),
    template_set: TemplateSet = Depends(get_template_set),
):
    """Encoded form of a grid template, as handed back to the zone engine."""
    try:
        template = template_set.get_template(template_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Template not found")

    if not isinstance(template, GridLayoutTemplate):
        raise HTTPException(status_code=400, detail=f"'{template.name}' is not a grid template")

    try:
        data = encode(template)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"template_id": template.template_id, "name": template.name, "data": data.hex()}


# ---------- Settings ----------

@router.get("/settings", response_model=SettingsOut)
def get_settings(template_set: TemplateSet = Depends(get_template_set)):
    return _settings_payload(template_set)


@router.put("/settings/zone-count", response_model=TemplatesOut)
def update_zone_count(
    data: ZoneCountUpdate,
    template_set: TemplateSet = Depends(get_template_set),
):
    """Set the zone count and return the rebuilt templates."""
    try:
        template_set.set_zone_count(data.zone_count)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _templates_payload(template_set)


@router.patch("/settings", response_model=SettingsOut)
def update_settings(
    data: SettingsUpdate,
    template_set: TemplateSet = Depends(get_template_set),
):
    try:
        if data.spacing is not None:
            template_set.set_spacing(data.spacing)
        if data.show_spacing is not None:
            template_set.set_show_spacing(data.show_spacing)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _settings_payload(template_set)
