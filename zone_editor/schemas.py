"""Pydantic request / response schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field


class ZoneCountUpdate(BaseModel):
    zone_count: int = Field(..., ge=1)


class SettingsUpdate(BaseModel):
    spacing: Optional[int] = Field(None, ge=0)
    show_spacing: Optional[bool] = None


class WorkAreaOut(BaseModel):
    x: int
    y: int
    width: int
    height: int


class SettingsOut(BaseModel):
    zone_count: int
    spacing: int
    show_spacing: bool
    work_area: WorkAreaOut
    monitor: int
    dpi: float


class ClassificationOut(BaseModel):
    template_id: int
    built_in: bool
    reserved: bool


class EncodedTemplateOut(BaseModel):
    template_id: int
    name: str
    data: str


class TemplatesOut(BaseModel):
    zone_count: int
    templates: List[dict]
