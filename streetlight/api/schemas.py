from __future__ import annotations
from pydantic import BaseModel, Field


class BrightnessRequest(BaseModel):
    value: int


class ToggleRequest(BaseModel):
    enabled: bool


class AmbientManualRequest(BaseModel):
    hour: int = Field(ge=0, le=23)
