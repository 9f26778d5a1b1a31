"""Grind Setting Schemas — request/response contracts for /api/v1/grind-settings."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class GrindSettingPayload(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    grind_size: int
    grind_time_seconds: float
    grind_weight: float
    grinder_type: str = ""
    notes: str = ""


class GrindSettingCreate(GrindSettingPayload):
    pass


class GrindSettingUpdate(GrindSettingPayload):
    pass


class GrindSettingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    grind_size: int
    grind_time_seconds: float
    grind_weight: float
    grinder_type: str
    notes: str
    created_date: datetime
