"""Brew Session Schemas — request/response contracts for /api/v1/brew-sessions.

Invariants:
    - method accepted as case-insensitive name or legacy ordinal, emitted as name
    - brew_time_seconds is whole seconds; water_temperature is °C
    - Responses embed the referenced bean, grind setting and (optional) equipment
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from brewlog.schemas.coffee_bean import CoffeeBeanResponse
from brewlog.schemas.equipment import EquipmentResponse
from brewlog.schemas.grind_setting import GrindSettingResponse
from brewlog.schemas.symbolic_fields import BrewMethodValue


class BrewSessionPayload(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    method: BrewMethodValue = Field(description="Brewing method used")
    water_temperature: float
    brew_time_seconds: int
    tasting_notes: str = ""
    rating: int | None = None
    is_favorite: bool = False
    coffee_bean_id: int
    grind_setting_id: int
    brewing_equipment_id: int | None = None


class BrewSessionCreate(BrewSessionPayload):
    pass


class BrewSessionUpdate(BrewSessionPayload):
    pass


class BrewSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    method: BrewMethodValue
    water_temperature: float
    brew_time_seconds: int
    tasting_notes: str
    rating: int | None = None
    is_favorite: bool
    created_date: datetime
    coffee_bean_id: int
    grind_setting_id: int
    brewing_equipment_id: int | None = None
    coffee_bean: CoffeeBeanResponse
    grind_setting: GrindSettingResponse
    brewing_equipment: EquipmentResponse | None = None
