"""Equipment Schemas — request/response contracts for /api/v1/equipment.

Invariants:
    - type accepted as case-insensitive name or legacy ordinal, emitted as name
    - specifications defaults to an empty map; explicit null is rejected by business rules
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from brewlog.schemas.symbolic_fields import EquipmentTypeValue


class EquipmentPayload(BaseModel):
    vendor: str = ""
    model: str = ""
    type: EquipmentTypeValue = Field(description="Kind of brewing equipment")
    specifications: dict[str, str] | None = Field(default_factory=dict)


class EquipmentCreate(EquipmentPayload):
    pass


class EquipmentUpdate(EquipmentPayload):
    pass


class EquipmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    vendor: str
    model: str
    type: EquipmentTypeValue
    specifications: dict[str, str]
    created_date: datetime
