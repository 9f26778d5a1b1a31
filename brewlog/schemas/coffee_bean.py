"""Coffee Bean Schemas — request/response contracts for /api/v1/coffee-beans.

Invariants:
    - roast_level accepted as case-insensitive name or legacy ordinal, emitted as name
    - Create/update payloads are shape-checked here; business rules run in core/enforce_coffee_bean
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from brewlog.schemas.symbolic_fields import RoastLevelValue


class CoffeeBeanPayload(BaseModel):
    """Fields shared by create and update."""
    name: str = ""
    brand: str = ""
    roast_level: RoastLevelValue = Field(description="Roast level of the beans")
    origin: str = ""


class CoffeeBeanCreate(CoffeeBeanPayload):
    pass


class CoffeeBeanUpdate(CoffeeBeanPayload):
    pass


class CoffeeBeanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    brand: str
    roast_level: RoastLevelValue
    origin: str
    created_date: datetime
    modified_date: datetime | None = None
