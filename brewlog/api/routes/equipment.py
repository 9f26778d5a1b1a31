"""Equipment Routes — /api/v1/equipment.

Invariants:
    - type filter accepts the same names/ordinals as request bodies
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.infrastructure.database import get_db
from brewlog.schemas.equipment import (
    EquipmentCreate, EquipmentResponse, EquipmentUpdate,
)
from brewlog.schemas.symbolic_fields import EquipmentTypeQuery
from brewlog.services import equipment as service

router = APIRouter(prefix="/api/v1/equipment", tags=["equipment"])


@router.get(
    "", response_model=list[EquipmentResponse], response_model_exclude_none=True,
)
async def list_equipment(
    vendor: str | None = Query(None, description="Substring of the vendor"),
    model: str | None = Query(None, description="Substring of the model"),
    type: Annotated[
        EquipmentTypeQuery, Query(description="Filter by equipment type"),
    ] = None,
    db: AsyncSession = Depends(get_db),
):
    """Search brewing equipment."""
    return await service.list_equipment(db, vendor=vendor, model=model, type=type)


@router.get(
    "/most-used", response_model=list[EquipmentResponse],
    response_model_exclude_none=True,
)
async def most_used_equipment(
    count: int = Query(10, ge=1, le=100), db: AsyncSession = Depends(get_db),
):
    return await service.most_used_equipment(db, count)


@router.get("/vendors", response_model=list[str])
async def vendors(db: AsyncSession = Depends(get_db)):
    return await service.vendors(db)


@router.get("/models", response_model=list[str])
async def models(
    vendor: str | None = Query(None, description="Restrict to one vendor"),
    db: AsyncSession = Depends(get_db),
):
    return await service.models(db, vendor)


@router.get(
    "/{equipment_id}", response_model=EquipmentResponse,
    response_model_exclude_none=True,
)
async def get_equipment(equipment_id: int, db: AsyncSession = Depends(get_db)):
    return await service.get_equipment(db, equipment_id)


@router.post(
    "", response_model=EquipmentResponse, response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_equipment(
    body: EquipmentCreate, db: AsyncSession = Depends(get_db),
):
    return await service.create_equipment(db, body)


@router.put(
    "/{equipment_id}", response_model=EquipmentResponse,
    response_model_exclude_none=True,
)
async def update_equipment(
    equipment_id: int, body: EquipmentUpdate, db: AsyncSession = Depends(get_db),
):
    return await service.update_equipment(db, equipment_id, body)


@router.delete("/{equipment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_equipment(equipment_id: int, db: AsyncSession = Depends(get_db)):
    await service.delete_equipment(db, equipment_id)
