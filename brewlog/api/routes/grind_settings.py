"""Grind Setting Routes — /api/v1/grind-settings."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.infrastructure.database import get_db
from brewlog.schemas.grind_setting import (
    GrindSettingCreate, GrindSettingResponse, GrindSettingUpdate,
)
from brewlog.services import grind_settings as service

router = APIRouter(prefix="/api/v1/grind-settings", tags=["grind-settings"])


@router.get(
    "", response_model=list[GrindSettingResponse], response_model_exclude_none=True,
)
async def list_grind_settings(
    min_grind_size: int | None = Query(None, ge=1, le=30),
    max_grind_size: int | None = Query(None, ge=1, le=30),
    grinder_type: str | None = Query(None, description="Substring of the grinder type"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_grind_settings(
        db, min_grind_size=min_grind_size, max_grind_size=max_grind_size,
        grinder_type=grinder_type,
    )


@router.get(
    "/recent", response_model=list[GrindSettingResponse],
    response_model_exclude_none=True,
)
async def recent_grind_settings(
    count: int = Query(10, ge=1, le=100), db: AsyncSession = Depends(get_db),
):
    return await service.recent_grind_settings(db, count)


@router.get(
    "/most-used", response_model=list[GrindSettingResponse],
    response_model_exclude_none=True,
)
async def most_used_grind_settings(
    count: int = Query(10, ge=1, le=100), db: AsyncSession = Depends(get_db),
):
    return await service.most_used_grind_settings(db, count)


@router.get("/grinder-types", response_model=list[str])
async def grinder_types(db: AsyncSession = Depends(get_db)):
    """Distinct grinder types in use, alphabetical."""
    return await service.grinder_types(db)


@router.get(
    "/{setting_id}", response_model=GrindSettingResponse,
    response_model_exclude_none=True,
)
async def get_grind_setting(setting_id: int, db: AsyncSession = Depends(get_db)):
    return await service.get_grind_setting(db, setting_id)


@router.post(
    "", response_model=GrindSettingResponse, response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_grind_setting(
    body: GrindSettingCreate, db: AsyncSession = Depends(get_db),
):
    return await service.create_grind_setting(db, body)


@router.put(
    "/{setting_id}", response_model=GrindSettingResponse,
    response_model_exclude_none=True,
)
async def update_grind_setting(
    setting_id: int, body: GrindSettingUpdate, db: AsyncSession = Depends(get_db),
):
    return await service.update_grind_setting(db, setting_id, body)


@router.delete("/{setting_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_grind_setting(setting_id: int, db: AsyncSession = Depends(get_db)):
    await service.delete_grind_setting(db, setting_id)
