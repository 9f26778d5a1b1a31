"""Brew Session Routes — /api/v1/brew-sessions.

Invariants:
    - method filter accepts the same names/ordinals as request bodies
    - Every response embeds the referenced bean, grind setting and equipment
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.infrastructure.database import get_db
from brewlog.schemas.brew_session import (
    BrewSessionCreate, BrewSessionResponse, BrewSessionUpdate,
)
from brewlog.schemas.symbolic_fields import BrewMethodQuery
from brewlog.services import brew_sessions as service

router = APIRouter(prefix="/api/v1/brew-sessions", tags=["brew-sessions"])


@router.get(
    "", response_model=list[BrewSessionResponse], response_model_exclude_none=True,
)
async def list_brew_sessions(
    method: Annotated[
        BrewMethodQuery, Query(description="Filter by brewing method"),
    ] = None,
    coffee_bean_id: int | None = None,
    grind_setting_id: int | None = None,
    brewing_equipment_id: int | None = None,
    min_rating: int | None = Query(None, ge=1, le=10),
    max_rating: int | None = Query(None, ge=1, le=10),
    is_favorite: bool | None = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Search brew sessions, newest first."""
    return await service.list_brew_sessions(
        db,
        method=method,
        coffee_bean_id=coffee_bean_id,
        grind_setting_id=grind_setting_id,
        brewing_equipment_id=brewing_equipment_id,
        min_rating=min_rating,
        max_rating=max_rating,
        is_favorite=is_favorite,
        from_date=from_date,
        to_date=to_date,
    )


@router.get(
    "/favorites", response_model=list[BrewSessionResponse],
    response_model_exclude_none=True,
)
async def favorite_brew_sessions(db: AsyncSession = Depends(get_db)):
    return await service.favorite_brew_sessions(db)


@router.get(
    "/recent", response_model=list[BrewSessionResponse],
    response_model_exclude_none=True,
)
async def recent_brew_sessions(
    count: int = Query(10, ge=1, le=100), db: AsyncSession = Depends(get_db),
):
    return await service.recent_brew_sessions(db, count)


@router.get(
    "/top-rated", response_model=list[BrewSessionResponse],
    response_model_exclude_none=True,
)
async def top_rated_brew_sessions(
    count: int = Query(10, ge=1, le=100), db: AsyncSession = Depends(get_db),
):
    return await service.top_rated_brew_sessions(db, count)


@router.get(
    "/{session_id}", response_model=BrewSessionResponse,
    response_model_exclude_none=True,
)
async def get_brew_session(session_id: int, db: AsyncSession = Depends(get_db)):
    return await service.get_brew_session(db, session_id)


@router.post(
    "", response_model=BrewSessionResponse, response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_brew_session(
    body: BrewSessionCreate, db: AsyncSession = Depends(get_db),
):
    return await service.create_brew_session(db, body)


@router.put(
    "/{session_id}", response_model=BrewSessionResponse,
    response_model_exclude_none=True,
)
async def update_brew_session(
    session_id: int, body: BrewSessionUpdate, db: AsyncSession = Depends(get_db),
):
    return await service.update_brew_session(db, session_id, body)


@router.post(
    "/{session_id}/toggle-favorite", response_model=BrewSessionResponse,
    response_model_exclude_none=True,
)
async def toggle_favorite(session_id: int, db: AsyncSession = Depends(get_db)):
    return await service.toggle_favorite(db, session_id)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_brew_session(session_id: int, db: AsyncSession = Depends(get_db)):
    await service.delete_brew_session(db, session_id)
