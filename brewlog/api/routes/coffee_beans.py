"""Coffee Bean Routes — /api/v1/coffee-beans.

Invariants:
    - roast_level filter accepts the same names/ordinals as request bodies
    - Responses omit None-valued fields
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.infrastructure.database import get_db
from brewlog.schemas.coffee_bean import (
    CoffeeBeanCreate, CoffeeBeanResponse, CoffeeBeanUpdate,
)
from brewlog.schemas.symbolic_fields import RoastLevelQuery
from brewlog.services import coffee_beans as service

router = APIRouter(prefix="/api/v1/coffee-beans", tags=["coffee-beans"])


@router.get(
    "", response_model=list[CoffeeBeanResponse], response_model_exclude_none=True,
)
async def list_coffee_beans(
    name: str | None = Query(None, description="Substring of the bean name"),
    brand: str | None = Query(None, description="Substring of the brand"),
    roast_level: Annotated[
        RoastLevelQuery, Query(description="Filter by roast level"),
    ] = None,
    origin: str | None = Query(None, description="Substring of the origin"),
    db: AsyncSession = Depends(get_db),
):
    """Search coffee beans."""
    return await service.list_coffee_beans(
        db, name=name, brand=brand, roast_level=roast_level, origin=origin,
    )


@router.get(
    "/recent", response_model=list[CoffeeBeanResponse],
    response_model_exclude_none=True,
)
async def recent_coffee_beans(
    count: int = Query(10, ge=1, le=100), db: AsyncSession = Depends(get_db),
):
    return await service.recent_coffee_beans(db, count)


@router.get(
    "/most-used", response_model=list[CoffeeBeanResponse],
    response_model_exclude_none=True,
)
async def most_used_coffee_beans(
    count: int = Query(10, ge=1, le=100), db: AsyncSession = Depends(get_db),
):
    return await service.most_used_coffee_beans(db, count)


@router.get(
    "/{bean_id}", response_model=CoffeeBeanResponse,
    response_model_exclude_none=True,
)
async def get_coffee_bean(bean_id: int, db: AsyncSession = Depends(get_db)):
    return await service.get_coffee_bean(db, bean_id)


@router.post(
    "", response_model=CoffeeBeanResponse, response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_coffee_bean(
    body: CoffeeBeanCreate, db: AsyncSession = Depends(get_db),
):
    return await service.create_coffee_bean(db, body)


@router.put(
    "/{bean_id}", response_model=CoffeeBeanResponse,
    response_model_exclude_none=True,
)
async def update_coffee_bean(
    bean_id: int, body: CoffeeBeanUpdate, db: AsyncSession = Depends(get_db),
):
    return await service.update_coffee_bean(db, bean_id, body)


@router.delete("/{bean_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_coffee_bean(bean_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a bean; refused with 409 while brew sessions reference it."""
    await service.delete_coffee_bean(db, bean_id)
