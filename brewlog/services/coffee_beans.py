"""Coffee Bean Service — CRUD, search and usage queries for coffee beans.

Invariants:
    - (name, brand) is unique case-insensitively across all beans
    - A bean referenced by any brew session cannot be deleted
    - modified_date is stamped on every successful update

Design Decisions:
    - Rule checks run before the duplicate lookup so a malformed payload never
      costs a query
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.core.domain_types import RoastLevel
from brewlog.core.enforce_coffee_bean import validate_coffee_bean
from brewlog.core.errors import (
    BusinessValidationError, ErrorContext, ReferentialIntegrityError,
)
from brewlog.core.field_rules import field_error
from brewlog.models.brew_session import BrewSession
from brewlog.models.coffee_bean import CoffeeBean
from brewlog.schemas.coffee_bean import CoffeeBeanCreate, CoffeeBeanUpdate
from brewlog.services.common import contains_ci, count_brew_sessions, get_or_raise

logger = logging.getLogger(__name__)

RESOURCE = "CoffeeBean"


async def list_coffee_beans(
    db: AsyncSession,
    name: str | None = None,
    brand: str | None = None,
    roast_level: RoastLevel | None = None,
    origin: str | None = None,
) -> list[CoffeeBean]:
    """Beans matching every given filter, ordered by name then brand."""
    query = select(CoffeeBean).order_by(CoffeeBean.name, CoffeeBean.brand)
    if name:
        query = query.where(contains_ci(CoffeeBean.name, name))
    if brand:
        query = query.where(contains_ci(CoffeeBean.brand, brand))
    if roast_level is not None:
        query = query.where(CoffeeBean.roast_level == roast_level)
    if origin:
        query = query.where(contains_ci(CoffeeBean.origin, origin))
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_coffee_bean(db: AsyncSession, bean_id: int) -> CoffeeBean:
    return await get_or_raise(db, CoffeeBean, bean_id, RESOURCE)


async def recent_coffee_beans(db: AsyncSession, count: int = 10) -> list[CoffeeBean]:
    result = await db.execute(
        select(CoffeeBean)
        .order_by(desc(CoffeeBean.created_date), desc(CoffeeBean.id))
        .limit(count),
    )
    return list(result.scalars().all())


async def most_used_coffee_beans(db: AsyncSession, count: int = 10) -> list[CoffeeBean]:
    """Beans ordered by number of brew sessions; unused beans are omitted."""
    uses = func.count(BrewSession.id).label("uses")
    result = await db.execute(
        select(CoffeeBean, uses)
        .join(BrewSession, BrewSession.coffee_bean_id == CoffeeBean.id)
        .group_by(CoffeeBean.id)
        .order_by(desc(uses), CoffeeBean.name)
        .limit(count),
    )
    return list(result.scalars().all())


async def _ensure_unique(
    db: AsyncSession, name: str, brand: str, exclude_id: int | None = None,
) -> None:
    query = select(func.count(CoffeeBean.id)).where(
        func.lower(CoffeeBean.name) == name.strip().lower(),
        func.lower(CoffeeBean.brand) == brand.strip().lower(),
    )
    if exclude_id is not None:
        query = query.where(CoffeeBean.id != exclude_id)
    if (await db.execute(query)).scalar_one() > 0:
        raise BusinessValidationError([field_error(
            "name",
            f"A coffee bean named '{name}' from '{brand}' already exists",
        )])


def _validate(payload: CoffeeBeanCreate | CoffeeBeanUpdate) -> None:
    errors = validate_coffee_bean(payload)
    if errors:
        raise BusinessValidationError(errors)


async def create_coffee_bean(db: AsyncSession, payload: CoffeeBeanCreate) -> CoffeeBean:
    _validate(payload)
    await _ensure_unique(db, payload.name, payload.brand)

    bean = CoffeeBean(
        name=payload.name.strip(),
        brand=payload.brand.strip(),
        roast_level=payload.roast_level,
        origin=payload.origin.strip(),
    )
    db.add(bean)
    await db.commit()
    await db.refresh(bean)
    logger.info(
        f"Coffee bean created: {bean.name} ({bean.brand})",
        extra={"resource": RESOURCE, "resource_id": bean.id},
    )
    return bean


async def update_coffee_bean(
    db: AsyncSession, bean_id: int, payload: CoffeeBeanUpdate,
) -> CoffeeBean:
    bean = await get_coffee_bean(db, bean_id)
    _validate(payload)
    await _ensure_unique(db, payload.name, payload.brand, exclude_id=bean_id)

    bean.name = payload.name.strip()
    bean.brand = payload.brand.strip()
    bean.roast_level = payload.roast_level
    bean.origin = payload.origin.strip()
    bean.modified_date = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(bean)
    logger.info(
        "Coffee bean updated",
        extra={"resource": RESOURCE, "resource_id": bean.id},
    )
    return bean


async def delete_coffee_bean(db: AsyncSession, bean_id: int) -> None:
    bean = await get_coffee_bean(db, bean_id)
    references = await count_brew_sessions(db, BrewSession.coffee_bean_id, bean_id)
    if references:
        raise ReferentialIntegrityError(
            f"Cannot delete coffee bean {bean_id}: it is used by "
            f"{references} brew session(s).",
            ErrorContext(resource=RESOURCE, resource_id=bean_id),
        )
    await db.delete(bean)
    await db.commit()
    logger.info(
        "Coffee bean deleted",
        extra={"resource": RESOURCE, "resource_id": bean_id},
    )
