"""Brew Session Service — CRUD, filters, favorites and rankings for brew sessions.

Invariants:
    - Referenced coffee bean and grind setting must exist; equipment must exist when given
    - Rule failures and missing references are reported together in one
      BusinessValidationError
    - Returned sessions always carry their bean, grind setting and equipment loaded

Design Decisions:
    - Sessions re-read with populate_existing after writes: relationship attributes
      already in the identity map would otherwise keep the pre-update targets
"""

import logging
from datetime import datetime

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.core.domain_types import BrewMethod
from brewlog.core.enforce_brew_session import validate_brew_session
from brewlog.core.errors import BusinessValidationError, ResourceNotFoundError
from brewlog.core.field_rules import FieldError, field_error
from brewlog.models.brew_session import BrewSession
from brewlog.models.brewing_equipment import BrewingEquipment
from brewlog.models.coffee_bean import CoffeeBean
from brewlog.models.grind_setting import GrindSetting
from brewlog.schemas.brew_session import BrewSessionCreate, BrewSessionUpdate
from brewlog.services.common import exists

logger = logging.getLogger(__name__)

RESOURCE = "BrewSession"


def _ordered(query):
    return query.order_by(desc(BrewSession.created_date), desc(BrewSession.id))


async def list_brew_sessions(
    db: AsyncSession,
    method: BrewMethod | None = None,
    coffee_bean_id: int | None = None,
    grind_setting_id: int | None = None,
    brewing_equipment_id: int | None = None,
    min_rating: int | None = None,
    max_rating: int | None = None,
    is_favorite: bool | None = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
) -> list[BrewSession]:
    """Sessions matching every given filter, newest first."""
    query = select(BrewSession)
    if method is not None:
        query = query.where(BrewSession.method == method)
    if coffee_bean_id is not None:
        query = query.where(BrewSession.coffee_bean_id == coffee_bean_id)
    if grind_setting_id is not None:
        query = query.where(BrewSession.grind_setting_id == grind_setting_id)
    if brewing_equipment_id is not None:
        query = query.where(BrewSession.brewing_equipment_id == brewing_equipment_id)
    if min_rating is not None:
        query = query.where(BrewSession.rating >= min_rating)
    if max_rating is not None:
        query = query.where(BrewSession.rating <= max_rating)
    if is_favorite is not None:
        query = query.where(BrewSession.is_favorite == is_favorite)
    if from_date is not None:
        query = query.where(BrewSession.created_date >= from_date)
    if to_date is not None:
        query = query.where(BrewSession.created_date <= to_date)
    result = await db.execute(_ordered(query))
    return list(result.scalars().all())


async def _load(db: AsyncSession, session_id: int) -> BrewSession:
    result = await db.execute(
        select(BrewSession)
        .where(BrewSession.id == session_id)
        .execution_options(populate_existing=True),
    )
    brew = result.scalar_one_or_none()
    if brew is None:
        raise ResourceNotFoundError(RESOURCE, session_id)
    return brew


async def get_brew_session(db: AsyncSession, session_id: int) -> BrewSession:
    return await _load(db, session_id)


async def favorite_brew_sessions(db: AsyncSession) -> list[BrewSession]:
    result = await db.execute(
        _ordered(select(BrewSession).where(BrewSession.is_favorite.is_(True))),
    )
    return list(result.scalars().all())


async def recent_brew_sessions(db: AsyncSession, count: int = 10) -> list[BrewSession]:
    result = await db.execute(_ordered(select(BrewSession)).limit(count))
    return list(result.scalars().all())


async def top_rated_brew_sessions(db: AsyncSession, count: int = 10) -> list[BrewSession]:
    """Rated sessions, best first; ties broken by recency."""
    result = await db.execute(
        select(BrewSession)
        .where(BrewSession.rating.is_not(None))
        .order_by(
            desc(BrewSession.rating),
            desc(BrewSession.created_date),
            desc(BrewSession.id),
        )
        .limit(count),
    )
    return list(result.scalars().all())


async def _missing_references(
    db: AsyncSession, payload: BrewSessionCreate | BrewSessionUpdate,
) -> list[FieldError]:
    errors = []
    if payload.coffee_bean_id > 0 and not await exists(
        db, CoffeeBean, payload.coffee_bean_id,
    ):
        errors.append(field_error(
            "coffee_bean_id",
            f"Coffee bean with ID {payload.coffee_bean_id} does not exist",
        ))
    if payload.grind_setting_id > 0 and not await exists(
        db, GrindSetting, payload.grind_setting_id,
    ):
        errors.append(field_error(
            "grind_setting_id",
            f"Grind setting with ID {payload.grind_setting_id} does not exist",
        ))
    equipment_id = payload.brewing_equipment_id
    if equipment_id is not None and equipment_id > 0 and not await exists(
        db, BrewingEquipment, equipment_id,
    ):
        errors.append(field_error(
            "brewing_equipment_id",
            f"Brewing equipment with ID {equipment_id} does not exist",
        ))
    return errors


async def _validate(
    db: AsyncSession, payload: BrewSessionCreate | BrewSessionUpdate,
) -> None:
    errors = validate_brew_session(payload) + await _missing_references(db, payload)
    if errors:
        raise BusinessValidationError(errors)


async def create_brew_session(
    db: AsyncSession, payload: BrewSessionCreate,
) -> BrewSession:
    await _validate(db, payload)
    brew = BrewSession(
        method=payload.method,
        water_temperature=payload.water_temperature,
        brew_time_seconds=payload.brew_time_seconds,
        tasting_notes=payload.tasting_notes,
        rating=payload.rating,
        is_favorite=payload.is_favorite,
        coffee_bean_id=payload.coffee_bean_id,
        grind_setting_id=payload.grind_setting_id,
        brewing_equipment_id=payload.brewing_equipment_id,
    )
    db.add(brew)
    await db.commit()
    logger.info(
        f"Brew session created: {brew.method}",
        extra={"resource": RESOURCE, "resource_id": brew.id},
    )
    return await _load(db, brew.id)


async def update_brew_session(
    db: AsyncSession, session_id: int, payload: BrewSessionUpdate,
) -> BrewSession:
    brew = await _load(db, session_id)
    await _validate(db, payload)
    brew.method = payload.method
    brew.water_temperature = payload.water_temperature
    brew.brew_time_seconds = payload.brew_time_seconds
    brew.tasting_notes = payload.tasting_notes
    brew.rating = payload.rating
    brew.is_favorite = payload.is_favorite
    brew.coffee_bean_id = payload.coffee_bean_id
    brew.grind_setting_id = payload.grind_setting_id
    brew.brewing_equipment_id = payload.brewing_equipment_id
    await db.commit()
    logger.info(
        "Brew session updated",
        extra={"resource": RESOURCE, "resource_id": session_id},
    )
    return await _load(db, session_id)


async def toggle_favorite(db: AsyncSession, session_id: int) -> BrewSession:
    brew = await _load(db, session_id)
    brew.is_favorite = not brew.is_favorite
    await db.commit()
    logger.info(
        f"Brew session favorite set to {brew.is_favorite}",
        extra={"resource": RESOURCE, "resource_id": session_id},
    )
    return await _load(db, session_id)


async def delete_brew_session(db: AsyncSession, session_id: int) -> None:
    brew = await _load(db, session_id)
    await db.delete(brew)
    await db.commit()
    logger.info(
        "Brew session deleted",
        extra={"resource": RESOURCE, "resource_id": session_id},
    )
