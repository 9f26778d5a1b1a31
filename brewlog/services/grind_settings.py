"""Grind Setting Service — CRUD and usage queries for grind settings.

Invariants:
    - A grind setting referenced by any brew session cannot be deleted
    - grinder_types() returns distinct non-empty values, sorted
"""

import logging

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.core.enforce_grind_setting import validate_grind_setting
from brewlog.core.errors import (
    BusinessValidationError, ErrorContext, ReferentialIntegrityError,
)
from brewlog.models.brew_session import BrewSession
from brewlog.models.grind_setting import GrindSetting
from brewlog.schemas.grind_setting import GrindSettingCreate, GrindSettingUpdate
from brewlog.services.common import contains_ci, count_brew_sessions, get_or_raise

logger = logging.getLogger(__name__)

RESOURCE = "GrindSetting"


async def list_grind_settings(
    db: AsyncSession,
    min_grind_size: int | None = None,
    max_grind_size: int | None = None,
    grinder_type: str | None = None,
) -> list[GrindSetting]:
    query = select(GrindSetting).order_by(GrindSetting.grind_size, GrindSetting.id)
    if min_grind_size is not None:
        query = query.where(GrindSetting.grind_size >= min_grind_size)
    if max_grind_size is not None:
        query = query.where(GrindSetting.grind_size <= max_grind_size)
    if grinder_type:
        query = query.where(contains_ci(GrindSetting.grinder_type, grinder_type))
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_grind_setting(db: AsyncSession, setting_id: int) -> GrindSetting:
    return await get_or_raise(db, GrindSetting, setting_id, RESOURCE)


async def recent_grind_settings(db: AsyncSession, count: int = 10) -> list[GrindSetting]:
    result = await db.execute(
        select(GrindSetting)
        .order_by(desc(GrindSetting.created_date), desc(GrindSetting.id))
        .limit(count),
    )
    return list(result.scalars().all())


async def most_used_grind_settings(db: AsyncSession, count: int = 10) -> list[GrindSetting]:
    uses = func.count(BrewSession.id).label("uses")
    result = await db.execute(
        select(GrindSetting, uses)
        .join(BrewSession, BrewSession.grind_setting_id == GrindSetting.id)
        .group_by(GrindSetting.id)
        .order_by(desc(uses), GrindSetting.id)
        .limit(count),
    )
    return list(result.scalars().all())


async def grinder_types(db: AsyncSession) -> list[str]:
    result = await db.execute(
        select(GrindSetting.grinder_type)
        .where(GrindSetting.grinder_type != "")
        .distinct()
        .order_by(GrindSetting.grinder_type),
    )
    return list(result.scalars().all())


def _validate(payload: GrindSettingCreate | GrindSettingUpdate) -> None:
    errors = validate_grind_setting(payload)
    if errors:
        raise BusinessValidationError(errors)


async def create_grind_setting(
    db: AsyncSession, payload: GrindSettingCreate,
) -> GrindSetting:
    _validate(payload)
    setting = GrindSetting(
        grind_size=payload.grind_size,
        grind_time_seconds=payload.grind_time_seconds,
        grind_weight=payload.grind_weight,
        grinder_type=payload.grinder_type.strip(),
        notes=payload.notes,
    )
    db.add(setting)
    await db.commit()
    await db.refresh(setting)
    logger.info(
        f"Grind setting created: size {setting.grind_size}",
        extra={"resource": RESOURCE, "resource_id": setting.id},
    )
    return setting


async def update_grind_setting(
    db: AsyncSession, setting_id: int, payload: GrindSettingUpdate,
) -> GrindSetting:
    setting = await get_grind_setting(db, setting_id)
    _validate(payload)
    setting.grind_size = payload.grind_size
    setting.grind_time_seconds = payload.grind_time_seconds
    setting.grind_weight = payload.grind_weight
    setting.grinder_type = payload.grinder_type.strip()
    setting.notes = payload.notes
    await db.commit()
    await db.refresh(setting)
    logger.info(
        "Grind setting updated",
        extra={"resource": RESOURCE, "resource_id": setting.id},
    )
    return setting


async def delete_grind_setting(db: AsyncSession, setting_id: int) -> None:
    setting = await get_grind_setting(db, setting_id)
    references = await count_brew_sessions(
        db, BrewSession.grind_setting_id, setting_id,
    )
    if references:
        raise ReferentialIntegrityError(
            f"Cannot delete grind setting {setting_id}: it is used by "
            f"{references} brew session(s).",
            ErrorContext(resource=RESOURCE, resource_id=setting_id),
        )
    await db.delete(setting)
    await db.commit()
    logger.info(
        "Grind setting deleted",
        extra={"resource": RESOURCE, "resource_id": setting_id},
    )
