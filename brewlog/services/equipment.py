"""Equipment Service — CRUD, search and usage queries for brewing equipment.

Invariants:
    - Equipment referenced by any brew session cannot be deleted
    - specifications persisted with keys and values trimmed
"""

import logging

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.core.domain_types import EquipmentType
from brewlog.core.enforce_equipment import validate_equipment
from brewlog.core.errors import (
    BusinessValidationError, ErrorContext, ReferentialIntegrityError,
)
from brewlog.models.brew_session import BrewSession
from brewlog.models.brewing_equipment import BrewingEquipment
from brewlog.schemas.equipment import EquipmentCreate, EquipmentUpdate
from brewlog.services.common import contains_ci, count_brew_sessions, get_or_raise

logger = logging.getLogger(__name__)

RESOURCE = "BrewingEquipment"


async def list_equipment(
    db: AsyncSession,
    vendor: str | None = None,
    model: str | None = None,
    type: EquipmentType | None = None,
) -> list[BrewingEquipment]:
    query = select(BrewingEquipment).order_by(
        BrewingEquipment.vendor, BrewingEquipment.model,
    )
    if vendor:
        query = query.where(contains_ci(BrewingEquipment.vendor, vendor))
    if model:
        query = query.where(contains_ci(BrewingEquipment.model, model))
    if type is not None:
        query = query.where(BrewingEquipment.type == type)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_equipment(db: AsyncSession, equipment_id: int) -> BrewingEquipment:
    return await get_or_raise(db, BrewingEquipment, equipment_id, RESOURCE)


async def most_used_equipment(
    db: AsyncSession, count: int = 10,
) -> list[BrewingEquipment]:
    uses = func.count(BrewSession.id).label("uses")
    result = await db.execute(
        select(BrewingEquipment, uses)
        .join(BrewSession, BrewSession.brewing_equipment_id == BrewingEquipment.id)
        .group_by(BrewingEquipment.id)
        .order_by(desc(uses), BrewingEquipment.vendor)
        .limit(count),
    )
    return list(result.scalars().all())


async def vendors(db: AsyncSession) -> list[str]:
    result = await db.execute(
        select(BrewingEquipment.vendor).distinct().order_by(BrewingEquipment.vendor),
    )
    return list(result.scalars().all())


async def models(db: AsyncSession, vendor: str | None = None) -> list[str]:
    query = select(BrewingEquipment.model).distinct().order_by(BrewingEquipment.model)
    if vendor:
        query = query.where(func.lower(BrewingEquipment.vendor) == vendor.lower())
    result = await db.execute(query)
    return list(result.scalars().all())


def _validate(payload: EquipmentCreate | EquipmentUpdate) -> None:
    errors = validate_equipment(payload)
    if errors:
        raise BusinessValidationError(errors)


def _clean_specifications(specs: dict[str, str]) -> dict[str, str]:
    return {key.strip(): value.strip() for key, value in specs.items()}


async def create_equipment(
    db: AsyncSession, payload: EquipmentCreate,
) -> BrewingEquipment:
    _validate(payload)
    equipment = BrewingEquipment(
        vendor=payload.vendor.strip(),
        model=payload.model.strip(),
        type=payload.type,
        specifications=_clean_specifications(payload.specifications),
    )
    db.add(equipment)
    await db.commit()
    await db.refresh(equipment)
    logger.info(
        f"Equipment created: {equipment.vendor} {equipment.model}",
        extra={"resource": RESOURCE, "resource_id": equipment.id},
    )
    return equipment


async def update_equipment(
    db: AsyncSession, equipment_id: int, payload: EquipmentUpdate,
) -> BrewingEquipment:
    equipment = await get_equipment(db, equipment_id)
    _validate(payload)
    equipment.vendor = payload.vendor.strip()
    equipment.model = payload.model.strip()
    equipment.type = payload.type
    equipment.specifications = _clean_specifications(payload.specifications)
    await db.commit()
    await db.refresh(equipment)
    logger.info(
        "Equipment updated",
        extra={"resource": RESOURCE, "resource_id": equipment.id},
    )
    return equipment


async def delete_equipment(db: AsyncSession, equipment_id: int) -> None:
    equipment = await get_equipment(db, equipment_id)
    references = await count_brew_sessions(
        db, BrewSession.brewing_equipment_id, equipment_id,
    )
    if references:
        raise ReferentialIntegrityError(
            f"Cannot delete equipment {equipment_id}: it is used by "
            f"{references} brew session(s).",
            ErrorContext(resource=RESOURCE, resource_id=equipment_id),
        )
    await db.delete(equipment)
    await db.commit()
    logger.info(
        "Equipment deleted",
        extra={"resource": RESOURCE, "resource_id": equipment_id},
    )
