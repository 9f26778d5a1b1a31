"""Service Helpers — lookups and reference counts shared by resource services."""

from typing import TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.core.errors import ResourceNotFoundError
from brewlog.models.brew_session import BrewSession

M = TypeVar("M")


async def get_or_raise(
    db: AsyncSession, model: type[M], resource_id: int, resource_name: str,
) -> M:
    """Load by primary key or raise ResourceNotFoundError."""
    instance = await db.get(model, resource_id)
    if instance is None:
        raise ResourceNotFoundError(resource_name, resource_id)
    return instance


async def exists(db: AsyncSession, model: type, resource_id: int) -> bool:
    result = await db.execute(
        select(func.count()).select_from(model).where(model.id == resource_id),
    )
    return result.scalar_one() > 0


async def count_brew_sessions(db: AsyncSession, column, resource_id: int) -> int:
    """Number of brew sessions whose FK column points at resource_id."""
    result = await db.execute(
        select(func.count(BrewSession.id)).where(column == resource_id),
    )
    return result.scalar_one()


def contains_ci(column, needle: str):
    """Case-insensitive substring match."""
    return func.lower(column).contains(needle.lower())
