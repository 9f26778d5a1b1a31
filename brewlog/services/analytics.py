"""Analytics Service — loads brew history and hands it to core/analytics.py.

Invariants:
    - Read-only: never writes or commits
    - All computation lives in core/analytics.py; this module only queries
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.core.analytics import (
    build_correlations, build_dashboard, build_equipment_performance,
    build_recommendations,
)
from brewlog.models.brew_session import BrewSession
from brewlog.models.brewing_equipment import BrewingEquipment
from brewlog.models.coffee_bean import CoffeeBean
from brewlog.models.grind_setting import GrindSetting

logger = logging.getLogger(__name__)


async def _all_sessions(db: AsyncSession) -> list[BrewSession]:
    result = await db.execute(select(BrewSession).order_by(BrewSession.id))
    return list(result.scalars().all())


async def _count(db: AsyncSession, model: type) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def dashboard(db: AsyncSession) -> dict:
    sessions = await _all_sessions(db)
    return build_dashboard(
        sessions,
        total_coffee_beans=await _count(db, CoffeeBean),
        total_grind_settings=await _count(db, GrindSetting),
        total_equipment=await _count(db, BrewingEquipment),
    )


async def correlations(db: AsyncSession) -> dict:
    return build_correlations(await _all_sessions(db))


async def recommendations(db: AsyncSession) -> list[dict]:
    sessions = await _all_sessions(db)
    result = build_recommendations(sessions)
    logger.debug(f"Built {len(result)} recommendations from {len(sessions)} sessions")
    return result


async def equipment_performance(db: AsyncSession) -> dict:
    return build_equipment_performance(await _all_sessions(db))
