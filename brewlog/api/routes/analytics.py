"""Analytics Routes — /api/v1/analytics (read-only)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.infrastructure.database import get_db
from brewlog.schemas.analytics import (
    CorrelationAnalysis, DashboardStats, EquipmentPerformance, Recommendation,
)
from brewlog.services import analytics as service

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


@router.get(
    "/dashboard", response_model=DashboardStats, response_model_exclude_none=True,
)
async def dashboard(db: AsyncSession = Depends(get_db)):
    """Totals, per-method and per-equipment stats, recent brews."""
    return await service.dashboard(db)


@router.get("/correlations", response_model=CorrelationAnalysis)
async def correlations(db: AsyncSession = Depends(get_db)):
    """Average rating by grind size, temperature and brew time."""
    return await service.correlations(db)


@router.get("/recommendations", response_model=list[Recommendation])
async def recommendations(db: AsyncSession = Depends(get_db)):
    return await service.recommendations(db)


@router.get(
    "/equipment-performance", response_model=EquipmentPerformance,
    response_model_exclude_none=True,
)
async def equipment_performance(db: AsyncSession = Depends(get_db)):
    return await service.equipment_performance(db)
