"""Analytics Schemas — response contracts for /api/v1/analytics.

Invariants:
    - Shapes match the dicts built by core/analytics.py
    - method and type fields follow the symbolic wire contract (canonical names)
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from brewlog.schemas.symbolic_fields import BrewMethodValue, EquipmentTypeValue


class BrewMethodStats(BaseModel):
    method: BrewMethodValue
    count: int
    average_rating: float
    favorite_count: int


class EquipmentStats(BaseModel):
    equipment_id: int
    equipment_name: str
    type: EquipmentTypeValue
    usage_count: int
    average_rating: float
    favorite_count: int


class RecentBrew(BaseModel):
    id: int
    method: BrewMethodValue
    coffee_bean_name: str
    rating: int | None = None
    is_favorite: bool
    created_date: datetime


class DashboardStats(BaseModel):
    total_brew_sessions: int
    total_coffee_beans: int
    total_grind_settings: int
    total_equipment: int
    favorite_brews: int
    average_rating: float
    brew_method_stats: list[BrewMethodStats]
    equipment_stats: list[EquipmentStats]
    recent_brews: list[RecentBrew]


class GrindSizeCorrelation(BaseModel):
    grind_size: int
    average_rating: float
    sample_count: int


class TemperatureCorrelation(BaseModel):
    temperature_range: float
    average_rating: float
    sample_count: int


class BrewTimeCorrelation(BaseModel):
    brew_time_range_seconds: int
    average_rating: float
    sample_count: int


class CorrelationAnalysis(BaseModel):
    grind_size_correlations: list[GrindSizeCorrelation]
    temperature_correlations: list[TemperatureCorrelation]
    brew_time_correlations: list[BrewTimeCorrelation]
    overall_correlation_strength: float


class Recommendation(BaseModel):
    type: str
    title: str
    description: str
    confidence_score: float
    parameters: dict[str, Any]


class EquipmentPerformanceItem(BaseModel):
    equipment_id: int
    vendor: str
    model: str
    type: EquipmentTypeValue
    total_uses: int
    average_rating: float
    favorite_count: int
    performance_score: float


class EquipmentPerformance(BaseModel):
    equipment_performance: list[EquipmentPerformanceItem]
    best_performing_equipment: EquipmentPerformanceItem | None = None
    most_used_equipment: EquipmentPerformanceItem | None = None
