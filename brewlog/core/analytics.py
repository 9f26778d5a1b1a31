"""Brewing Analytics — pure aggregation over loaded brew sessions.

Invariants:
    - All functions are PURE: inputs are already-loaded records, outputs are plain dicts
    - Only rated sessions feed averages; groups need >= 2 samples to count as a signal
    - Symbolic values (method, equipment type) are passed through as members;
      response schemas encode them to canonical names

Design Decisions:
    - Aggregation in Python over SQL GROUP BY: data set is one person's brew log,
      and the same functions serve dashboard, correlations and recommendations
"""

from collections import defaultdict
from statistics import fmean, pvariance
from typing import Callable, Hashable, Iterable, Protocol, TypeVar

from brewlog.core.domain_types import BrewMethod, EquipmentType

MIN_GROUP_SAMPLES = 2
RECENT_BREWS_LIMIT = 5
TEMPERATURE_BUCKET = 5
BREW_TIME_BUCKET_SECONDS = 30

K = TypeVar("K", bound=Hashable)


class BeanLike(Protocol):
    id: int
    name: str
    brand: str


class GrindLike(Protocol):
    grind_size: int


class EquipmentLike(Protocol):
    id: int
    vendor: str
    model: str
    type: EquipmentType


class SessionLike(Protocol):
    id: int
    method: BrewMethod
    water_temperature: float
    brew_time_seconds: int
    rating: int | None
    is_favorite: bool
    created_date: object
    coffee_bean_id: int
    brewing_equipment_id: int | None
    coffee_bean: BeanLike
    grind_setting: GrindLike
    brewing_equipment: EquipmentLike | None


# ─── Scoring ─────────────────────────────────────────────────────

def confidence_score(sample_size: int, total_samples: int) -> float:
    """0-100: share of the data (30%) plus absolute sample size, saturating at 10 (70%)."""
    if total_samples == 0:
        return 0.0
    sample_ratio = sample_size / total_samples
    from_sample = min(sample_size / 10.0, 1.0)
    return (sample_ratio * 0.3 + from_sample * 0.7) * 100


def equipment_performance_score(
    average_rating: float, total_uses: int, favorite_count: int,
) -> float:
    """0-100: rating 50%, favorites 30% (saturating at 10), usage 20% (saturating at 20)."""
    rating_score = average_rating / 10.0
    usage_score = min(total_uses / 20.0, 1.0)
    favorite_score = min(favorite_count / 10.0, 1.0)
    return (rating_score * 0.5 + favorite_score * 0.3 + usage_score * 0.2) * 100


# ─── Helpers ─────────────────────────────────────────────────────

def _group_by(
    sessions: Iterable[SessionLike], key: Callable[[SessionLike], K],
) -> dict[K, list[SessionLike]]:
    groups: dict[K, list[SessionLike]] = defaultdict(list)
    for session in sessions:
        groups[key(session)].append(session)
    return dict(groups)


def _average_rating(sessions: list[SessionLike]) -> float:
    ratings = [s.rating for s in sessions if s.rating is not None]
    return fmean(ratings) if ratings else 0.0


def _bean_label(bean: BeanLike) -> str:
    return f"{bean.brand} {bean.name}"


def _equipment_label(equipment: EquipmentLike) -> str:
    return f"{equipment.vendor} {equipment.model}"


def _rated(sessions: Iterable[SessionLike]) -> list[SessionLike]:
    return [s for s in sessions if s.rating is not None]


# ─── Dashboard ───────────────────────────────────────────────────

def build_dashboard(
    sessions: list[SessionLike],
    total_coffee_beans: int,
    total_grind_settings: int,
    total_equipment: int,
) -> dict:
    """Totals, per-method and per-equipment stats, and the most recent brews."""
    method_stats = [
        {
            "method": method,
            "count": len(group),
            "average_rating": _average_rating(group),
            "favorite_count": sum(1 for s in group if s.is_favorite),
        }
        for method, group in _group_by(sessions, lambda s: s.method).items()
    ]
    method_stats.sort(key=lambda m: m["count"], reverse=True)

    with_equipment = [s for s in sessions if s.brewing_equipment_id is not None]
    equipment_stats = []
    for equipment_id, group in _group_by(
        with_equipment, lambda s: s.brewing_equipment_id,
    ).items():
        equipment = group[0].brewing_equipment
        equipment_stats.append({
            "equipment_id": equipment_id,
            "equipment_name": _equipment_label(equipment),
            "type": equipment.type,
            "usage_count": len(group),
            "average_rating": _average_rating(group),
            "favorite_count": sum(1 for s in group if s.is_favorite),
        })
    equipment_stats.sort(key=lambda e: e["usage_count"], reverse=True)

    recent = sorted(sessions, key=lambda s: s.created_date, reverse=True)
    recent_brews = [
        {
            "id": s.id,
            "method": s.method,
            "coffee_bean_name": _bean_label(s.coffee_bean),
            "rating": s.rating,
            "is_favorite": s.is_favorite,
            "created_date": s.created_date,
        }
        for s in recent[:RECENT_BREWS_LIMIT]
    ]

    return {
        "total_brew_sessions": len(sessions),
        "total_coffee_beans": total_coffee_beans,
        "total_grind_settings": total_grind_settings,
        "total_equipment": total_equipment,
        "favorite_brews": sum(1 for s in sessions if s.is_favorite),
        "average_rating": _average_rating(sessions),
        "brew_method_stats": method_stats,
        "equipment_stats": equipment_stats,
        "recent_brews": recent_brews,
    }


# ─── Correlations ────────────────────────────────────────────────

def _correlation_rows(
    rated: list[SessionLike], key: Callable[[SessionLike], K], label: str,
) -> list[dict]:
    rows = [
        {
            label: bucket,
            "average_rating": _average_rating(group),
            "sample_count": len(group),
        }
        for bucket, group in _group_by(rated, key).items()
        if len(group) >= MIN_GROUP_SAMPLES
    ]
    rows.sort(key=lambda r: r[label])
    return rows


def overall_correlation_strength(*dimensions: list[dict]) -> float:
    """Mean of the population variance of group averages, over dimensions with > 1 group."""
    variances = [
        pvariance([row["average_rating"] for row in rows])
        for rows in dimensions
        if len(rows) > 1
    ]
    return fmean(variances) if variances else 0.0


def build_correlations(sessions: list[SessionLike]) -> dict:
    """Average rating by grind size, 5 °C temperature bucket and 30 s brew-time bucket."""
    rated = _rated(sessions)
    grind = _correlation_rows(
        rated, lambda s: s.grind_setting.grind_size, "grind_size",
    )
    temperature = _correlation_rows(
        rated,
        lambda s: (s.water_temperature // TEMPERATURE_BUCKET) * TEMPERATURE_BUCKET,
        "temperature_range",
    )
    brew_time = _correlation_rows(
        rated,
        lambda s: (s.brew_time_seconds // BREW_TIME_BUCKET_SECONDS) * BREW_TIME_BUCKET_SECONDS,
        "brew_time_range_seconds",
    )
    return {
        "grind_size_correlations": grind,
        "temperature_correlations": temperature,
        "brew_time_correlations": brew_time,
        "overall_correlation_strength": overall_correlation_strength(
            grind, temperature, brew_time,
        ),
    }


# ─── Recommendations ─────────────────────────────────────────────

def _best_group(
    rated: list[SessionLike], key: Callable[[SessionLike], K],
) -> tuple[K, list[SessionLike]] | None:
    candidates = [
        (k, group) for k, group in _group_by(rated, key).items()
        if len(group) >= MIN_GROUP_SAMPLES
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda item: _average_rating(item[1]))


def build_recommendations(sessions: list[SessionLike]) -> list[dict]:
    """Best bean, optimal grind size, best equipment, favorite combination; by confidence."""
    rated = _rated(sessions)
    if not rated:
        return []
    total = len(rated)
    recommendations = []

    best_bean = _best_group(rated, lambda s: s.coffee_bean_id)
    if best_bean:
        bean_id, group = best_bean
        name, avg = _bean_label(group[0].coffee_bean), _average_rating(group)
        recommendations.append({
            "type": "BestBean",
            "title": "Try Your Best Performing Bean",
            "description": f"{name} has your highest average rating of {avg:.1f}",
            "confidence_score": confidence_score(len(group), total),
            "parameters": {"bean_id": bean_id, "bean_name": name, "average_rating": avg},
        })

    best_grind = _best_group(rated, lambda s: s.grind_setting.grind_size)
    if best_grind:
        grind_size, group = best_grind
        avg = _average_rating(group)
        recommendations.append({
            "type": "OptimalGrindSize",
            "title": "Optimal Grind Size Found",
            "description": (
                f"Grind size {grind_size} produces your best results "
                f"with an average rating of {avg:.1f}"
            ),
            "confidence_score": confidence_score(len(group), total),
            "parameters": {"grind_size": grind_size, "average_rating": avg},
        })

    best_equipment = _best_group(
        [s for s in rated if s.brewing_equipment_id is not None],
        lambda s: s.brewing_equipment_id,
    )
    if best_equipment:
        equipment_id, group = best_equipment
        name, avg = _equipment_label(group[0].brewing_equipment), _average_rating(group)
        recommendations.append({
            "type": "BestEquipment",
            "title": "Your Best Performing Equipment",
            "description": (
                f"{name} gives you the best results "
                f"with an average rating of {avg:.1f}"
            ),
            "confidence_score": confidence_score(len(group), total),
            "parameters": {
                "equipment_id": equipment_id, "equipment_name": name,
                "average_rating": avg,
            },
        })

    favorites = [s for s in rated if s.is_favorite]
    combos = _group_by(
        favorites,
        lambda s: (s.method, _bean_label(s.coffee_bean), s.grind_setting.grind_size),
    )
    if combos:
        (method, bean_name, grind_size), group = max(
            combos.items(), key=lambda item: len(item[1]),
        )
        if len(group) >= MIN_GROUP_SAMPLES:
            recommendations.append({
                "type": "FavoriteCombo",
                "title": "Your Favorite Combination",
                "description": (
                    f"You've marked {method} with {bean_name} at grind size "
                    f"{grind_size} as favorite {len(group)} times"
                ),
                "confidence_score": confidence_score(len(group), len(favorites)),
                "parameters": {
                    "method": method.canonical, "bean_name": bean_name,
                    "grind_size": grind_size, "favorite_count": len(group),
                },
            })

    recommendations.sort(key=lambda r: r["confidence_score"], reverse=True)
    return recommendations


# ─── Equipment Performance ───────────────────────────────────────

def build_equipment_performance(sessions: list[SessionLike]) -> dict:
    """Per-equipment score, plus best performing (rated) and most used."""
    with_equipment = [s for s in sessions if s.brewing_equipment_id is not None]
    items = []
    for equipment_id, group in _group_by(
        with_equipment, lambda s: s.brewing_equipment_id,
    ).items():
        equipment = group[0].brewing_equipment
        average = _average_rating(group)
        favorites = sum(1 for s in group if s.is_favorite)
        items.append({
            "equipment_id": equipment_id,
            "vendor": equipment.vendor,
            "model": equipment.model,
            "type": equipment.type,
            "total_uses": len(group),
            "average_rating": average,
            "favorite_count": favorites,
            "performance_score": equipment_performance_score(
                average, len(group), favorites,
            ),
        })
    items.sort(key=lambda i: i["performance_score"], reverse=True)

    rated_items = [i for i in items if i["average_rating"] > 0]
    return {
        "equipment_performance": items,
        "best_performing_equipment": rated_items[0] if rated_items else None,
        "most_used_equipment": (
            max(items, key=lambda i: i["total_uses"]) if items else None
        ),
    }
