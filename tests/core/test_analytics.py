"""Brewing Analytics — tests for pure aggregation over brew sessions.

Tests cover:
    - confidence_score / equipment_performance_score formulas
    - Dashboard totals, method stats ordering, recent brews
    - Correlation buckets require >= 2 rated samples
    - Recommendations: best bean, grind size, equipment, favorite combo, ordering
    - Equipment performance: best performing ignores unrated equipment
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from brewlog.core.analytics import (
    build_correlations, build_dashboard, build_equipment_performance,
    build_recommendations, confidence_score, equipment_performance_score,
    overall_correlation_strength,
)
from brewlog.core.domain_types import BrewMethod, EquipmentType

START = datetime(2026, 1, 1, tzinfo=timezone.utc)

ONYX = SimpleNamespace(id=1, name="Geometry", brand="Onyx")
STUMPTOWN = SimpleNamespace(id=2, name="Hair Bender", brand="Stumptown")
FINE = SimpleNamespace(grind_size=8)
COARSE = SimpleNamespace(grind_size=24)
GAGGIA = SimpleNamespace(
    id=10, vendor="Gaggia", model="Classic", type=EquipmentType.ESPRESSO_MACHINE,
)
BODUM = SimpleNamespace(
    id=11, vendor="Bodum", model="Chambord", type=EquipmentType.FRENCH_PRESS,
)

_counter = iter(range(1, 1000))


def _session(
    method=BrewMethod.ESPRESSO, rating=8, favorite=False, bean=ONYX,
    grind=FINE, equipment=GAGGIA, temperature=93.0, seconds=28, age_minutes=0,
):
    return SimpleNamespace(
        id=next(_counter),
        method=method,
        water_temperature=temperature,
        brew_time_seconds=seconds,
        rating=rating,
        is_favorite=favorite,
        created_date=START + timedelta(minutes=age_minutes),
        coffee_bean_id=bean.id,
        brewing_equipment_id=equipment.id if equipment else None,
        coffee_bean=bean,
        grind_setting=grind,
        brewing_equipment=equipment,
    )


# ─── scoring ─────────────────────────────────────────────────────

def test_confidence_score_formula():
    assert confidence_score(5, 10) == pytest.approx((0.5 * 0.3 + 0.5 * 0.7) * 100)


def test_confidence_score_saturates_at_ten_samples():
    assert confidence_score(20, 20) == pytest.approx(100.0)


def test_confidence_score_with_no_samples():
    assert confidence_score(0, 0) == 0.0


def test_equipment_performance_score_formula():
    score = equipment_performance_score(8.0, 10, 5)
    assert score == pytest.approx((0.8 * 0.5 + 0.5 * 0.3 + 0.5 * 0.2) * 100)


def test_overall_strength_ignores_single_group_dimensions():
    single = [{"average_rating": 9.0}]
    pair = [{"average_rating": 6.0}, {"average_rating": 8.0}]
    assert overall_correlation_strength(single, pair) == pytest.approx(1.0)
    assert overall_correlation_strength(single) == 0.0


# ─── dashboard ───────────────────────────────────────────────────

def test_dashboard_totals_and_method_stats():
    sessions = [
        _session(rating=8, favorite=True, age_minutes=1),
        _session(rating=6, age_minutes=2),
        _session(
            method=BrewMethod.FRENCH_PRESS, rating=None, equipment=BODUM,
            temperature=94, seconds=240, age_minutes=3,
        ),
    ]
    stats = build_dashboard(sessions, 2, 2, 2)
    assert stats["total_brew_sessions"] == 3
    assert stats["total_coffee_beans"] == 2
    assert stats["favorite_brews"] == 1
    assert stats["average_rating"] == pytest.approx(7.0)
    assert [m["method"] for m in stats["brew_method_stats"]] == [
        BrewMethod.ESPRESSO, BrewMethod.FRENCH_PRESS,
    ]
    assert stats["brew_method_stats"][1]["average_rating"] == 0.0
    assert stats["equipment_stats"][0]["equipment_name"] == "Gaggia Classic"


def test_dashboard_recent_brews_newest_first_limited_to_five():
    sessions = [_session(age_minutes=i) for i in range(7)]
    recent = build_dashboard(sessions, 1, 1, 1)["recent_brews"]
    assert len(recent) == 5
    assert recent[0]["id"] == sessions[-1].id
    assert recent[0]["coffee_bean_name"] == "Onyx Geometry"


def test_dashboard_empty():
    stats = build_dashboard([], 0, 0, 0)
    assert stats["average_rating"] == 0.0
    assert stats["brew_method_stats"] == []
    assert stats["recent_brews"] == []


# ─── correlations ────────────────────────────────────────────────

def test_correlations_group_by_buckets():
    sessions = [
        _session(rating=9, temperature=93.0, seconds=25),
        _session(rating=7, temperature=94.5, seconds=29),
        _session(rating=4, grind=COARSE, temperature=88.0, seconds=35),
        _session(rating=None, grind=COARSE),
    ]
    result = build_correlations(sessions)
    assert result["grind_size_correlations"] == [
        {"grind_size": 8, "average_rating": 8.0, "sample_count": 2},
    ]
    assert result["temperature_correlations"] == [
        {"temperature_range": 90.0, "average_rating": 8.0, "sample_count": 2},
    ]
    assert result["brew_time_correlations"] == [
        {"brew_time_range_seconds": 0, "average_rating": 8.0, "sample_count": 2},
    ]
    assert result["overall_correlation_strength"] == 0.0


# ─── recommendations ─────────────────────────────────────────────

def test_no_rated_sessions_means_no_recommendations():
    assert build_recommendations([_session(rating=None)]) == []


def test_recommendations_cover_each_kind():
    sessions = [
        _session(rating=9, favorite=True),
        _session(rating=9, favorite=True),
        _session(rating=5, bean=STUMPTOWN, grind=COARSE, equipment=BODUM),
        _session(rating=4, bean=STUMPTOWN, grind=COARSE, equipment=BODUM),
    ]
    recommendations = build_recommendations(sessions)
    by_type = {r["type"]: r for r in recommendations}
    assert set(by_type) == {"BestBean", "OptimalGrindSize", "BestEquipment", "FavoriteCombo"}
    assert by_type["BestBean"]["parameters"]["bean_name"] == "Onyx Geometry"
    assert by_type["OptimalGrindSize"]["parameters"]["grind_size"] == 8
    assert by_type["BestEquipment"]["parameters"]["equipment_id"] == GAGGIA.id
    assert by_type["FavoriteCombo"]["parameters"]["method"] == "Espresso"
    assert "Espresso with Onyx Geometry" in by_type["FavoriteCombo"]["description"]
    scores = [r["confidence_score"] for r in recommendations]
    assert scores == sorted(scores, reverse=True)


def test_single_sample_groups_are_not_recommended():
    sessions = [
        _session(rating=10),
        _session(rating=3, bean=STUMPTOWN, grind=COARSE, equipment=BODUM),
    ]
    assert build_recommendations(sessions) == []


def test_shared_equipment_is_the_only_group_with_two_samples():
    sessions = [_session(rating=10), _session(rating=3, bean=STUMPTOWN, grind=COARSE)]
    recommendations = build_recommendations(sessions)
    assert [r["type"] for r in recommendations] == ["BestEquipment"]
    assert recommendations[0]["parameters"]["average_rating"] == pytest.approx(6.5)


# ─── equipment performance ───────────────────────────────────────

def test_equipment_performance_best_and_most_used():
    sessions = [
        _session(rating=9, favorite=True),
        _session(rating=None, equipment=BODUM),
        _session(rating=None, equipment=BODUM),
        _session(rating=None, equipment=BODUM),
        _session(rating=None, equipment=None),
    ]
    result = build_equipment_performance(sessions)
    ids = [item["equipment_id"] for item in result["equipment_performance"]]
    assert set(ids) == {GAGGIA.id, BODUM.id}
    assert result["best_performing_equipment"]["equipment_id"] == GAGGIA.id
    assert result["most_used_equipment"]["equipment_id"] == BODUM.id
    assert result["most_used_equipment"]["total_uses"] == 3


def test_equipment_performance_without_equipment():
    result = build_equipment_performance([_session(equipment=None)])
    assert result == {
        "equipment_performance": [],
        "best_performing_equipment": None,
        "most_used_equipment": None,
    }
