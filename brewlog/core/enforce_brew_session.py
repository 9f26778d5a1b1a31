"""Brew Session Rules — business-rule validation for brew session payloads.

Invariants:
    - method: a defined BrewMethod
    - water_temperature: > 0, <= 100 °C, and inside the method's range
    - NaN and infinite temperatures are rejected before any range check
    - brew_time_seconds: > 0, <= 24 h, and inside the method's range
    - tasting_notes <= 1000 chars; rating in 1..10 when present
    - Referenced ids > 0 (existence is checked by the service, which needs the DB)
    - Method-specific checks only run once the method itself is valid

Design Decisions:
    - Ranges as module-level tables keyed by BrewMethod: one place to tune per-method guidance
"""

import math
from typing import Protocol

from brewlog.core.domain_types import BrewMethod
from brewlog.core.field_rules import (
    FieldError, field_error, check_max_length, check_positive_id,
    check_symbolic, collect_errors,
)

MINUTE = 60
HOUR = 60 * MINUTE
MAX_BREW_TIME_SECONDS = 24 * HOUR

TEMPERATURE_RANGES: dict[BrewMethod, tuple[float, float]] = {
    BrewMethod.ESPRESSO: (88, 96),
    BrewMethod.FRENCH_PRESS: (92, 96),
    BrewMethod.POUR_OVER: (90, 96),
    BrewMethod.DRIP: (90, 96),
    BrewMethod.AEROPRESS: (80, 95),
    BrewMethod.COLD_BREW: (4, 25),
}

BREW_TIME_RANGES: dict[BrewMethod, tuple[int, int]] = {
    BrewMethod.ESPRESSO: (20, 40),
    BrewMethod.FRENCH_PRESS: (3 * MINUTE, 5 * MINUTE),
    BrewMethod.POUR_OVER: (2 * MINUTE, 6 * MINUTE),
    BrewMethod.DRIP: (4 * MINUTE, 8 * MINUTE),
    BrewMethod.AEROPRESS: (1 * MINUTE, 3 * MINUTE),
    BrewMethod.COLD_BREW: (8 * HOUR, 24 * HOUR),
}


class BrewSessionInput(Protocol):
    method: BrewMethod | None
    water_temperature: float
    brew_time_seconds: int
    tasting_notes: str
    rating: int | None
    coffee_bean_id: int
    grind_setting_id: int
    brewing_equipment_id: int | None


def format_duration(seconds: int) -> str:
    """20 -> '20 seconds', 180 -> '3 minutes', 28800 -> '8 hours'."""
    if seconds % HOUR == 0:
        value, unit = seconds // HOUR, "hour"
    elif seconds % MINUTE == 0:
        value, unit = seconds // MINUTE, "minute"
    else:
        value, unit = seconds, "second"
    return f"{value} {unit}{'' if value == 1 else 's'}"


def check_water_temperature(
    method: BrewMethod | None, temperature: float,
) -> FieldError | None:
    if not math.isfinite(temperature):
        return field_error("water_temperature", "Water temperature must be a finite number")
    if temperature <= 0:
        return field_error("water_temperature", "Water temperature must be greater than 0")
    if temperature > 100:
        return field_error("water_temperature", "Water temperature cannot exceed 100°C")
    if method not in TEMPERATURE_RANGES:
        return None
    low, high = TEMPERATURE_RANGES[method]
    if not low <= temperature <= high:
        return field_error(
            "water_temperature",
            f"{method} water temperature should be between {low}°C and {high}°C",
        )
    return None


def check_brew_time(method: BrewMethod | None, seconds: int) -> FieldError | None:
    if seconds <= 0:
        return field_error("brew_time_seconds", "Brew time must be greater than zero")
    if seconds > MAX_BREW_TIME_SECONDS:
        return field_error("brew_time_seconds", "Brew time cannot exceed 24 hours")
    if method not in BREW_TIME_RANGES:
        return None
    low, high = BREW_TIME_RANGES[method]
    if not low <= seconds <= high:
        return field_error(
            "brew_time_seconds",
            f"{method} brew time should be between "
            f"{format_duration(low)} and {format_duration(high)}",
        )
    return None


def check_rating(rating: int | None) -> FieldError | None:
    if rating is not None and not 1 <= rating <= 10:
        return field_error("rating", "Rating must be between 1 and 10")
    return None


def validate_brew_session(payload: BrewSessionInput) -> list[FieldError]:
    """Run every brew session rule. Returns all failures."""
    method_error = check_symbolic("method", payload.method, BrewMethod)
    method = None if method_error else payload.method
    return collect_errors([
        method_error,
        check_water_temperature(method, payload.water_temperature),
        check_brew_time(method, payload.brew_time_seconds),
        check_max_length("tasting_notes", payload.tasting_notes, "Tasting notes", 1000),
        check_rating(payload.rating),
        check_positive_id("coffee_bean_id", payload.coffee_bean_id, "Coffee bean ID"),
        check_positive_id("grind_setting_id", payload.grind_setting_id, "Grind setting ID"),
        check_positive_id(
            "brewing_equipment_id", payload.brewing_equipment_id, "Brewing equipment ID",
        ),
    ])
