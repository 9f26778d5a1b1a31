"""Grind Setting Rules — business-rule validation for grind setting payloads.

Invariants:
    - grind_size in 1..30 (1 finest for espresso, 30 coarsest for cold brew)
    - grind_time_seconds > 0 and <= 10 minutes
    - grind_weight > 0 and <= 1000 g
    - NaN and infinities fail the numeric rules
    - grinder_type required, <= 100 chars; notes <= 500 chars
"""

import math
from typing import Protocol

from brewlog.core.field_rules import (
    FieldError, field_error, check_required_text, check_max_length,
    collect_errors,
)

MAX_GRIND_TIME_SECONDS = 10 * 60


class GrindSettingInput(Protocol):
    grind_size: int
    grind_time_seconds: float
    grind_weight: float
    grinder_type: str
    notes: str


def check_grind_size(grind_size: int) -> FieldError | None:
    if not 1 <= grind_size <= 30:
        return field_error(
            "grind_size",
            "Grind size must be between 1 (finest, for espresso) "
            "and 30 (coarsest, for cold brew)",
        )
    return None


def check_grind_time(seconds: float) -> FieldError | None:
    if not math.isfinite(seconds):
        return field_error("grind_time_seconds", "Grind time must be a finite number")
    if seconds <= 0:
        return field_error("grind_time_seconds", "Grind time must be greater than zero")
    if seconds > MAX_GRIND_TIME_SECONDS:
        return field_error("grind_time_seconds", "Grind time cannot exceed 10 minutes")
    return None


def check_grind_weight(grams: float) -> FieldError | None:
    if not math.isfinite(grams):
        return field_error("grind_weight", "Grind weight must be a finite number")
    if grams <= 0:
        return field_error("grind_weight", "Grind weight must be greater than zero")
    if grams > 1000:
        return field_error("grind_weight", "Grind weight cannot exceed 1000 grams")
    return None


def validate_grind_setting(payload: GrindSettingInput) -> list[FieldError]:
    """Run every grind setting rule. Returns all failures."""
    return collect_errors([
        check_grind_size(payload.grind_size),
        check_grind_time(payload.grind_time_seconds),
        check_grind_weight(payload.grind_weight),
        check_required_text("grinder_type", payload.grinder_type, "Grinder type", 100),
        check_max_length("notes", payload.notes, "Notes", 500),
    ])
