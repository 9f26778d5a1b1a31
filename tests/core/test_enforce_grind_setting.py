"""Grind Setting Rules — tests for pure grind setting validation.

Tests cover:
    - Grind size bounds (1..30)
    - Grind time and weight bounds
    - Grinder type required, notes length
"""

from types import SimpleNamespace

import pytest

from brewlog.core.enforce_grind_setting import (
    check_grind_size, check_grind_time, check_grind_weight, validate_grind_setting,
)


def _grind(**overrides):
    fields = {
        "grind_size": 15, "grind_time_seconds": 10.0, "grind_weight": 18.0,
        "grinder_type": "Baratza Encore", "notes": "",
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_valid_grind_setting_passes():
    assert validate_grind_setting(_grind()) == []


@pytest.mark.parametrize("size", [1, 30])
def test_grind_size_bounds_inclusive(size):
    assert check_grind_size(size) is None


@pytest.mark.parametrize("size", [0, 31])
def test_grind_size_out_of_range(size):
    error = check_grind_size(size)
    assert error["message"] == (
        "Grind size must be between 1 (finest, for espresso) "
        "and 30 (coarsest, for cold brew)"
    )


def test_grind_time_must_be_positive():
    assert check_grind_time(0)["message"] == "Grind time must be greater than zero"


def test_grind_time_capped_at_ten_minutes():
    assert check_grind_time(600) is None
    assert check_grind_time(600.5)["message"] == "Grind time cannot exceed 10 minutes"


def test_grind_weight_bounds():
    assert check_grind_weight(-1) is not None
    assert check_grind_weight(1000) is None
    assert check_grind_weight(1000.1)["message"] == "Grind weight cannot exceed 1000 grams"


def test_grinder_type_required():
    errors = validate_grind_setting(_grind(grinder_type=""))
    assert errors == [{"field": "grinder_type", "message": "Grinder type is required"}]


def test_notes_limit():
    errors = validate_grind_setting(_grind(notes="n" * 501))
    assert errors[0]["field"] == "notes"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_time_and_weight_rejected(value):
    assert check_grind_time(value)["message"] == "Grind time must be a finite number"
    assert check_grind_weight(value)["message"] == "Grind weight must be a finite number"
