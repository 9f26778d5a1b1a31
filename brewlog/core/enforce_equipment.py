"""Equipment Rules — business-rule validation for brewing equipment payloads.

Invariants:
    - vendor and model: required, <= 100 chars
    - type: a defined EquipmentType
    - specifications: <= 20 entries, keys and values non-blank and <= 100 chars each
    - Espresso machines: a 'Pressure' spec, when present, mentions "bar"
    - Grinders: a 'BurrType' spec, when present, names a known burr material/shape
    - Numeric specs are read from the leading number of the value ("1.8 L" is 1.8):
      BarPressure in (0, 20], BoilerCapacity, MotorPower and Capacity > 0,
      drip BrewTemperature in 80..100
    - FilterType and Material, when present, are non-blank
    - Per-type rules run only when specifications are present
"""

import re
from typing import Callable, Protocol

from brewlog.core.domain_types import EquipmentType
from brewlog.core.field_rules import (
    FieldError, field_error, check_required_text, check_symbolic,
    check_when, collect_errors,
)

MAX_SPECIFICATIONS = 20
MAX_SPEC_LENGTH = 100
VALID_BURR_TYPES = ("ceramic", "steel", "conical", "flat")
MAX_BAR_PRESSURE = 20
DRIP_BREW_TEMPERATURE_RANGE = (80, 100)
LEADING_NUMBER = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)")


class EquipmentInput(Protocol):
    vendor: str
    model: str
    type: EquipmentType | None
    specifications: dict[str, str] | None


def check_specifications_present(specs: dict[str, str] | None) -> FieldError | None:
    if specs is None:
        return field_error("specifications", "Specifications cannot be null")
    return None


def check_specification_count(specs: dict[str, str]) -> FieldError | None:
    if len(specs) > MAX_SPECIFICATIONS:
        return field_error(
            "specifications",
            f"Cannot have more than {MAX_SPECIFICATIONS} specifications",
        )
    return None


def check_specification_entries(specs: dict[str, str]) -> FieldError | None:
    for key, value in specs.items():
        if (
            not key.strip() or not str(value).strip()
            or len(key) > MAX_SPEC_LENGTH or len(str(value)) > MAX_SPEC_LENGTH
        ):
            return field_error(
                "specifications",
                "Specification keys and values must not be empty "
                f"and cannot exceed {MAX_SPEC_LENGTH} characters each",
            )
    return None


def check_pressure_spec(specs: dict[str, str]) -> FieldError | None:
    """Espresso machine 'Pressure' is optional; if present it must be in bar."""
    pressure = specs.get("Pressure")
    if pressure is None:
        return None
    if not pressure.strip() or "bar" not in pressure.lower():
        return field_error(
            "specifications",
            "Espresso machines should have a valid 'Pressure' specification "
            "(e.g., '9 bar', '15 bar')",
        )
    return None


def check_burr_type_spec(specs: dict[str, str]) -> FieldError | None:
    """Grinder 'BurrType' is optional; if present it must name a known burr."""
    burr_type = specs.get("BurrType")
    if burr_type is None:
        return None
    lowered = burr_type.lower()
    if not burr_type.strip() or not any(b in lowered for b in VALID_BURR_TYPES):
        return field_error(
            "specifications",
            "Grinders should have a 'BurrType' specification (e.g., 'Ceramic', 'Steel')",
        )
    return None


def parse_spec_number(value: str) -> float | None:
    """Leading number of a spec value: '15' -> 15.0, '1.8 L' -> 1.8, 'high' -> None."""
    match = LEADING_NUMBER.match(value)
    return float(match.group(1)) if match else None


def check_numeric_spec(
    specs: dict[str, str], key: str, accepts: Callable[[float], bool], message: str,
) -> FieldError | None:
    """Optional numeric spec; if present its leading number must satisfy accepts."""
    raw = specs.get(key)
    if raw is None:
        return None
    number = parse_spec_number(raw)
    if number is None or not accepts(number):
        return field_error("specifications", message)
    return None


def check_text_spec(specs: dict[str, str], key: str, label: str) -> FieldError | None:
    raw = specs.get(key)
    if raw is not None and not raw.strip():
        return field_error("specifications", f"{label} cannot be empty")
    return None


def _positive(number: float) -> bool:
    return number > 0


def _espresso_machine_specs(specs: dict[str, str]) -> list[FieldError | None]:
    return [
        check_pressure_spec(specs),
        check_numeric_spec(
            specs, "BarPressure", lambda bar: 0 < bar <= MAX_BAR_PRESSURE,
            f"Bar pressure must be a positive number between 0 and {MAX_BAR_PRESSURE}",
        ),
        check_numeric_spec(
            specs, "BoilerCapacity", _positive,
            "Boiler capacity must be a positive number",
        ),
    ]


def _grinder_specs(specs: dict[str, str]) -> list[FieldError | None]:
    return [
        check_burr_type_spec(specs),
        check_numeric_spec(
            specs, "MotorPower", _positive, "Motor power must be a positive number",
        ),
    ]


def _french_press_specs(specs: dict[str, str]) -> list[FieldError | None]:
    return [
        check_numeric_spec(specs, "Capacity", _positive, "Capacity must be a positive number"),
        check_text_spec(specs, "Material", "Material"),
    ]


def _filter_brewer_specs(specs: dict[str, str]) -> list[FieldError | None]:
    return [
        check_text_spec(specs, "FilterType", "Filter type"),
        check_text_spec(specs, "Material", "Material"),
    ]


def _drip_machine_specs(specs: dict[str, str]) -> list[FieldError | None]:
    low, high = DRIP_BREW_TEMPERATURE_RANGE
    return [
        check_numeric_spec(specs, "Capacity", _positive, "Capacity must be a positive number"),
        check_numeric_spec(
            specs, "BrewTemperature", lambda celsius: low <= celsius <= high,
            f"Brew temperature must be between {low} and {high} degrees Celsius",
        ),
    ]


TYPE_SPEC_RULES: dict[EquipmentType, Callable[[dict[str, str]], list[FieldError | None]]] = {
    EquipmentType.ESPRESSO_MACHINE: _espresso_machine_specs,
    EquipmentType.GRINDER: _grinder_specs,
    EquipmentType.FRENCH_PRESS: _french_press_specs,
    EquipmentType.POUR_OVER_SETUP: _filter_brewer_specs,
    EquipmentType.DRIP_MACHINE: _drip_machine_specs,
    EquipmentType.AEROPRESS: _filter_brewer_specs,
}


def check_type_specifications(
    type: EquipmentType | None, specs: dict[str, str],
) -> list[FieldError | None]:
    """Per-type specification rules; unknown or missing types have none."""
    rules = TYPE_SPEC_RULES.get(type)
    return rules(specs) if rules else []


def validate_equipment(payload: EquipmentInput) -> list[FieldError]:
    """Run every equipment rule. Returns all failures."""
    specs = payload.specifications
    has_specs = specs is not None
    return collect_errors([
        check_required_text("vendor", payload.vendor, "Vendor", 100),
        check_required_text("model", payload.model, "Model", 100),
        check_symbolic("type", payload.type, EquipmentType),
        check_specifications_present(specs),
        check_when(has_specs, lambda: check_specification_count(specs)),
        check_when(has_specs, lambda: check_specification_entries(specs)),
        *(check_type_specifications(payload.type, specs) if has_specs else []),
    ])
