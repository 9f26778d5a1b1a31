"""Coffee Bean Rules — business-rule validation for coffee bean create/update payloads.

Invariants:
    - name and brand: required, <= 100 chars
    - origin: required, <= 200 chars
    - roast_level: a defined RoastLevel (an empty string decodes to None and fails here)
"""

from typing import Protocol

from brewlog.core.domain_types import RoastLevel
from brewlog.core.field_rules import (
    FieldError, check_required_text, check_symbolic, collect_errors,
)


class CoffeeBeanInput(Protocol):
    name: str
    brand: str
    roast_level: RoastLevel | None
    origin: str


def validate_coffee_bean(payload: CoffeeBeanInput) -> list[FieldError]:
    """Run every coffee bean rule. Returns all failures (empty list on success)."""
    return collect_errors([
        check_required_text("name", payload.name, "Coffee bean name", 100),
        check_required_text("brand", payload.brand, "Brand", 100),
        check_symbolic("roast_level", payload.roast_level, RoastLevel),
        check_required_text("origin", payload.origin, "Origin", 200),
    ])
