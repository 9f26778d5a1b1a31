"""Field Rules — reusable pure checks shared by the per-resource enforce_* modules.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Each check returns a field error dict {"field", "message"} on violation, None on success
    - collect_errors() runs every check; nothing short-circuits

Design Decisions:
    - Error dicts over exceptions: failures for one request accumulate into a single
      BusinessValidationError raised by the service layer
"""

from typing import Any, Callable, Iterable

from brewlog.core.symbolic import validate_with_details

FieldError = dict[str, str]


def field_error(field: str, message: str) -> FieldError:
    return {"field": field, "message": message}


def collect_errors(checks: Iterable[FieldError | None]) -> list[FieldError]:
    """Keep every failed check, in order."""
    return [error for error in checks if error is not None]


def check_required_text(
    field: str, value: str | None, label: str, max_length: int,
) -> FieldError | None:
    """Non-blank and at most max_length characters."""
    if value is None or not value.strip():
        return field_error(field, f"{label} is required")
    if len(value) > max_length:
        return field_error(field, f"{label} cannot exceed {max_length} characters")
    return None


def check_max_length(
    field: str, value: str | None, label: str, max_length: int,
) -> FieldError | None:
    if value is not None and len(value) > max_length:
        return field_error(field, f"{label} cannot exceed {max_length} characters")
    return None


def check_symbolic(
    field: str, value: Any, target: type, optional: bool = False,
) -> FieldError | None:
    """Symbolic field must hold a defined variant (absent allowed when optional)."""
    outcome = validate_with_details(value, target, optional=optional)
    if not outcome:
        return field_error(field, outcome.message)
    return None


def check_positive_id(field: str, value: int | None, label: str) -> FieldError | None:
    if value is not None and value <= 0:
        return field_error(field, f"{label} must be greater than 0")
    return None


def check_when(
    condition: bool, check: Callable[[], FieldError | None],
) -> FieldError | None:
    """Run check only if condition holds."""
    return check() if condition else None
