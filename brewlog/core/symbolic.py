"""Symbolic Types — one codec for every enum-typed field: wire, docs, and business rules.

Invariants:
    - A symbolic type is registered exactly once, at import time, via @symbolic;
      the registry is read-only afterwards (safe for concurrent readers)
    - Ordinals are unique, canonical names are unique even case-insensitively
    - encode() always returns the canonical name, never the ordinal or a label
    - decode() accepts a case-insensitive name or a legacy integer ordinal;
      "" and None decode to None ("no value") and never raise
    - describe() is the single source of documentation for symbolic fields
    - validate_with_details() failure messages always contain "Accepted values:"

Design Decisions:
    - IntEnum members declared as (ordinal, canonical name[, display label]):
      ordinals stay comparable to legacy integers, names stay PEP 8 on the Python side
    - Registry table built by @symbolic over per-call introspection (ADR: lookups are dict hits)
    - Decode failures raise typed errors from core/errors.py; validation returns a
      ValidationOutcome so callers can accumulate failures
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, TypeVar

from brewlog.core.errors import (
    UnknownNameError, UnknownOrdinalError, UnsupportedShapeError,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="SymbolicEnum")


class SymbolicEnum(IntEnum):
    """Base for symbolic types. Members: NAME = ordinal, "Canonical"[, "Display label"]."""

    def __new__(cls, ordinal: int, canonical: str, label: str | None = None):
        member = int.__new__(cls, ordinal)
        member._value_ = ordinal
        member.canonical = canonical
        member.label = label
        return member

    def __str__(self) -> str:
        return self.canonical

    def __format__(self, format_spec: str) -> str:
        return format(self.canonical, format_spec)


@dataclass(frozen=True)
class SymbolicVariant:
    """One (ordinal, canonical name, optional display label) row of the registry."""
    ordinal: int
    name: str
    label: str | None = None

    @property
    def display_name(self) -> str:
        return self.label or self.name


@dataclass(frozen=True)
class SymbolicType:
    """Registered description of a symbolic enum."""
    name: str
    enum_cls: type
    variants: tuple[SymbolicVariant, ...]
    by_folded_name: dict[str, SymbolicEnum] = field(repr=False, compare=False)
    by_ordinal: dict[int, SymbolicEnum] = field(repr=False, compare=False)

    @property
    def names(self) -> list[str]:
        """Canonical names in declaration order."""
        return [v.name for v in self.variants]

    @property
    def display_names(self) -> list[str]:
        return [v.display_name for v in self.variants]


@dataclass(frozen=True)
class SchemaDescriptor:
    """Documentation for a symbolic field, shared by schemas and parameters."""
    type: str
    enum: tuple[str, ...]
    example: str
    description: str

    def to_schema(self) -> dict:
        return {
            "type": self.type,
            "enum": list(self.enum),
            "example": self.example,
            "description": self.description,
        }


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validate_with_details: ok, or a user-facing failure message."""
    ok: bool
    message: str | None = None

    def __bool__(self) -> bool:
        return self.ok


_REGISTRY: dict[type, SymbolicType] = {}


def symbolic(enum_cls: type[E]) -> type[E]:
    """Class decorator: register a SymbolicEnum subclass in the codec registry."""
    members = list(enum_cls)
    if not members:
        raise ValueError(f"{enum_cls.__name__} declares no variants")
    if len(enum_cls.__members__) != len(members):
        aliases = sorted(set(enum_cls.__members__) - {m.name for m in members})
        raise ValueError(
            f"{enum_cls.__name__} reuses ordinals (aliases: {', '.join(aliases)})",
        )

    by_folded_name: dict[str, SymbolicEnum] = {}
    for member in members:
        folded = member.canonical.casefold()
        if folded in by_folded_name:
            raise ValueError(
                f"{enum_cls.__name__} has duplicate canonical name "
                f"'{member.canonical}' (names are matched case-insensitively)",
            )
        by_folded_name[folded] = member

    _REGISTRY[enum_cls] = SymbolicType(
        name=enum_cls.__name__,
        enum_cls=enum_cls,
        variants=tuple(
            SymbolicVariant(int(m), m.canonical, m.label) for m in members
        ),
        by_folded_name=by_folded_name,
        by_ordinal={int(m): m for m in members},
    )
    logger.debug(
        f"Registered symbolic type {enum_cls.__name__} ({len(members)} variants)",
        extra={"symbolic_type": enum_cls.__name__},
    )
    return enum_cls


def symbolic_type(target: type | SymbolicType) -> SymbolicType:
    """Resolve a SymbolicEnum class (or an already-resolved type) to its registry entry."""
    if isinstance(target, SymbolicType):
        return target
    try:
        return _REGISTRY[target]
    except KeyError:
        raise TypeError(f"{target!r} is not a registered symbolic type") from None


def registered_types() -> list[SymbolicType]:
    return list(_REGISTRY.values())


# ─── Codec ───────────────────────────────────────────────────────

def decode(raw: Any, target: type[E] | SymbolicType) -> E | None:
    """Decode a string name (any case) or legacy ordinal into a member.

    Returns None for None or "" so optional destinations get "no value";
    required destinations reject that later in business-rule validation.
    """
    st = symbolic_type(target)
    if raw is None:
        return None
    if isinstance(raw, st.enum_cls):
        return raw
    if isinstance(raw, str):
        if raw == "":
            return None
        member = st.by_folded_name.get(raw.casefold())
        if member is None:
            raise UnknownNameError(st.name, raw, st.names)
        return member
    if isinstance(raw, int) and not isinstance(raw, (bool, Enum)):
        member = st.by_ordinal.get(raw)
        if member is None:
            raise UnknownOrdinalError(st.name, raw, st.names)
        return member
    raise UnsupportedShapeError(st.name, raw, st.names)


def encode(value: SymbolicEnum) -> str:
    """Canonical wire name of a member."""
    return value.canonical


def describe(
    target: type | SymbolicType, description: str | None = None,
) -> SchemaDescriptor:
    """Documentation for a symbolic field; appends the value list to any existing description."""
    st = symbolic_type(target)
    quoted = ", ".join(f"'{name}'" for name in st.names)
    text = f"Possible values: {quoted}"
    if description:
        text = f"{description}. {text}"
    return SchemaDescriptor(
        type="string",
        enum=tuple(st.names),
        example=st.names[0],
        description=text,
    )


def accepted_values_message(target: type | SymbolicType) -> str:
    st = symbolic_type(target)
    return f"Invalid {st.name}. Accepted values: {', '.join(st.display_names)}"


def validate_with_details(
    value: Any, target: type | SymbolicType, optional: bool = False,
) -> ValidationOutcome:
    """Business-rule check: value must be a defined ordinal (or absent when optional)."""
    st = symbolic_type(target)
    if value is None:
        if optional:
            return ValidationOutcome(ok=True)
    elif _is_defined(value, st):
        return ValidationOutcome(ok=True)
    return ValidationOutcome(ok=False, message=accepted_values_message(st))


def _is_defined(value: Any, st: SymbolicType) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, Enum) and not isinstance(value, st.enum_cls):
        return False
    return isinstance(value, int) and int(value) in st.by_ordinal
