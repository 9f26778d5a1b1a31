"""Column Types — symbolic values persisted by canonical name, timestamps kept in UTC.

Invariants:
    - Stored value is always encode(member) (the canonical name), never the ordinal
    - Loaded value is decode(stored) so rows written with any casing still load
    - None round-trips as NULL
    - UTCDateTime always loads an aware UTC datetime, including on SQLite, which
      stores no offset; naive values are taken to be UTC on the way in and out

Design Decisions:
    - Names over ordinals in the database: rows stay readable and survive reordering
      of declarations (same choice as the wire format)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.types import TypeDecorator

from brewlog.core.symbolic import decode, encode, symbolic_type


class SymbolicColumn(TypeDecorator):
    """String column holding a SymbolicEnum by canonical name."""

    impl = String
    cache_ok = True

    def __init__(self, target: type, length: int = 40):
        super().__init__(length)
        self.target = target
        symbolic_type(target)

    def process_bind_param(self, value, dialect):
        member = decode(value, self.target)
        return None if member is None else encode(member)

    def process_result_value(self, value, dialect):
        return decode(value, self.target)


def as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware timestamp normalized to UTC on every backend."""

    impl = DateTime
    cache_ok = True

    def __init__(self):
        super().__init__(timezone=True)

    def process_bind_param(self, value, dialect):
        return as_utc(value)

    def process_result_value(self, value, dialect):
        return as_utc(value)
