"""Database Infrastructure — tests for the session manager and UTC timestamp column.

Tests cover:
    - SQLAlchemy exceptions translated to DatabaseError by class
    - Pool options only for server backends
    - Failed statements roll back and surface as DatabaseError with the cause chained
    - UTCDateTime loads aware UTC values from SQLite
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, InvalidRequestError, OperationalError,
)

from brewlog.core.domain_types import RoastLevel
from brewlog.core.errors import DatabaseError
from brewlog.db.types import UTCDateTime, as_utc
from brewlog.infrastructure.database import (
    DatabaseSessionManager, engine_options, translate_db_error,
)
from brewlog.models import CoffeeBean


@pytest.mark.parametrize("exc, operation", [
    (IntegrityError("INSERT", {}, Exception("unique")), "commit"),
    (OperationalError("SELECT", {}, Exception("locked")), "execute"),
    (DBAPIError("SELECT", {}, Exception("driver")), "query"),
    (InvalidRequestError("bad state"), "unknown"),
])
def test_translate_db_error(exc, operation):
    error = translate_db_error(exc)
    assert isinstance(error, DatabaseError)
    assert error.operation == operation
    assert error.http_status == 503


def test_sqlite_keeps_default_pool():
    assert engine_options("sqlite+aiosqlite:///./brewlog.db", 20, 10) == {}


def test_server_backend_gets_pool_settings():
    options = engine_options("postgresql+asyncpg://u:p@localhost/brewlog", 5, 2)
    assert options["pool_size"] == 5
    assert options["max_overflow"] == 2
    assert options["pool_pre_ping"] is True


async def test_failed_statement_becomes_database_error():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    try:
        with pytest.raises(DatabaseError) as exc_info:
            async with manager.session() as db:
                await db.execute(text("SELECT * FROM no_such_table"))
        assert exc_info.value.operation == "execute"
        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert await manager.health_check() is True
    finally:
        await manager.dispose()


def test_as_utc_treats_naive_values_as_utc():
    naive = datetime(2026, 3, 1, 12, 30)
    assert as_utc(naive) == naive.replace(tzinfo=timezone.utc)
    offset = datetime(2026, 3, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))
    assert as_utc(offset).tzinfo is timezone.utc
    assert as_utc(offset).hour == 12
    assert as_utc(None) is None


def test_utc_datetime_result_is_aware():
    column = UTCDateTime()
    loaded = column.process_result_value(datetime(2026, 3, 1, 8, 0), None)
    assert loaded.utcoffset() == timedelta(0)


async def test_created_date_reloads_with_utc_offset(test_session_factory):
    async with test_session_factory() as db:
        db.add(CoffeeBean(
            name="Geometry", brand="Onyx", roast_level=RoastLevel.LIGHT, origin="Ethiopia",
        ))
        await db.commit()
    async with test_session_factory() as db:
        bean = (await db.execute(select(CoffeeBean))).scalar_one()
    assert bean.created_date.utcoffset() == timedelta(0)
