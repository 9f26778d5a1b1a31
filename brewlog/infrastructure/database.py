"""Database Session Manager — async engine per backend, rollback on failure, readiness check.

Invariants:
    - Every session rolls back on any exception before it propagates
    - SQLAlchemy failures leave as DatabaseError (core/errors.py), classified by
      DB_ERROR_TRANSLATIONS; the original exception is chained
    - Pool sizing and pre-ping apply to server backends only; SQLite (aiosqlite)
      keeps SQLAlchemy's default pool
    - db_manager is None until init_db() runs in the lifespan

Design Decisions:
    - expire_on_commit=False: services return ORM rows after commit without lazy loads
    - create_all() exists for local SQLite runs; deployments migrate with Alembic
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from brewlog.core.errors import DatabaseError
from brewlog.db.base import Base

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors.
DB_ERROR_TRANSLATIONS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "commit", "Integrity constraint violated"),
    (OperationalError, "execute", "Connection or operational error"),
    (DBAPIError, "query", "Database driver error"),
)


def translate_db_error(exc: SQLAlchemyError) -> DatabaseError:
    """Map a SQLAlchemy exception to the DatabaseError reported to clients."""
    for error_type, operation, message in DB_ERROR_TRANSLATIONS:
        if isinstance(exc, error_type):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


def engine_options(
    database_url: str, pool_size: int, max_overflow: int,
) -> dict[str, Any]:
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions that roll back on failure."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info(
            f"Database engine ready ({self.engine.dialect.name})",
            extra={"resource": "database"},
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = translate_db_error(e)
            logger.error(
                f"DB {error.operation} failed ({type(e).__name__}): {e}",
                extra={"error_code": error.code, "resource": "database"},
            )
            raise error from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """True when a trivial query round-trips; used by /health/ready."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(
                f"DB health check failed: {e}", extra={"resource": "database"},
            )
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
