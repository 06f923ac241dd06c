"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLAlchemy exceptions mapped by translate_store_error: connectivity faults
      become StoreUnavailableError, everything else InternalError
    - health_check never blocks longer than its timeout

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing skipped for SQLite: aiosqlite memory databases use a static pool
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    InterfaceError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from plant_store.core.errors import (
    PlantStoreError, StoreUnavailableError, InternalError,
)

logger = logging.getLogger(__name__)


def translate_store_error(exc: Exception, operation: str) -> PlantStoreError:
    """Map a raw store exception onto the error taxonomy."""
    if isinstance(exc, PlantStoreError):
        return exc
    if isinstance(exc, (OperationalError, InterfaceError)):
        return StoreUnavailableError(operation)
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return StoreUnavailableError(operation)
    return InternalError()


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"DB error: {e}")
            raise translate_store_error(e, "session") from e
        finally:
            await session.close()

    async def health_check(self, timeout: float | None = None) -> bool:
        """Check database connectivity (for readiness probes)."""
        async def _probe():
            async with self.session() as db:
                await db.execute(text("SELECT 1"))

        try:
            await asyncio.wait_for(_probe(), timeout)
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e!r}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise StoreUnavailableError("init")
    async with db_manager.session() as session:
        yield session
