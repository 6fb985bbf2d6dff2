"""Database Session Manager — async engine, per-request sessions, store transactions.

Invariants:
    - One engine (connection pool) per process, owned by the app lifespan via app.state
    - Every session rolls back on exception before it is closed (no partial commits leak)
    - SQLite connections always run with PRAGMA foreign_keys=ON
    - SQLAlchemy exceptions become StoreFailureError in store_operation, the one
      place that knows which operation failed; session() only cleans up

Design Decisions:
    - Manager held on app.state instead of a module singleton: handlers get it by
      reference through get_db, tests swap it without patching globals
    - pool_size/max_overflow only for server databases: SQLite pools differently
    - expire_on_commit=False: rows stay readable after commit in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

from forms_api.core.errors import FormsError, StoreFailureError
from forms_api.db.base import Base
import forms_api.models  # noqa: F401

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement (and so ON DELETE CASCADE) for every new SQLite connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 5, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            enable_sqlite_foreign_keys(self.engine)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session that is rolled back on any exception, then closed."""
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """CREATE TABLE IF NOT EXISTS for every model (alembic handles managed deployments)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()


@asynccontextmanager
async def store_operation(
    db: AsyncSession, operation: str, commit: bool = True,
) -> AsyncGenerator[AsyncSession, None]:
    """Run one store operation as a unit: commit on success, rollback on any error.

    FormsError raised inside (e.g. not found) propagates unchanged; driver
    errors become StoreFailureError tagged with the operation name.
    """
    try:
        yield db
        if commit:
            await db.commit()
    except FormsError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Store operation {operation} failed: {e}",
            extra={"op": operation},
        )
        raise StoreFailureError(type(e).__name__, operation) from e


def get_db_manager(request: Request) -> DatabaseSessionManager:
    """FastAPI dependency for the process-wide session manager."""
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with get_db_manager(request).session() as session:
        yield session
