"""Database Session Manager - lazily connected process-wide engine with automatic rollback.

Invariants:
    - At most one DatabaseSessionManager (and engine) per process
    - Connection is established on first use; racing callers await the same
      in-flight task, so the engine is never created twice
    - A failed connection attempt clears the in-flight task; the next caller
      tries again (no automatic retry/backoff)
    - close_db() cancels an in-flight connect; an engine built by a cancelled
      or failed attempt is disposed, never published
    - Every session auto-rolls-back on exception (no partial commits leak)
    - SQLAlchemy exceptions escaping a session are mapped to DatabaseError

Design Decisions:
    - asyncio.Task as the shared "promise": later callers await it instead of
      opening a second connection; asyncio.shield keeps one cancelled request
      from cancelling the connect for everyone else
    - Schema (tables + unique slug index) ensured on connect when
      database_auto_create is on; production runs alembic instead
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Timeouts and retries are left to the driver defaults
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from eventdesk.config import get_settings
from eventdesk.core.errors import DatabaseError
from eventdesk.db.base import Base
import eventdesk.models  # noqa: F401  (populates Base.metadata)

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ensure_ready(self, create_schema: bool) -> None:
        """Open a first connection; optionally create tables and indexes."""
        try:
            async with self.engine.begin() as conn:
                if create_schema:
                    await conn.run_sync(Base.metadata.create_all)
                else:
                    await conn.execute(text("SELECT 1"))
        except (OSError, SQLAlchemyError) as e:
            logger.error(f"DB connect failed: {e}")
            raise DatabaseError("Could not connect to database", "connect") from e

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit") from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown") from e
        except BaseException:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except DatabaseError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (created on first use by connect_db)
db_manager: DatabaseSessionManager | None = None
_connecting: asyncio.Task | None = None


async def _establish() -> DatabaseSessionManager:
    global db_manager, _connecting
    settings = get_settings()
    manager: DatabaseSessionManager | None = None
    try:
        manager = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        await manager.ensure_ready(settings.database_auto_create)
    except BaseException:
        if _connecting is asyncio.current_task():
            _connecting = None
        if manager is not None:
            await manager.dispose()
        raise
    db_manager = manager
    logger.info("Database connection established")
    return manager


def _retrieve_outcome(task: asyncio.Task) -> None:
    # Marks the failure as retrieved when every awaiter was cancelled
    if not task.cancelled():
        task.exception()


async def connect_db() -> DatabaseSessionManager:
    """Return the process-wide manager, connecting on first call."""
    global _connecting
    if db_manager is not None:
        return db_manager
    if _connecting is None:
        _connecting = asyncio.ensure_future(_establish())
        _connecting.add_done_callback(_retrieve_outcome)
    return await asyncio.shield(_connecting)


async def close_db() -> None:
    """Dispose the engine (FastAPI shutdown). A later connect_db() reconnects.

    An in-flight connect is cancelled first; its half-built engine is disposed
    by _establish, so nothing it created outlives shutdown.
    """
    global db_manager, _connecting
    pending, _connecting = _connecting, None
    if pending is not None and not pending.done():
        pending.cancel()
        try:
            await pending
        except asyncio.CancelledError:
            logger.info("In-flight database connect cancelled")
        except DatabaseError as e:
            logger.warning(f"In-flight database connect failed during shutdown: {e}")

    manager, db_manager = db_manager, None
    if manager is not None:
        await manager.dispose()
        logger.info("Database connection closed")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    manager = await connect_db()
    async with manager.session() as session:
        yield session
