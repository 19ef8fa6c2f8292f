"""
Database connection handle.

One ``Database`` instance is created per process by the application
lifespan, shared by every request through dependency injection, and
disposed on shutdown. Nothing here is a module-level global.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.infrastructure.subscriptions.models import Base, UserModel

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    """SQLite ignores foreign keys unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Async engine plus session factory with an explicit lifecycle.

    Usage:
        database = Database(url)
        database.connect()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self._url = url
        self._echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory

    def connect(self) -> None:
        """Create the engine and session factory. Idempotent."""
        if self._engine is not None:
            return
        engine = create_async_engine(self._url, echo=self._echo, pool_pre_ping=True)
        if engine.dialect.name == "sqlite":
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self._engine = engine
        self._session_factory = async_sessionmaker(engine, expire_on_commit=False)
        logger.info("Database engine created (dialect=%s)", engine.dialect.name)

    def session(self) -> AsyncSession:
        """Open a new session. Use as an async context manager."""
        return self.session_factory()

    async def create_schema(self) -> None:
        """Create missing tables. Existing tables are left as they are."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def ensure_owner(self, owner_id: str, email: str) -> None:
        """Insert the owner row subscriptions reference, if it is missing."""
        async with self.session() as session:
            async with session.begin():
                if await session.get(UserModel, owner_id) is None:
                    session.add(
                        UserModel(
                            id=owner_id,
                            email=email,
                            created_at=datetime.now(timezone.utc),
                        )
                    )
                    logger.info("Created owner %s", owner_id)

    async def dispose(self) -> None:
        """Close every pooled connection. Safe to call when never connected."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")
