"""SQLAlchemy async engine and scoped session management.

Provides :class:`Database`, an explicit store handle that owns one async
engine and its session factory.  Repositories receive the handle through
their constructor; there is no module-level engine.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from storefront.core.config import DatabaseConfig

from .models import Base

logger = logging.getLogger(__name__)


def create_engine(
    url: str,
    *,
    pool_size: int = 5,
    max_overflow: int = 10,
    echo: bool = False,
    use_null_pool: bool = False,
) -> AsyncEngine:
    """Create and return a new SQLAlchemy :class:`AsyncEngine`.

    Args:
        url: Async database URL, e.g. ``postgresql+asyncpg://...`` or
            ``sqlite+aiosqlite:///path.db``.
        pool_size: Number of persistent connections to keep in the pool.
        max_overflow: Maximum additional connections beyond *pool_size*.
        echo: If ``True``, log all emitted SQL statements.
        use_null_pool: If ``True``, disable connection pooling entirely.
            Useful in short-lived processes (tests, one-off scripts).

    Returns:
        A configured :class:`AsyncEngine` instance.
    """
    pool_kwargs: dict = {}
    if url.startswith("sqlite") and ":memory:" in url:
        # every session must see the same in-memory database
        pool_kwargs["poolclass"] = StaticPool
    elif use_null_pool:
        pool_kwargs["poolclass"] = NullPool
    elif not url.startswith("sqlite"):
        pool_kwargs.update(pool_size=pool_size, max_overflow=max_overflow)

    engine = create_async_engine(url, echo=echo, **pool_kwargs)
    logger.info("Created async engine for %s", url.split("@")[-1])
    return engine


class Database:
    """Store handle: one engine plus a session factory bound to it.

    Usage::

        db = Database.from_url("sqlite+aiosqlite:///:memory:")
        await db.create_all()
        repo = OrderRepository(db)
        ...
        await db.dispose()
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(cls, url: str, **engine_kwargs) -> Database:
        return cls(create_engine(url, **engine_kwargs))

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> Database:
        return cls(
            create_engine(
                config.url,
                pool_size=config.pool_size,
                max_overflow=config.max_overflow,
                echo=config.echo,
                use_null_pool=config.use_null_pool,
            )
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def create_all(self) -> None:
        """Create all tables defined in the ORM metadata."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created / verified.")

    async def drop_all(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Release all pooled connections."""
        await self._engine.dispose()
        logger.info("Engine disposed.")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session whose work forms a single transaction.

        Usage::

            async with db.session() as session:
                session.add(record)

        The session is committed on successful exit and rolled back on
        exception.  It is always closed afterwards.
        """
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
