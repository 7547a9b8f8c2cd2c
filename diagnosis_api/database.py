"""Database store client.

The ``Database`` object owns the async engine (and therefore the connection
pool). It is created once in the application lifespan, handed to the
services that need it, and disposed on shutdown.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from diagnosis_api.exceptions import StoreError

if TYPE_CHECKING:
    from diagnosis_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


class Database:
    """Async store client wrapping a SQLAlchemy engine and session factory."""

    def __init__(self, engine: AsyncEngine):
        """Initialize the store client.

        Args:
            engine: Async SQLAlchemy engine. The client takes ownership and
                disposes it in ``close()``.
        """
        self.engine = engine
        self._session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Database:
        """Build a store client from application settings.

        PostgreSQL engines get a bounded pool, a pool checkout timeout and a
        per-statement timeout so a stalled connection cannot hang a request.
        """
        url = make_url(settings.database_url)
        engine_kwargs: dict = {"echo": settings.debug}

        if url.get_backend_name() == "postgresql":
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                pool_timeout=settings.db_pool_timeout,
                pool_pre_ping=True,
            )
            if url.get_driver_name() == "asyncpg":
                engine_kwargs["connect_args"] = {"command_timeout": settings.db_command_timeout}

        return cls(create_async_engine(url, **engine_kwargs))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session that commits on success.

        Database and connection failures are logged here and re-raised as
        StoreError so callers never see driver details. Other exceptions
        propagate unchanged and the session is rolled back on close.
        """
        async with self._session_maker() as session:
            try:
                yield session
                await session.commit()
            except (SQLAlchemyError, OSError) as e:
                logger.exception("Database operation failed: %s", e)
                raise StoreError() from e

    async def verify_connectivity(self) -> bool:
        """Check that the database answers a trivial query."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Database connectivity check failed: {e}")
            return False

    async def create_schema(self) -> None:
        """Create all tables that do not exist yet."""
        # Import models so they register on Base.metadata
        import diagnosis_api.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_schema(self) -> None:
        """Drop all tables. Used by tests."""
        import diagnosis_api.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def close(self) -> None:
        """Dispose the engine and release pooled connections."""
        await self.engine.dispose()
