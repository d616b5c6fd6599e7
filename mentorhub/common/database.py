import contextlib
import os
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from mentorhub.common.environment_constants import DATABASE_URL


class Database:
    """
    Owns the async engine of the mentorship database and hands out one
    `AsyncSession` per request.

    Sessions are created with `expire_on_commit=False` so DTOs can still be
    mapped from entities after a service has committed.
    """

    def __init__(self, database_url: str | None = None, echo=False):
        """
        Args:
            database_url (str | None): SQLAlchemy async URL, e.g.
                `postgresql+asyncpg://...`. Read from DATABASE_URL when omitted.
            echo (bool): Log every emitted SQL statement.
        """
        self.database_url = database_url or os.getenv(DATABASE_URL)
        if not self.database_url:
            raise ValueError(f"{DATABASE_URL} must be set")

        self._engine: AsyncEngine = create_async_engine(
            self.database_url, echo=echo, pool_pre_ping=True
        )
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def get_engine(self) -> AsyncEngine:
        """The underlying engine, used by `tools/init_db.py` and repository tests."""
        return self._engine

    async def close(self):
        """Dispose the connection pool. Called from the application lifespan."""
        await self._engine.dispose()

    @contextlib.asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a fresh session and always close it afterwards.

        The session is never committed here: services commit after their
        primary write, before any notification or email side effect runs.
        Any exception escaping the block rolls back what is still pending.
        """
        session: AsyncSession = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
