"""Database session management."""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskboard.config import Settings


class Database:
    """Owns the async engine (and its connection pool) for one application.

    Built once by the app factory and kept on ``app.state.database``; request
    handlers reach it through :func:`get_db_session`.
    """

    def __init__(self, settings: Settings):
        url = settings.resolved_database_url
        self.url = make_url(url)

        if self.is_sqlite and not self.is_memory:
            Path(self.url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)

        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=settings.debug,
            **self._pool_options(settings),
        )

        if self.is_sqlite:
            self._install_sqlite_pragmas(settings.database_busy_timeout_ms)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def is_sqlite(self) -> bool:
        return self.url.get_backend_name() == "sqlite"

    @property
    def is_memory(self) -> bool:
        return self.is_sqlite and self.url.database in (None, "", ":memory:")

    def _pool_options(self, settings: Settings) -> dict[str, Any]:
        # In-memory SQLite runs on a single static connection
        if self.is_memory:
            return {"poolclass": StaticPool}
        return {
            "pool_size": settings.database_pool_size,
            "max_overflow": settings.database_max_overflow,
            "pool_timeout": settings.database_pool_timeout,
            "pool_pre_ping": True,
        }

    def _install_sqlite_pragmas(self, busy_timeout_ms: int) -> None:
        use_wal = not self.is_memory

        @event.listens_for(self.engine.sync_engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection: Any, connection_record: Any) -> None:
            cursor = dbapi_connection.cursor()
            if use_wal:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
            cursor.close()

    async def ping(self) -> None:
        """Run a trivial query to verify connectivity."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Close the connection pool."""
        await self.engine.dispose()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for dependency injection."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Type alias for dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db_session)]
