"""Database connection and session management."""
import logging
from typing import Any, AsyncIterator, Dict

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.db.models import Base

logger = logging.getLogger(__name__)


def to_async_url(database_url: str) -> str:
    """Convert a plain database URL to its async driver form."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def _engine_options(database_url: str, echo: bool) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": echo}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url:
            # One shared connection, otherwise every checkout sees an empty database
            options["poolclass"] = StaticPool
    return options


class Database:
    """Process-scoped engine and session factory."""

    def __init__(self, database_url: str, echo: bool = False):
        self.url = to_async_url(database_url)
        self.engine: AsyncEngine = create_async_engine(
            self.url, **_engine_options(self.url, echo)
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, echo=settings.database_echo)

    async def init_models(self) -> None:
        """Create database tables that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency for getting database session."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
