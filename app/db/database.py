"""Database connection and session management for the exercise catalog."""
import logging
from typing import Any, AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def create_primary_engine(url: str | None = None) -> AsyncEngine:
    """Create the database engine."""
    url = url or settings.database_url
    options: dict[str, Any] = {"echo": settings.debug, "future": True}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=30,
            pool_recycle=300,
            pool_pre_ping=True,
        )
    return create_async_engine(url, **options)


engine = create_primary_engine()

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency that provides a read-only database session.

    The catalog is never written by this service, so the session is closed
    without committing.
    """
    async with async_session_maker() as session:
        yield session


async def check_db() -> bool:
    """Run a trivial query against the database."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True


async def init_db():
    """Create tables when auto_create_tables is enabled."""
    if not settings.auto_create_tables:
        logger.info("Table creation skipped (auto_create_tables disabled)")
        return

    # Register models on Base.metadata before create_all
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def close_all_engines():
    """Dispose the database engine."""
    await engine.dispose()
