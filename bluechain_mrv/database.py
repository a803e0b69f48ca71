"""Database connection and session management"""

import logging
from typing import AsyncGenerator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from bluechain_mrv.config import settings
from bluechain_mrv.exceptions import StoreError

logger = logging.getLogger(__name__)

# Convert postgresql:// to postgresql+asyncpg:// for async support
ASYNC_DATABASE_URL = settings.database_url.replace(
    "postgresql://", "postgresql+asyncpg://"
)

# SQLite (local runs and tests) does not take queue pool arguments
engine_kwargs = {}
if not settings.is_sqlite:
    engine_kwargs = {
        "pool_pre_ping": True,
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
    }

async_engine = create_async_engine(
    ASYNC_DATABASE_URL,
    echo=settings.environment == "development" and settings.log_level == "DEBUG",
    **engine_kwargs,
)

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Base class for all models
Base = declarative_base()


# Dependency for FastAPI to get database session
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session.

    Services commit their own unit of work; anything left pending when the
    request fails is rolled back here.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Create all tables (development and tests; production uses Alembic)"""
    # Import models so they register on Base.metadata
    import bluechain_mrv.models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def commit_or_raise(session: AsyncSession) -> None:
    """
    Commit the current unit of work.

    Raises:
        StoreError: with the driver's message if the commit fails
    """
    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Database commit failed: {e}")
        raise StoreError(str(getattr(e, "orig", None) or e))
