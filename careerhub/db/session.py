"""Database session and engine configuration."""

import json
from typing import AsyncGenerator

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from careerhub.config import settings
from careerhub.db.base import Base

logger = structlog.get_logger(__name__)


def json_serializer(value) -> str:
    """Store JSON columns with raw unicode, the way PostgreSQL prints jsonb."""
    return json.dumps(value, ensure_ascii=False)


def _engine_options() -> dict:
    """Pool options; SQLite uses its own pool and rejects sizing arguments."""
    options = {"echo": settings.DEBUG, "json_serializer": json_serializer}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_pre_ping=True,
        )
    return options


# One engine (and connection pool) per process, disposed in the app lifespan
engine = create_async_engine(settings.DATABASE_URL, **_engine_options())

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Create tables directly (development only, production uses Alembic)."""
    # Import all models to register them
    from careerhub import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_tables_created")
