# tourlead/db/session.py
from __future__ import annotations

from typing import AsyncGenerator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from tourlead.core.config import settings
from tourlead.core.exceptions import PersistenceError
from tourlead.core.logging import get_structlog_logger

logger = get_structlog_logger()

# Global engine instance
engine: Optional[AsyncEngine] = None
AsyncSessionLocal: Optional[async_sessionmaker[AsyncSession]] = None


def create_database_engine() -> AsyncEngine:
    """Create and configure the async database engine."""
    global engine, AsyncSessionLocal

    if engine is not None:
        return engine

    if settings.is_sqlite:
        engine = create_async_engine(settings.database_url, echo=settings.debug)
    elif settings.is_testing:
        # Use NullPool for tests to ensure clean state
        engine = create_async_engine(
            settings.database_url,
            poolclass=NullPool,
            echo=settings.debug,
        )
    else:
        engine = create_async_engine(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
            pool_recycle=settings.database_pool_recycle,
            pool_pre_ping=True,
            echo=settings.debug,
            connect_args={
                "command_timeout": 60,
                "server_settings": {"application_name": "tourlead_api"},
            },
        )

    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    logger.info(
        "database.engine.created",
        pool_size=settings.database_pool_size,
        testing=settings.is_testing,
        sqlite=settings.is_sqlite,
    )

    return engine


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for dependency injection."""
    if AsyncSessionLocal is None:
        create_database_engine()

    session = AsyncSessionLocal()

    try:
        yield session
    except SQLAlchemyError as e:
        logger.error("database.session_error", error=str(e))
        await session.rollback()
        raise PersistenceError(
            message="Database session error",
            details={"error": str(e)},
        ) from e
    finally:
        await session.close()


async def init_models(bind: Optional[AsyncEngine] = None) -> None:
    """Create all tables. Used by the CLI and the test suite."""
    from tourlead.db.base import Base
    import tourlead.models  # noqa: F401  registers the mappers

    target = bind or create_database_engine()
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database.tables_created", tables=sorted(Base.metadata.tables))


async def dispose_engine() -> None:
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None
