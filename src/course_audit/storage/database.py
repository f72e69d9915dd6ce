"""Async engine and session factory for the destination database."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from course_audit.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create an async engine for a short-lived CLI run."""
    return create_async_engine(
        settings.database_url,
        pool_size=2,
        max_overflow=0,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
