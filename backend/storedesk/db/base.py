"""Async SQLAlchemy engine, declarative base and session dependency."""

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from storedesk.core.config import settings


class Base(DeclarativeBase):
    pass


engine = create_async_engine(settings.DATABASE_URL, pool_pre_ping=True)

SessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding one session per request.

    Handlers commit explicitly; anything left uncommitted is rolled back when
    the session closes.
    """
    async with SessionLocal() as session:
        yield session


async def create_all(bind=None) -> None:
    """Create every table known to the models (seed script and tests)."""
    import storedesk.models  # noqa: F401  registers the mappers

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
