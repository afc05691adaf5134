from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import Settings, settings as default_settings
from app.db.base import Base
from app import models  # noqa: F401  registers mapped tables on Base.metadata


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    """Create the async engine. No connection is opened until first use."""
    settings = settings or default_settings
    return create_async_engine(settings.sqlalchemy_url)


def get_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine, *, create_tables: bool = True) -> None:
    """Connect once so an unreachable store fails here, then create missing tables."""
    async with engine.begin() as conn:
        if create_tables:
            await conn.run_sync(Base.metadata.create_all)
