"""Profile store engine and sessions."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings

SUPABASE_POOLER_HOST = "pooler.supabase.com"


def connect_args_for(database_url: str) -> dict[str, Any]:
    """asyncpg connect arguments for the given profile store URL.

    Supavisor runs in transaction mode, where asyncpg's prepared statement
    cache breaks, so the cache is turned off behind the pooler.
    """
    if SUPABASE_POOLER_HOST in database_url:
        return {"statement_cache_size": 0}
    return {}


engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    connect_args=connect_args_for(settings.async_database_url),
)

# Used by each registration unit of work and the detailed health check
async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a profile store session for a single request."""
    async with async_session_factory() as session:
        yield session
