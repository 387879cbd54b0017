from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool
from sqlmodel.ext.asyncio.session import AsyncSession

from pitchcraft.core.config import settings

DATABASE_URI = str(settings.ASYNC_DATABASE_URI)

# Sized for hosted Postgres (Supabase/Neon) that drops idle connections
POSTGRES_POOL = {
    "poolclass": AsyncAdaptedQueuePool,
    "pool_size": 5,
    "max_overflow": 10,
    "pool_recycle": 300,
    "pool_pre_ping": True,
}


def _engine_options(uri: str) -> dict:
    # SQLite connections must not outlive the event loop that opened them
    if uri.startswith("sqlite"):
        return {"poolclass": NullPool}
    return POSTGRES_POOL


engine = create_async_engine(DATABASE_URI, echo=False, **_engine_options(DATABASE_URI))

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request: committed when the handler returns, rolled back if it raises."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
