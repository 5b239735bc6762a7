"""
Database configuration for the key-value table behind the record store
"""
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from journal.config import get_settings

settings = get_settings()

# Base class for models
Base = declarative_base()


def _get_async_url(url: str) -> str:
    """Convert database URL to async variant"""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://")
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///")
    return url


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    # WAL lets readers see the last committed record while a save is in flight
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Async engine for url, with SQLite connections tuned for concurrent access"""
    async_url = _get_async_url(url)
    if async_url.startswith("sqlite"):
        new_engine = create_async_engine(async_url, echo=echo)
        if ":memory:" not in async_url:
            event.listen(new_engine.sync_engine, "connect", _set_sqlite_pragmas)
        return new_engine
    return create_async_engine(async_url, echo=echo, pool_size=5, max_overflow=5, pool_pre_ping=True)


async def create_tables(target: AsyncEngine) -> None:
    """Create every registered table that does not exist yet"""
    # Registers StoredValue on Base.metadata
    import journal.models  # noqa: F401

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)
