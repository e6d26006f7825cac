"""Async engine and session management for the SQL store."""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

_ASYNC_DRIVERS = {
    "sqlite": "sqlite+aiosqlite",
}


def async_url(database_url: str) -> str:
    """Swap a bare dialect for its async driver, e.g. sqlite:// -> sqlite+aiosqlite://."""
    scheme, sep, rest = database_url.partition("://")
    if sep and scheme in _ASYNC_DRIVERS:
        return f"{_ASYNC_DRIVERS[scheme]}://{rest}"
    return database_url


def get_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async database engine for DATABASE_URL."""
    return create_async_engine(async_url(database_url), echo=echo, pool_pre_ping=True)


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory; records stay usable after commit.

    Usage:
        async with factory() as session:
            session.add(task)
            await session.commit()
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
