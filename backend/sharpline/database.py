from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from sharpline.config import get_database_url


class Base(DeclarativeBase):
    pass


def create_session_factory(url: str) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(url, future=True)
    return engine, async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Create the schema directly. SQLite deployments and tests only; PostgreSQL goes through alembic."""
    import sharpline.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


engine, AsyncSessionLocal = create_session_factory(get_database_url())


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session
