"""Database engine, session factory and the request-scoped session dependency."""

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from app.config import DATABASE_URL


class Base(DeclarativeBase):
    pass


engine = create_async_engine(DATABASE_URL, echo=False)
async_session_factory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncSession:
    """Yield one session per request; stores receive it as a parameter."""
    async with async_session_factory() as session:
        yield session


async def init_db():
    """Create all tables for the user, catalog and portfolio models."""
    import app.models.portfolio  # noqa: F401  registers every mapped table

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
