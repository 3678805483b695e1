"""SQLAlchemy engines, session factories, settings, and FastAPI dependency.

Both session factories disable autoflush so that registrations stay pending
until an explicit commit, and keep instances readable after commit.
"""

from collections.abc import AsyncGenerator

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./students.db"
    sync_database_url: str = "sqlite:///./students.db"
    sql_echo: bool = False


settings = Settings()

engine = create_async_engine(
    settings.database_url,
    echo=settings.sql_echo,
    pool_pre_ping=True,
)

sync_engine = create_engine(
    settings.sync_database_url,
    echo=settings.sql_echo,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)

SessionLocal = sessionmaker(
    bind=sync_engine,
    class_=Session,
    autoflush=False,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


def create_all() -> None:
    """Create every registered table on the blocking engine (local stores only)."""
    import src.infrastructure.persistence.models  # noqa: F401

    Base.metadata.create_all(sync_engine)


async def create_all_async() -> None:
    """Create every registered table on the async engine (local stores only)."""
    import src.infrastructure.persistence.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields a request-scoped async session."""
    async with AsyncSessionLocal() as session:
        yield session
