import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import settings


logger = logging.getLogger(__name__)

_DRIVER_PREFIXES = (
    ("postgresql+asyncpg://", "postgresql+psycopg://"),
    ("postgresql://", "postgresql+psycopg://"),
    ("postgres://", "postgresql+psycopg://"),
    ("sqlite://", "sqlite+aiosqlite://"),
)


def async_database_url(url: str) -> str:
    """Point plain PostgreSQL / SQLite URLs at the async drivers we ship."""
    for prefix, replacement in _DRIVER_PREFIXES:
        if url.startswith(prefix):
            return replacement + url[len(prefix):]
    return url


database_url = async_database_url(settings.DATABASE_URL)
is_sqlite = database_url.startswith("sqlite")

if is_sqlite:
    sqlite_kwargs = {}
    if ":memory:" in database_url:
        # One shared connection, otherwise every checkout sees an empty database
        sqlite_kwargs["poolclass"] = StaticPool
    engine = create_async_engine(
        database_url,
        echo=settings.DEBUG,
        connect_args={"check_same_thread": False},
        **sqlite_kwargs,
    )
else:
    engine = create_async_engine(
        database_url,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        connect_args={"connect_timeout": 30},
    )

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Declarative base shared by every table in app.models."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; commits when the handler returns cleanly."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def get_db_session():
    """Context manager for getting a database session outside a request (scripts)."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create any missing tables. Alembic owns schema changes in production."""
    # Registers every table on Base.metadata
    from app import models  # noqa: F401

    logger.info(f"Registered {len(Base.metadata.tables)} tables")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")
