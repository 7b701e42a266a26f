"""Database Connection and Session Management"""

import re
import ssl
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from app.config import settings

# Base class for declarative models
Base = declarative_base()


def normalize_database_url(url: str) -> str:
    """Use async drivers: postgresql:// -> postgresql+asyncpg://, sqlite:// -> sqlite+aiosqlite://"""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite gets a single shared connection for in-memory databases and no
    pool tuning; PostgreSQL gets the configured pool. asyncpg does not accept
    ``sslmode`` in the URL, so it is stripped and turned into an SSL context
    that encrypts without verifying (managed hosts with private CAs).
    """
    database_url = normalize_database_url(url)
    kwargs: Dict[str, Any] = {"echo": echo, "future": True}
    connect_args: Dict[str, Any] = {}

    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if ":memory:" in database_url or database_url.rstrip("/").endswith("aiosqlite:"):
            kwargs["poolclass"] = StaticPool
    else:
        if re.search(r"[?&]sslmode=(require|required|verify-full)", database_url, re.I):
            ssl_ctx = ssl.create_default_context()
            ssl_ctx.check_hostname = False
            ssl_ctx.verify_mode = ssl.CERT_NONE
            connect_args["ssl"] = ssl_ctx
            database_url = re.sub(r"[?&]sslmode=[^&]+", "", database_url, flags=re.I)
            database_url = re.sub(r"\?&", "?", database_url).rstrip("?")
        kwargs.update(
            pool_pre_ping=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )

    return create_async_engine(database_url, connect_args=connect_args, **kwargs)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
AsyncSessionLocal = build_session_factory(engine)


async def init_db(bind: AsyncEngine = engine) -> None:
    """Create tables (development and tests only - use Alembic in production)"""
    # Registers the table metadata on Base
    import app.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections"""
    await engine.dispose()
