"""Database Connection and Session Management"""

import re
import ssl
from typing import Any, AsyncGenerator, Dict, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from app.config import settings


def build_engine_options(url: str) -> Tuple[str, Dict[str, Any]]:
    """
    Turn a configured DATABASE_URL into an async driver URL plus engine kwargs.

    PostgreSQL URLs are switched to asyncpg and get a connection pool.
    SQLite URLs (used by the test suite) share one connection so an
    in-memory database lives as long as the engine.
    """
    if url.startswith("sqlite"):
        if not url.startswith("sqlite+aiosqlite"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url, {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }

    url = url.replace("postgresql://", "postgresql+asyncpg://", 1)

    # asyncpg takes ssl=SSLContext rather than sslmode in the query string
    connect_args: Dict[str, Any] = {}
    if re.search(r"[?&]sslmode=(require|required|verify-full)", url, re.I):
        ssl_ctx = ssl.create_default_context()
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE
        connect_args["ssl"] = ssl_ctx
        url = re.sub(r"[?&]sslmode=[^&]+", "", url, flags=re.I)
        url = re.sub(r"\?&", "?", url).rstrip("?")
    if "?&" in url:
        url = url.replace("?&", "?")

    return url, {
        "connect_args": connect_args,
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
    }


database_url, engine_options = build_engine_options(settings.DATABASE_URL)

engine = create_async_engine(
    database_url,
    echo=settings.DEBUG,
    future=True,
    **engine_options,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Base class for declarative models
Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function to get database session.

    Yields:
        AsyncSession: Database session, committed when the request succeeds
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """Create tables that do not exist yet"""
    # Register models on Base.metadata
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db() -> None:
    """Drop all tables (used by the test suite)"""
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def close_db() -> None:
    """Close database connections"""
    await engine.dispose()
