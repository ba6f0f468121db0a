"""Database Connection and Session Management"""

import re
import ssl

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from typing import AsyncGenerator

from app.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def build_async_url(url: str) -> tuple[str, dict]:
    """
    Convert a postgresql:// URL to asyncpg form.

    asyncpg takes ssl=SSLContext instead of sslmode, so sslmode is stripped
    from the query string and turned into connect_args.
    """
    database_url = url.replace("postgresql://", "postgresql+asyncpg://")
    connect_args = {}
    if re.search(r"[?&]sslmode=(require|required|verify-full)", database_url, re.I):
        ssl_ctx = ssl.create_default_context()
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE
        connect_args["ssl"] = ssl_ctx
    database_url = re.sub(r"[?&]sslmode=[^&]+", "", database_url, flags=re.I)
    if "?" not in database_url and "&" in database_url:
        database_url = database_url.replace("&", "?", 1)
    return database_url.rstrip("?"), connect_args


database_url, connect_args = build_async_url(settings.DATABASE_URL)

engine = create_async_engine(
    database_url,
    connect_args=connect_args,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_recycle=settings.DB_POOL_RECYCLE,
    echo=settings.DEBUG,
    future=True,
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

    Commits on success, rolls back on any error. One session per request;
    concurrent writers to the same row resolve last-write-wins.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            logger.warning("Rolling back session after database error", exc_info=True)
            await session.rollback()
            raise
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """Initialize database tables (for development only)"""
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections"""
    await engine.dispose()
