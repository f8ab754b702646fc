import asyncio
import logging
from collections.abc import AsyncGenerator
from urllib.parse import urlparse

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings
from app.db.base import Base

logger = logging.getLogger(__name__)

_engine = None
_session_factory = None


def get_engine():
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            settings.database_url,
            echo=False,
            pool_pre_ping=True,  # Verify connections before using them
            pool_recycle=300,
        )
    return _engine


def get_session_factory():
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(max_retries: int = 10, retry_delay: float = 3) -> None:
    """
    Create tables if they don't exist.
    Retries because a freshly provisioned database may not accept connections immediately.
    """
    parsed = urlparse(settings.database_url)
    logger.info("Connecting to database at %s:%s", parsed.hostname, parsed.port or 5432)

    engine = get_engine()
    for attempt in range(max_retries):
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database connection successful and tables initialized")
            return
        except Exception as e:
            if attempt < max_retries - 1:
                logger.warning(
                    "Database connection attempt %d/%d failed: %s. Retrying in %ss...",
                    attempt + 1,
                    max_retries,
                    str(e)[:100],
                    retry_delay,
                )
                await asyncio.sleep(retry_delay)
            else:
                logger.critical("Failed to connect to database after %d attempts: %s", max_retries, e)
                raise
