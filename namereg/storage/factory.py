"""
Storage Factory

Environment-based configuration and factory for the record store.
Returns a StorageBundle whose mode is decided exactly once, at startup.

Supported backends:
- in-memory: Process-local list (default, and fallback)
- sqlite: SQLite with aiosqlite
- postgres: PostgreSQL with asyncpg
- mysql: MySQL with aiomysql

Selection:
- No database URL: in-memory, no connection attempt is made
- Database URL: create the engine and the names table; if that fails the
  failure is logged and the process stays on in-memory storage for good

Usage:
    # From environment
    bundle = await create_storage(settings_from_env())

    # From settings
    settings = StorageSettings(database_url="postgresql://...")
    bundle = await create_storage(settings)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from .ports import StorageBackend, StorageBundle, StorageInitError
from .memory import create_in_memory_bundle
from .models import Base
from .sqlalchemy import SqlAlchemyStorageBundle

logger = logging.getLogger(__name__)


@dataclass
class StorageSettings:
    """
    Configuration for storage layer.

    Attributes:
        database_url: SQLAlchemy connection URL; None selects in-memory storage
        database_ssl: "require" to enable TLS without certificate checks (asyncpg)
        pool_size: Connection pool size for server databases
        pool_max_overflow: Max overflow for connection pool
        echo_sql: Whether to log SQL queries
        fallback_to_memory: Use in-memory storage if initialization fails,
            instead of failing startup
    """
    database_url: str | None = None
    database_ssl: str | None = None
    pool_size: int = 5
    pool_max_overflow: int = 10
    echo_sql: bool = False
    fallback_to_memory: bool = True


def _parse_database_url(url: str) -> StorageBackend:
    """Determine backend from database URL."""
    if url.startswith("sqlite"):
        return StorageBackend.SQLITE
    elif url.startswith("postgresql") or url.startswith("postgres"):
        return StorageBackend.POSTGRESQL
    elif url.startswith("mysql"):
        return StorageBackend.MYSQL
    else:
        raise ValueError(f"Unsupported database URL scheme: {url}")


def _async_url(url: str, backend: StorageBackend) -> str:
    """Ensure the async driver is in the URL."""
    if backend == StorageBackend.SQLITE:
        if "+aiosqlite" not in url:
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    elif backend == StorageBackend.POSTGRESQL:
        if "+asyncpg" not in url:
            if url.startswith("postgres://"):
                url = url.replace("postgres://", "postgresql+asyncpg://", 1)
            else:
                url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif backend == StorageBackend.MYSQL:
        if "+aiomysql" not in url:
            url = url.replace("mysql://", "mysql+aiomysql://", 1)
    return url


def settings_from_env() -> StorageSettings:
    """
    Create StorageSettings from environment variables.

    Environment variables:
        DATABASE_URL: SQL connection URL (optional)
        DATABASE_SSL: "require" to enable TLS for PostgreSQL
        DB_POOL_SIZE: Connection pool size
        DB_POOL_MAX_OVERFLOW: Max pool overflow
        DB_ECHO_SQL: "true" to log SQL
        STORAGE_FALLBACK: "false" to fail startup when the database is unusable
    """
    return StorageSettings(
        database_url=os.getenv("DATABASE_URL") or None,
        database_ssl=os.getenv("DATABASE_SSL") or None,
        pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
        pool_max_overflow=int(os.getenv("DB_POOL_MAX_OVERFLOW", "10")),
        echo_sql=os.getenv("DB_ECHO_SQL", "").lower() == "true",
        fallback_to_memory=os.getenv("STORAGE_FALLBACK", "true").lower() != "false",
    )


def _engine_options(
    settings: StorageSettings,
    backend: StorageBackend,
) -> tuple[URL, dict[str, Any]]:
    """Build the engine URL and keyword arguments."""
    assert settings.database_url is not None
    url = make_url(_async_url(settings.database_url, backend))

    engine_kwargs: dict[str, Any] = {"echo": settings.echo_sql}
    # SQLite uses a non-queue pool that rejects sizing arguments
    if backend != StorageBackend.SQLITE:
        engine_kwargs["pool_size"] = settings.pool_size
        engine_kwargs["max_overflow"] = settings.pool_max_overflow
    if backend == StorageBackend.POSTGRESQL:
        # asyncpg takes "ssl", not libpq's "sslmode" query parameter
        ssl = settings.database_ssl or url.query.get("sslmode")
        url = url.difference_update_query(["sslmode"])
        if ssl:
            engine_kwargs["connect_args"] = {"ssl": ssl}

    return url, engine_kwargs


def _create_engine(settings: StorageSettings, backend: StorageBackend) -> AsyncEngine:
    url, engine_kwargs = _engine_options(settings, backend)
    return create_async_engine(url, **engine_kwargs)


async def create_storage(settings: StorageSettings) -> StorageBundle:
    """
    Create storage bundle from settings.

    Args:
        settings: Storage configuration

    Returns:
        SQL-backed bundle if the database initialized, otherwise in-memory

    Raises:
        StorageInitError: If initialization fails and fallback is disabled
    """
    if not settings.database_url:
        logger.info("Using in-memory storage (no DATABASE_URL)")
        return create_in_memory_bundle()

    engine: AsyncEngine | None = None
    try:
        backend = _parse_database_url(settings.database_url)
        engine = _create_engine(settings, backend)

        # Create tables if absent
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        if engine is not None:
            await engine.dispose()
        if not settings.fallback_to_memory:
            raise StorageInitError(f"Database initialization failed: {e}") from e
        logger.exception(f"DB init error, falling back to in-memory: {e}")
        return create_in_memory_bundle()

    logger.info(f"Database initialized ({backend.value})")
    return SqlAlchemyStorageBundle(engine, mode=backend)


# Convenience for quick setup
async def create_sqlite_storage(path: str = ":memory:") -> StorageBundle:
    """Create SQLite storage bundle."""
    return await create_storage(StorageSettings(
        database_url=f"sqlite+aiosqlite:///{path}",
        fallback_to_memory=False,
    ))
