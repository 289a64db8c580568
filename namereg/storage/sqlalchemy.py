"""
SQLAlchemy Storage Adapter

Async SQLAlchemy 2.0 implementation for persistent name storage.
Uses async engine and session for all operations.

Compatible with:
- SQLite (aiosqlite)
- PostgreSQL (asyncpg)
- MySQL (aiomysql)

All operations are async. No sync DB calls.
"""

from datetime import timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from namereg.storage.ports import (
    NameRecord,
    RecordStore,
    StorageBackend,
    StorageBundle,
    StorageError,
)
from namereg.storage.models import NameModel


# =============================================================================
# Converters
# =============================================================================

def name_model_to_record(model: NameModel) -> NameRecord:
    """Convert SQLAlchemy model to port record."""
    created_at = model.created_at
    # SQLite drops the offset on the way back
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return NameRecord(
        id=model.id,
        name=model.name,
        created_at=created_at,
    )


# =============================================================================
# SQLAlchemy Record Store
# =============================================================================

class SqlAlchemyRecordStore(RecordStore):
    """
    SQLAlchemy implementation of name storage.

    Ids are assigned by the database.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def insert(self, name: str) -> NameRecord:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    model = NameModel(name=name)
                    session.add(model)
                    await session.flush()
                    await session.refresh(model)
                    return name_model_to_record(model)
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"Insert failed: {e}") from e

    async def list_all(self) -> list[NameRecord]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(NameModel).order_by(NameModel.id)
                )
                return [name_model_to_record(m) for m in result.scalars().all()]
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"Query failed: {e}") from e


# =============================================================================
# Bundle
# =============================================================================

class SqlAlchemyStorageBundle(StorageBundle):
    """
    StorageBundle that owns an async engine and disposes it on close.
    """

    def __init__(self, engine: AsyncEngine, mode: StorageBackend):
        session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        super().__init__(records=SqlAlchemyRecordStore(session_factory), mode=mode)
        self._engine = engine

    async def close(self) -> None:
        """Dispose the engine's connection pool."""
        await self._engine.dispose()
