"""
In-Memory Storage Adapter

Process-local record store used when no database is configured or when
the database could not be initialized at startup.
Uses an asyncio lock for concurrent async safety.

Records are lost on restart.
"""

import asyncio
from datetime import datetime, timezone

from namereg.storage.ports import (
    NameRecord,
    RecordStore,
    StorageBackend,
    StorageBundle,
)


class InMemoryRecordStore(RecordStore):
    """
    In-memory name storage.

    Ids come from a counter guarded by the lock, so they stay unique and
    strictly increasing even when inserts interleave.
    """

    def __init__(self):
        self._records: list[NameRecord] = []
        self._last_id = 0
        self._lock = asyncio.Lock()

    async def insert(self, name: str) -> NameRecord:
        async with self._lock:
            self._last_id += 1
            record = NameRecord(
                id=self._last_id,
                name=name,
                created_at=datetime.now(timezone.utc),
            )
            self._records.append(record)
            return record

    async def list_all(self) -> list[NameRecord]:
        async with self._lock:
            # Copy so callers never see later appends
            return list(self._records)


def create_in_memory_bundle() -> StorageBundle:
    """
    Create a storage bundle backed by memory.
    """
    return StorageBundle(
        records=InMemoryRecordStore(),
        mode=StorageBackend.MEMORY,
    )
