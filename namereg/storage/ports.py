"""
Storage Port Interfaces

Abstract base class defining the record storage contract for namereg.
All persistence APIs are async. No sync DB calls allowed.

Handlers depend only on RecordStore; the in-memory and SQLAlchemy
adapters implement it and one of them is picked once at startup.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


# =============================================================================
# Record
# =============================================================================

@dataclass
class NameRecord:
    """
    A registered name.

    Storage-level representation shared by every adapter.
    """
    id: int
    name: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Serialize for a JSON response body."""
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat(),
        }


class StorageBackend(str, Enum):
    """Storage mode reported to clients."""
    MEMORY = "in-memory"
    SQLITE = "sqlite"
    POSTGRESQL = "postgres"
    MYSQL = "mysql"


# =============================================================================
# Record Store
# =============================================================================

class RecordStore(ABC):
    """
    Storage interface for registered names.

    Append-only: there is no update or delete.
    """

    @abstractmethod
    async def insert(self, name: str) -> NameRecord:
        """
        Persist a new name.

        Args:
            name: Non-empty name to register

        Returns:
            The stored record with its assigned id and timestamp

        Raises:
            StorageError: If the backend is unreachable or rejects the write
        """
        ...

    @abstractmethod
    async def list_all(self) -> list[NameRecord]:
        """
        Get every stored record, oldest first.

        Raises:
            StorageError: If the backend is unreachable
        """
        ...


# =============================================================================
# Storage Bundle
# =============================================================================

@dataclass
class StorageBundle:
    """
    The record store selected at startup, together with its mode.

    Injected into the request handlers through the service context.
    """
    records: RecordStore
    mode: StorageBackend

    async def close(self) -> None:
        """
        Release backend connections.

        Called during shutdown.
        """
        # Implementations should override to close DB connections, etc.
        pass


# =============================================================================
# Exceptions
# =============================================================================

class StorageError(Exception):
    """Persistent backend unreachable or rejected a query."""
    pass


class StorageInitError(StorageError):
    """Database initialization failed and fallback is disabled."""
    pass
