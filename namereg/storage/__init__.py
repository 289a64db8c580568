# Storage Layer
# Record persistence for namereg
#
# This module provides:
# - Port interface (ABC) defining the record store contract
# - In-memory implementation (default and fallback)
# - SQLAlchemy implementation for SQLite/PostgreSQL/MySQL
# - Factory that picks one of them once at startup

from .ports import (
    NameRecord,
    RecordStore,
    StorageBackend,
    StorageBundle,
    StorageError,
    StorageInitError,
)
from .factory import (
    StorageSettings,
    create_storage,
    create_sqlite_storage,
    settings_from_env,
)

__all__ = [
    # Ports
    "NameRecord",
    "RecordStore",
    "StorageBackend",
    "StorageBundle",
    "StorageError",
    "StorageInitError",
    # Factory
    "StorageSettings",
    "create_storage",
    "create_sqlite_storage",
    "settings_from_env",
]
