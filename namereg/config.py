"""
Service Configuration

Settings are read from environment variables, optionally loaded from a
.env file in the working directory.

- PORT: Listen port (default 8080)
- HOST: Listen address (default 0.0.0.0)
- SERVICE_ID: Service identifier echoed by GET /
- LOG_LEVEL: Root log level (default INFO)

Storage (see namereg.storage.factory):
- DATABASE_URL, DATABASE_SSL, DB_POOL_SIZE, DB_POOL_MAX_OVERFLOW,
  DB_ECHO_SQL, STORAGE_FALLBACK

Key/value backend (see namereg.kv.factory):
- REDIS_URL
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from namereg.kv import KeyValueSettings
from namereg.kv import settings_from_env as kv_settings_from_env
from namereg.storage import StorageSettings
from namereg.storage import settings_from_env as storage_settings_from_env


@dataclass
class ServiceSettings:
    """
    Top-level service configuration.
    """
    host: str = "0.0.0.0"
    port: int = 8080
    service_id: str = "unknown"
    log_level: str = "INFO"
    storage: StorageSettings = field(default_factory=StorageSettings)
    kv: KeyValueSettings = field(default_factory=KeyValueSettings)


def settings_from_env() -> ServiceSettings:
    """Create ServiceSettings from the environment (and .env, if present)."""
    load_dotenv()

    return ServiceSettings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
        service_id=os.getenv("SERVICE_ID") or "unknown",
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        storage=storage_settings_from_env(),
        kv=kv_settings_from_env(),
    )
