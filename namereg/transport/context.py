"""
Service Context

Everything the request handlers share, built once in the application
lifespan and stored on app.state. Handlers receive it through FastAPI
dependencies instead of module globals.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Request

from namereg.config import ServiceSettings
from namereg.kv import BackendUnavailable, KeyValueStore
from namereg.storage import StorageBundle


@dataclass
class ServiceContext:
    """Per-process state owned by the application instance."""
    settings: ServiceSettings
    storage: StorageBundle
    kv: KeyValueStore | None = None

    @property
    def redis_status(self) -> str:
        if self.kv is None:
            return "not configured"
        return "connected" if self.kv.connected else "disconnected"

    async def close(self) -> None:
        """Release backend connections."""
        if self.kv is not None:
            await self.kv.close()
        await self.storage.close()


def get_context(request: Request) -> ServiceContext:
    return request.app.state.context


def require_kv(context: ServiceContext = Depends(get_context)) -> KeyValueStore:
    """Resolve the key/value store, or fail with 503 if none is configured."""
    if context.kv is None:
        raise BackendUnavailable("Redis not configured")
    return context.kv
