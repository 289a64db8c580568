"""
HTTP Routes

Name registration:
- GET /            -> service info
- GET /health      -> liveness
- POST /register   -> store a name
- GET /names       -> list stored names

Redis pass-through (503 when REDIS_URL is not set):
- GET /redis/ping
- POST /redis/set
- GET /redis/get/{key}
- GET /redis/incr/{key}
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from namereg import __version__
from namereg.kv import KeyValueStore
from namereg.storage import StorageError
from namereg.transport.context import ServiceContext, get_context, require_kv
from namereg.transport.errors import ApiError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

ENDPOINTS = [
    "POST /register",
    "GET /names",
    "GET /health",
    "GET /redis/ping",
    "POST /redis/set",
    "GET /redis/get/:key",
    "GET /redis/incr/:key",
]


class RegisterRequest(BaseModel):
    # Numbers are accepted and stored as text
    name: str | int | float | None = None


class SetRequest(BaseModel):
    key: str | None = None
    value: Any = None
    ttl: int | None = None


# =============================================================================
# Names
# =============================================================================

@router.get("/")
async def root(context: ServiceContext = Depends(get_context)):
    """Service info."""
    return {
        "message": "Hello from Locus PaaS!",
        "service": context.settings.service_id,
        "version": __version__,
        "storage": context.storage.mode.value,
        "redis": context.redis_status,
        "endpoints": ENDPOINTS,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@router.post("/register", status_code=201)
async def register(body: RegisterRequest, context: ServiceContext = Depends(get_context)):
    if not body.name:
        raise ValidationError("Name is required")

    try:
        record = await context.storage.records.insert(str(body.name))
    except StorageError as e:
        logger.error(f"Register error: {e}")
        raise ApiError("Failed to register name") from e

    return {"message": "Registered successfully", "data": record.to_dict()}


@router.get("/names")
async def list_names(context: ServiceContext = Depends(get_context)):
    try:
        records = await context.storage.records.list_all()
    except StorageError as e:
        logger.error(f"Names error: {e}")
        raise ApiError("Failed to fetch names") from e

    return {
        "count": len(records),
        "storage": context.storage.mode.value,
        "names": [r.to_dict() for r in records],
    }


# =============================================================================
# Redis
# =============================================================================

@router.get("/redis/ping")
async def redis_ping(kv: KeyValueStore = Depends(require_kv)):
    response = await kv.ping()
    return {"success": True, "response": response, "connected": kv.connected}


@router.post("/redis/set")
async def redis_set(body: SetRequest, kv: KeyValueStore = Depends(require_kv)):
    if not body.key or body.value is None:
        raise ValidationError("Key and value are required")
    if body.ttl is not None and body.ttl <= 0:
        raise ValidationError("ttl must be a positive integer")

    # Non-string values are stored JSON-encoded
    stored = body.value if isinstance(body.value, str) else json.dumps(body.value)
    await kv.set(body.key, stored, ttl=body.ttl)

    return {"success": True, "key": body.key, "value": body.value, "ttl": body.ttl}


@router.get("/redis/get/{key}")
async def redis_get(key: str, kv: KeyValueStore = Depends(require_kv)):
    value, exists = await kv.get(key)
    return {"key": key, "value": value, "exists": exists}


@router.get("/redis/incr/{key}")
async def redis_incr(key: str, kv: KeyValueStore = Depends(require_kv)):
    value = await kv.increment(key)
    return {"key": key, "value": value}
