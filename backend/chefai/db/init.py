# chefai/db/init.py
# Mongo connection helpers (motor, used from startup/shutdown events)

from __future__ import annotations
import logging
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from chefai.core.config import settings

log = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None

async def init_db() -> AsyncIOMotorDatabase:
    # called once at startup to build the shared connection
    global _client, _db
    if _db is not None:
        return _db

    client = AsyncIOMotorClient(settings.MONGODB_URI)
    db = client[settings.MONGODB_DB]

    # raises if the server is not reachable yet; globals stay unset so the retry reconnects
    try:
        await db.command("ping")
    except Exception:
        client.close()
        raise

    _client, _db = client, db
    log.info("connected to mongodb db=%s", settings.MONGODB_DB)
    return _db

def get_db() -> AsyncIOMotorDatabase:
    # route dependency; raises when startup has not connected yet
    if _db is None:
        raise RuntimeError("MongoDB is not initialized yet.")
    return _db

async def close_db() -> None:
    global _client, _db
    if _client:
        _client.close()
    _client = None
    _db = None
