from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from .config import get_settings
import logging

logger = logging.getLogger(__name__)

_settings = get_settings()
_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None

async def get_db() -> AsyncIOMotorDatabase:
    global _client, _db
    if _db is None:
        _client = AsyncIOMotorClient(
            _settings.mongodb_uri,
            serverSelectionTimeoutMS=_settings.mongo_timeout_ms,
        )
        db = _client[_settings.db_name]
        # Índices para el listado ordenado y la búsqueda
        pets = db[_settings.pets_collection]
        await pets.create_index([("createdAt", DESCENDING)])
        await pets.create_index([("name", ASCENDING)])
        await pets.create_index([("owner.name", ASCENDING)])
        # solo se cachea si los índices se crearon
        _db = db
        logger.info("Connected to MongoDB database %s", _settings.db_name)
    return _db

def close_db() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None
