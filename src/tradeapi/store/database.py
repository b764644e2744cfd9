"""MongoDB connection management using Motor (async driver)."""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "solana-bot"

# Global client instance
_client: Optional[AsyncIOMotorClient] = None


async def connect_to_mongodb(uri: str) -> AsyncIOMotorDatabase:
    """Connect to MongoDB and verify the connection.

    The database name is taken from the URI path, falling back to
    ``solana-bot``.

    Raises:
        Exception: If the server cannot be reached
    """
    global _client

    _client = AsyncIOMotorClient(uri, serverSelectionTimeoutMS=5000)
    database = _client.get_default_database(DEFAULT_DB_NAME)

    try:
        await _client.admin.command("ping")
    except Exception as e:
        logger.error(f"MongoDB connection error: {e}")
        _client.close()
        _client = None
        raise

    logger.info("Connected to MongoDB database: %s", database.name)
    return database


async def close_mongodb_connection() -> None:
    """Close MongoDB connections."""
    global _client

    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB connection closed")
