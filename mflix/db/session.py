from motor.motor_asyncio import AsyncIOMotorClient
from mflix.core.config import MONGO_URI, MFLIX_NS, COMMENTS_COLLECTION
import logging

logger = logging.getLogger(__name__)


def create_client(uri: str = MONGO_URI) -> AsyncIOMotorClient:
    """Create a MongoDB client. The caller owns it and must close it."""
    return AsyncIOMotorClient(uri)


def get_db(client, db_name: str = MFLIX_NS):
    return client[db_name]


async def ensure_collections_exist(db):
    """Ensure all required collections exist in the database."""
    existing_collections = await db.list_collection_names()

    required_collections = [
        COMMENTS_COLLECTION,
    ]

    for collection in required_collections:
        if collection not in existing_collections:
            await db.create_collection(collection)
            logger.info(f"Created collection: {collection}")
