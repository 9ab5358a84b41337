import asyncio
import logging

from mflix.core.config import LOG_LEVEL, COMMENTS_COLLECTION
from mflix.db.session import create_client, get_db, ensure_collections_exist

logger = logging.getLogger(__name__)


async def initialize_db():
    client = create_client()
    try:
        db = get_db(client)

        # Ensure collections exist
        await ensure_collections_exist(db)

        # Speeds up the ownership filter and the most-active report
        await db[COMMENTS_COLLECTION].create_index("email")
        await db[COMMENTS_COLLECTION].create_index("movie_id")
        logger.info(f"Database '{db.name}' initialized.")
    finally:
        client.close()


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL)
    asyncio.run(initialize_db())
