import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from pymongo.read_concern import ReadConcern
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from mflix.core.config import MFLIX_NS, COMMENTS_COLLECTION
from mflix.db.errors import CollectionNotInitializedError
from mflix.db.object_ids import parse_object_id

logger = logging.getLogger(__name__)

MOST_ACTIVE_LIMIT = 20

# Either the driver's result object or {"error": <exception>}
DAOResponse = Union[InsertOneResult, UpdateResult, List[Dict[str, Any]], Dict[str, Any]]


def _user_field(user, field: str):
    if isinstance(user, Mapping):
        return user[field]
    return getattr(user, field)


class CommentsDAO:
    """
    Data access for the mflix ``comments`` collection.

    ``add_comment``, ``update_comment`` and ``most_active_commenters`` log
    failures and return ``{"error": exc}``. ``delete_comment`` lets
    exceptions reach the caller.
    """

    def __init__(self, db_name: Optional[str] = None, collection_name: str = COMMENTS_COLLECTION):
        self.db_name = db_name or MFLIX_NS
        self.collection_name = collection_name
        self._collection = None

    @property
    def is_initialized(self) -> bool:
        return self._collection is not None

    @property
    def collection(self):
        if self._collection is None:
            raise CollectionNotInitializedError(self.collection_name)
        return self._collection

    def inject_db(self, client) -> None:
        """Bind the collection handle once; later calls keep the first handle."""
        if self._collection is not None:
            return
        try:
            self._collection = client[self.db_name][self.collection_name]
        except Exception as e:
            logger.error(f"Unable to establish collection handles in CommentsDAO: {str(e)}")

    async def add_comment(self, movie_id: str, user, comment: str, date: datetime) -> DAOResponse:
        """
        Insert a comment with the fields name, email, movie_id, text and date.

        ``user`` may be a mapping or an object with ``name`` and ``email``.
        Returns the InsertOneResult, or ``{"error": exc}``.
        """
        try:
            comment_doc = {
                "name": _user_field(user, "name"),
                "email": _user_field(user, "email"),
                "movie_id": parse_object_id(movie_id),
                "text": comment,
                "date": date,
            }
            return await self.collection.insert_one(comment_doc)
        except Exception as e:
            logger.error(f"Unable to post comment: {str(e)}")
            return {"error": e}

    async def update_comment(self, comment_id: str, user_email: str, text: str, date: datetime) -> DAOResponse:
        """
        Set text and date on the comment matching both id and email.

        A comment owned by someone else matches nothing; the UpdateResult then
        reports zero modified documents.
        """
        try:
            return await self.collection.update_one(
                {"_id": parse_object_id(comment_id), "email": user_email},
                {"$set": {"text": text, "date": date}},
            )
        except Exception as e:
            logger.error(f"Unable to update comment: {str(e)}")
            return {"error": e}

    async def delete_comment(self, comment_id: str, user_email: str) -> DeleteResult:
        # the user's email is part of the filter so only the owner can delete
        return await self.collection.delete_one(
            {"_id": parse_object_id(comment_id), "email": user_email}
        )

    async def most_active_commenters(self) -> DAOResponse:
        """Top commenters by comment count, read at majority read concern."""
        try:
            pipeline = [
                {"$group": {"_id": "$email", "count": {"$sum": 1}}},
                {"$sort": {"count": -1}},
                {"$limit": MOST_ACTIVE_LIMIT},
            ]
            collection = self.collection.with_options(read_concern=ReadConcern("majority"))
            return [doc async for doc in collection.aggregate(pipeline)]
        except Exception as e:
            logger.error(f"Unable to retrieve most active commenters: {str(e)}")
            return {"error": e}
