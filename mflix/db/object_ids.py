from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from mflix.db.errors import InvalidObjectIdError


def parse_object_id(value: Any) -> ObjectId:
    """
    Coerce a 24-character hex string into an ObjectId.

    An ObjectId passed in is returned unchanged. Anything else, including
    None, raw bytes and integers, raises InvalidObjectIdError.
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        raise InvalidObjectIdError(value)
    try:
        return ObjectId(value)
    except InvalidId as e:
        raise InvalidObjectIdError(value) from e
