class DAOError(Exception):
    """Base class for errors raised by the data-access layer."""


class CollectionNotInitializedError(DAOError):
    """Raised when an operation runs before the collection handle was injected."""

    def __init__(self, collection_name: str):
        self.collection_name = collection_name
        super().__init__(
            f"Collection handle for '{collection_name}' is not set; call inject_db() first"
        )


class InvalidObjectIdError(DAOError, ValueError):
    """Raised when a value cannot be coerced to a BSON ObjectId."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"'{value}' is not a valid ObjectId")
