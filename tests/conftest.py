import copy

import pytest
from bson import ObjectId
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from mflix.db.repository.comments import CommentsDAO

TEST_DB_NAME = "mflix_test"


class FakeAggregateCursor:
    """Async iterator over precomputed aggregation output."""

    def __init__(self, docs):
        self._docs = iter(docs)

    def __aiter__(self):
        return self

    async def __anext__(self):
        try:
            return next(self._docs)
        except StopIteration:
            raise StopAsyncIteration


def _matches(doc, query):
    return all(doc.get(key) == value for key, value in query.items())


def _run_pipeline(docs, pipeline):
    for stage in pipeline:
        (op, args), = stage.items()
        if op == "$group":
            field = args["_id"].lstrip("$")
            counts = {}
            for doc in docs:
                counts[doc.get(field)] = counts.get(doc.get(field), 0) + 1
            docs = [{"_id": key, "count": value} for key, value in counts.items()]
        elif op == "$sort":
            for key, direction in reversed(list(args.items())):
                docs = sorted(docs, key=lambda d: d[key], reverse=direction == -1)
        elif op == "$limit":
            docs = docs[:args]
        else:
            raise NotImplementedError(op)
    return docs


class FakeCollection:
    """In-memory stand-in for an AsyncIOMotorCollection."""

    def __init__(self, name, docs=None, read_concern=None, parent=None):
        self.name = name
        self.docs = docs if docs is not None else {}
        self.read_concern = read_concern
        self.aggregate_read_concerns = parent.aggregate_read_concerns if parent else []

    def with_options(self, read_concern=None):
        return FakeCollection(self.name, self.docs, read_concern=read_concern, parent=self)

    async def find_one(self, query):
        for doc in self.docs.values():
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def count_documents(self, query):
        return len([doc for doc in self.docs.values() if _matches(doc, query)])

    async def insert_one(self, document):
        document.setdefault("_id", ObjectId())
        self.docs[document["_id"]] = copy.deepcopy(document)
        return InsertOneResult(document["_id"], True)

    async def update_one(self, query, update):
        for doc in self.docs.values():
            if _matches(doc, query):
                changes = update["$set"]
                modified = any(doc.get(key) != value for key, value in changes.items())
                doc.update(changes)
                return UpdateResult({"n": 1, "nModified": int(modified)}, True)
        return UpdateResult({"n": 0, "nModified": 0}, True)

    async def delete_one(self, query):
        for key, doc in list(self.docs.items()):
            if _matches(doc, query):
                del self.docs[key]
                return DeleteResult({"n": 1}, True)
        return DeleteResult({"n": 0}, True)

    def aggregate(self, pipeline):
        self.aggregate_read_concerns.append(self.read_concern)
        return FakeAggregateCursor(_run_pipeline(list(self.docs.values()), pipeline))


class FakeDatabase:
    def __init__(self, name):
        self.name = name
        self.collections = {}

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


class FakeMongoClient:
    def __init__(self):
        self.databases = {}

    def __getitem__(self, name):
        if name not in self.databases:
            self.databases[name] = FakeDatabase(name)
        return self.databases[name]


@pytest.fixture
def mongo_client():
    return FakeMongoClient()


@pytest.fixture
def comments_collection(mongo_client):
    return mongo_client[TEST_DB_NAME]["comments"]


@pytest.fixture
def comments_dao(mongo_client):
    dao = CommentsDAO(db_name=TEST_DB_NAME)
    dao.inject_db(mongo_client)
    return dao
