"""
Shared fixtures: an in-memory stand-in for the MongoDB database handle, and
a live database for pipeline tests when a server is reachable.
"""
import copy
import itertools
import os

import pytest
from fastapi.testclient import TestClient
from pymongo import MongoClient
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from database import get_db, LEARNERS_COLLECTION, GRADES_COLLECTION
from main import app


class FakeCollection:
    """
    find() honours top-level equality filters. aggregate() does not run the
    pipeline: it records it and returns the rows set in aggregate_rows.
    """

    _ids = itertools.count(1)

    def __init__(self, fail: bool = False):
        self.docs = []
        self.fail = fail
        self.pipelines = []
        self.aggregate_rows = []

    def insert_many(self, docs):
        for doc in docs:
            doc = copy.deepcopy(doc)
            doc.setdefault("_id", f"id{next(self._ids)}")
            self.docs.append(doc)

    def delete_many(self, filter):
        assert filter == {}
        self.docs.clear()

    def find(self, filter=None):
        if self.fail:
            raise ServerSelectionTimeoutError("no servers available")
        filter = filter or {}
        return iter([
            copy.deepcopy(doc)
            for doc in self.docs
            if all(key in doc and doc[key] == value for key, value in filter.items())
        ])

    def aggregate(self, pipeline):
        if self.fail:
            raise ServerSelectionTimeoutError("no servers available")
        self.pipelines.append(pipeline)
        return iter(copy.deepcopy(self.aggregate_rows))


class FakeDatabase:
    def __init__(self, fail: bool = False):
        self.collections = {}
        self.fail = fail

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(fail=self.fail)
        return self.collections[name]


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def learners(db):
    return db[LEARNERS_COLLECTION]


@pytest.fixture
def grades(db):
    return db[GRADES_COLLECTION]


@pytest.fixture
def client(db):
    """Test client bound to the fake database. Lifespan is not run."""
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client():
    broken = FakeDatabase(fail=True)
    app.dependency_overrides[get_db] = lambda: broken
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture(scope="module")
def mongo_db():
    """A scratch database on a live server; skips when none is reachable."""
    uri = os.environ.get("TEST_ATLAS_URI", "mongodb://localhost:27017")
    mongo = MongoClient(uri, serverSelectionTimeoutMS=500)
    try:
        mongo.admin.command("ping")
    except PyMongoError:
        mongo.close()
        pytest.skip(f"No MongoDB server at {uri}")

    database = mongo["grades_api_test"]
    yield database
    mongo.drop_database("grades_api_test")
    mongo.close()


@pytest.fixture
def mongo_grades(mongo_db):
    collection = mongo_db[GRADES_COLLECTION]
    collection.delete_many({})
    return collection


@pytest.fixture
def live_client(mongo_db):
    app.dependency_overrides[get_db] = lambda: mongo_db
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
