import copy

import pytest

from reply_assistant.services.storage import StorageService


class FakeUpdateResult:
    def __init__(self, modified_count):
        self.modified_count = modified_count


class FakeCollection:
    """Just enough of a pymongo collection for key/value documents"""

    def __init__(self, documents=None):
        self.documents = {doc["_id"]: doc for doc in (documents or [])}
        self.update_calls = []

    def find_one(self, query):
        doc = self.documents.get(query["_id"])
        return copy.deepcopy(doc) if doc else None

    def update_one(self, query, update, upsert=False):
        self.update_calls.append((query, update, upsert))
        key = query["_id"]
        if key not in self.documents:
            if not upsert:
                return FakeUpdateResult(0)
            self.documents[key] = {"_id": key}
        self.documents[key].update(update["$set"])
        return FakeUpdateResult(1)


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def storage(collection):
    return StorageService(collection=collection)
