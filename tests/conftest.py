"""
Pytest configuration and shared fixtures

Provides an in-memory fake of the Elasticsearch store client so the API,
writer and loader can be tested without a cluster.
"""
import pytest

from product_search.errors import Unavailable, UpstreamError


class FakeStore:
    """
    Records every call and replays scripted outcomes.

    search_result: dict returned by search(), or an exception to raise
    write_failures: {doc_id: n} fails the first n writes of that document;
        n = -1 fails forever
    """

    def __init__(self, search_result=None, write_failures=None):
        self.search_result = search_result if search_result is not None else {"hits": {"hits": []}}
        self.write_failures = dict(write_failures or {})
        self.search_calls = []
        self.write_calls = []

    def search(self, payload, timeout=None):
        self.search_calls.append(payload)
        if isinstance(self.search_result, Exception):
            raise self.search_result
        return self.search_result

    def index_document(self, doc_id, body, timeout=None):
        self.write_calls.append((doc_id, body, timeout))
        remaining = self.write_failures.get(doc_id, 0)
        if remaining == -1:
            raise UpstreamError(503, "503 Service Unavailable", "")
        if remaining > 0:
            self.write_failures[doc_id] = remaining - 1
            raise Unavailable("connection refused")
        return {"result": "created", "_id": doc_id}


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def sleeps():
    """Collects requested delays (seconds); pass sleeps.append as the sleep function."""
    return []


@pytest.fixture
def product():
    return {
        "id": "1",
        "name": "Product 1",
        "description": "Description for Product 1",
        "category": "Electronics",
        "price": 10.0,
    }
