from __future__ import annotations

import os
from typing import Callable
from unittest.mock import MagicMock

import pytest
from elasticsearch import ApiError

from document_store import DocumentStore
from es_settings import ElasticsearchSettings


SAMPLE_USERS = [
    {"id": 1, "username": "jancyril", "role": "admin"},
    {"id": 2, "username": "foxlance", "role": "developer"},
    {"id": 3, "username": "aceraven777", "role": "developer"},
    {"id": 4, "username": "admin", "role": "developer"},
]


@pytest.fixture
def sample_users() -> list[dict]:
    return [dict(user) for user in SAMPLE_USERS]


@pytest.fixture
def es_client() -> MagicMock:
    """A stand-in for the Elasticsearch client that records every call."""
    client = MagicMock(name="Elasticsearch")
    client.count.return_value = {"count": 0}
    return client


@pytest.fixture
def store(es_client: MagicMock) -> DocumentStore:
    settings = ElasticsearchSettings(index="testing", document_type="users")
    return DocumentStore(settings, client=es_client)


@pytest.fixture
def api_error() -> Callable[..., ApiError]:
    """Build a client ApiError subclass with the given HTTP status."""

    def _factory(cls=ApiError, status: int = 400, message: str = "error") -> ApiError:
        return cls(message, meta=MagicMock(status=status), body={"error": {"type": message}})

    return _factory


@pytest.fixture
def search_response() -> Callable[..., dict]:
    """Shape documents the way the engine returns search hits."""

    def _factory(documents: list[dict], total: int | None = None) -> dict:
        return {
            "hits": {
                "total": {"value": len(documents) if total is None else total, "relation": "eq"},
                "hits": [
                    {"_index": "testing", "_id": str(doc["id"]), "_score": 1.0, "_source": doc}
                    for doc in documents
                ],
            }
        }

    return _factory


@pytest.fixture(scope="session")
def live_host() -> str | None:
    """Return the Elasticsearch test URL if provided via env."""
    return os.getenv("ELASTICSEARCH_TEST_HOST")
