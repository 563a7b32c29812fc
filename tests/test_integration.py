"""Scenarios against a running Elasticsearch node.

Set ELASTICSEARCH_TEST_HOST (e.g. http://localhost:9200) to run them.
"""
from __future__ import annotations

from collections.abc import Iterator

import pytest

from document_store import DocumentStore
from es_settings import ElasticsearchSettings

INDEX = "document-store-testing"

MAPPING = {
    "id": {"type": "long"},
    "username": {"type": "text", "analyzer": "standard"},
    "role": {"type": "text", "analyzer": "standard"},
}


@pytest.fixture
def live_store(live_host) -> Iterator[DocumentStore]:
    if not live_host:
        pytest.skip("ELASTICSEARCH_TEST_HOST is not set")
    store = DocumentStore(ElasticsearchSettings(host=live_host, index=INDEX, document_type="users"))
    try:
        yield store
    finally:
        store.delete_index()
        store.close()


@pytest.fixture
def seeded_store(live_store, sample_users) -> DocumentStore:
    live_store.create_index()
    live_store.set_mapping(MAPPING)
    live_store.bulk(sample_users)
    return live_store


def test_create_index_twice(live_store):
    assert "acknowledged" in live_store.create_index()
    assert live_store.create_index() is False


def test_delete_missing_index(live_store):
    live_store.create_index()
    assert "acknowledged" in live_store.delete_index()
    assert live_store.delete_index() is False


def test_set_mapping(live_store):
    live_store.create_index()
    assert live_store.set_mapping(MAPPING)["acknowledged"] is True


def test_put_creates_document(live_store):
    live_store.create_index()
    live_store.set_mapping(MAPPING)

    assert live_store.put({"id": 1, "username": "jancyril"})["result"] == "created"


def test_bulk_reports_no_errors(live_store, sample_users):
    live_store.create_index()
    live_store.set_mapping(MAPPING)

    assert live_store.bulk(sample_users)["errors"] is False


def test_count_and_all(seeded_store):
    assert seeded_store.count() == 4
    assert seeded_store.all()["total"] == 4


def test_all_with_limit_and_offset(seeded_store):
    assert len(seeded_store.all(2)["data"]) == 2

    page = seeded_store.all(1, 1)["data"]
    assert len(page) == 1
    assert page[0]["id"] == 2


def test_get(seeded_store):
    assert seeded_store.get(3)["id"] == 3
    assert seeded_store.get(5) is False


def test_delete_then_get(seeded_store):
    assert seeded_store.delete(3)["result"] == "deleted"
    assert seeded_store.get(3) is False


def test_update(seeded_store):
    seeded_store.update(1, {"username": "JC"})
    assert seeded_store.get(1)["username"] == "JC"


def test_update_missing_document(seeded_store):
    assert seeded_store.update(5, {"username": "JC"}) is False
    assert seeded_store.get(5) is False


def test_match(seeded_store):
    response = seeded_store.match("username", "aceraven777")
    assert [user["username"] for user in response["data"]] == ["aceraven777"]


def test_match_any(seeded_store):
    assert seeded_store.match_any("username", "fox")["data"][0]["username"] == "foxlance"
    assert seeded_store.match_any("username", "nels")["data"] == []


def test_multi_match(seeded_store):
    assert seeded_store.multi_match(["username", "role"], "admin")["total"] == 2
