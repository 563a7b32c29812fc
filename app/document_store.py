import logging
from typing import Any, Dict, List, Optional, Union

from elasticsearch import ApiError, Elasticsearch, TransportError

from es_settings import ElasticsearchSettings

logger = logging.getLogger(__name__)

# Failures raised by the client while talking to the engine
ENGINE_ERRORS = (ApiError, TransportError)

# The client rejects empty index names and ids with ValueError before sending
SENTINEL_ERRORS = ENGINE_ERRORS + (ValueError,)

Document = Dict[str, Any]


def _body(response):
    """Unwrap a client response to its JSON body."""
    return getattr(response, "body", response)


class DocumentStore:
    """
    Thin helper over the official Elasticsearch client.

    Holds a client, the index being worked on and a document type label.
    create_index, delete_index, get and update return False when the engine
    rejects the request; every other method lets client errors propagate.
    """

    def __init__(self, settings: Optional[ElasticsearchSettings] = None,
                 client: Optional[Elasticsearch] = None,
                 auto_refresh: Optional[bool] = None):
        if settings is None:
            settings = ElasticsearchSettings()
        self.client = client if client is not None else settings.client()
        self.index = settings.index
        self.document_type = settings.document_type
        self.auto_refresh = settings.auto_refresh if auto_refresh is None else auto_refresh

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        """Release the client's connection pool."""
        self.client.close()

    def get_index(self) -> str:
        return self.index

    def set_index(self, index: str):
        self.index = index

    def get_type(self) -> str:
        return self.document_type

    def set_type(self, document_type: str):
        self.document_type = document_type

    def create_index(self, mappings: Optional[Dict[str, Any]] = None,
                     settings: Optional[Dict[str, Any]] = None) -> Union[Dict[str, Any], bool]:
        """Create the current index, returning False if the engine refuses."""
        try:
            response = self.client.indices.create(
                index=self.index, mappings=mappings, settings=settings)
        except SENTINEL_ERRORS as e:
            logger.warning("Could not create index '%s': %s", self.index, e)
            return False
        logger.info("Created index '%s'", self.index)
        return _body(response)

    def delete_index(self) -> Union[Dict[str, Any], bool]:
        """Delete the current index, returning False if the engine refuses."""
        try:
            response = self.client.indices.delete(index=self.index)
        except SENTINEL_ERRORS as e:
            logger.warning("Could not delete index '%s': %s", self.index, e)
            return False
        logger.info("Deleted index '%s'", self.index)
        return _body(response)

    def set_mapping(self, mapping: Dict[str, Any]) -> Dict[str, Any]:
        """
        Put the field mapping for the current index.

        Parameter:
        - mapping: Field name to field definition, e.g. {"id": {"type": "long"}}.

        Returns:
        - The engine's acknowledgment.
        """
        response = self.client.indices.put_mapping(
            index=self.index,
            properties=mapping,
            source={"enabled": True},
            meta={"document_type": self.document_type},
        )
        return _body(response)

    def put(self, document: Document) -> Dict[str, Any]:
        """Index a single document under its own id."""
        response = self.client.index(
            index=self.index, id=document["id"], document=document)
        return _body(response)

    def bulk(self, documents: List[Document]) -> Dict[str, Any]:
        """
        Index several documents in one bulk request.

        Every document contributes an index action carrying its id, followed
        by the document itself.
        """
        operations = []
        for document in documents:
            operations.append({"index": {"_index": self.index, "_id": document["id"]}})
            operations.append(document)

        response = _body(self.client.bulk(operations=operations))
        logger.info("Bulk indexed %d %s documents into '%s' (errors=%s)",
                    len(documents), self.document_type or "untyped",
                    self.index, response.get("errors"))
        return response

    def all(self, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
        """Page through every document, ordered by ascending id."""
        return self._search(
            query={"match_all": {}},
            sort=[{"id": {"order": "asc"}}],
            limit=limit,
            offset=offset,
        )

    def get(self, doc_id: Union[int, str]) -> Union[Document, bool]:
        """Return the stored document, or False when it cannot be fetched."""
        try:
            response = self.client.get(index=self.index, id=doc_id)
        except SENTINEL_ERRORS as e:
            logger.warning("Could not get document %s from '%s': %s", doc_id, self.index, e)
            return False
        return response["_source"]

    def update(self, doc_id: Union[int, str], data: Document) -> Union[Dict[str, Any], bool]:
        """Merge the given fields into a stored document, or return False."""
        try:
            response = self.client.update(index=self.index, id=doc_id, doc=data)
        except SENTINEL_ERRORS as e:
            logger.warning("Could not update document %s in '%s': %s", doc_id, self.index, e)
            return False
        return _body(response)

    def delete(self, doc_id: Union[int, str]) -> Dict[str, Any]:
        response = self.client.delete(index=self.index, id=doc_id)
        return _body(response)

    def match(self, field: str, value: Any, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
        """Documents whose field matches the value."""
        return self._search(query={"match": {field: value}}, limit=limit, offset=offset)

    def match_any(self, field: str, value: Any, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
        """Documents whose field starts with the value."""
        query = {
            "query_string": {
                "query": f"{field}:{value}*",
                "allow_leading_wildcard": False,
            }
        }
        return self._search(query=query, limit=limit, offset=offset)

    def multi_match(self, fields: List[str], value: Any, limit: int = 100, offset: int = 0) -> Dict[str, Any]:
        """Free-text search over several fields."""
        query = {
            "query_string": {
                "query": str(value),
                "fields": fields,
            }
        }
        return self._search(query=query, limit=limit, offset=offset)

    def count(self) -> int:
        """Number of documents in the current index."""
        self._refresh()
        return self.client.count(index=self.index)["count"]

    def _search(self, query: Dict[str, Any], limit: int, offset: int,
                sort: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        self._refresh()
        logger.debug("Searching '%s' from=%d size=%d: %s", self.index, offset, limit, query)
        response = self.client.search(
            index=self.index, query=query, sort=sort, from_=offset, size=limit)
        hits = response["hits"]
        return {
            "total": self._total(hits["total"]),
            "data": self._extract(hits["hits"]),
        }

    def _refresh(self):
        if self.auto_refresh:
            self.client.indices.refresh(index=self.index)

    @staticmethod
    def _total(total: Union[int, Dict[str, Any]]) -> int:
        # Elasticsearch 7+ reports {"value": n, "relation": "eq"}
        if isinstance(total, dict):
            return total["value"]
        return total

    @staticmethod
    def _extract(hits: List[Dict[str, Any]]) -> List[Document]:
        return [hit["_source"] for hit in hits if "_source" in hit]
