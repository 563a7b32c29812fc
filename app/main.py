import uvicorn
import logging
from typing import Any, Dict, List, Union

from elasticsearch import NotFoundError
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from document_store import DocumentStore, ENGINE_ERRORS
from es_settings import ElasticsearchSettings

logger = logging.getLogger(__name__)

app = FastAPI()

Scalar = Union[int, float, str]


# Data model for an incoming document; any extra field is stored as-is
class DocumentIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Union[int, str]  # Document id, also used as the Elasticsearch _id


# Data model for a single-field search
class FieldSearch(BaseModel):
    field: str  # Field to search in
    value: Scalar  # Value (or prefix, for match-any) to look for
    limit: int = Field(default=50, ge=1, le=100)  # Number of documents to return
    offset: int = Field(default=0, ge=0)  # Offset for pagination


# Data model for a search across several fields
class MultiFieldSearch(BaseModel):
    fields: List[str] = Field(min_length=1)  # Fields to search in
    value: Scalar  # Free-text query
    limit: int = Field(default=100, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


# Data model for a page of documents
class SearchResponse(BaseModel):
    total: int  # Number of matching documents in the index
    data: List[Dict[str, Any]]  # Stored bodies of the returned page


def get_store(request: Request) -> DocumentStore:
    """Returns the DocumentStore created at startup."""
    return request.app.state.store


def engine_error(e: Exception) -> HTTPException:
    """Wraps a client error into an HTTP 500."""
    logger.error("Elasticsearch error: %s", e)
    return HTTPException(status_code=500, detail=f"Elasticsearch error: {str(e)}")


@app.post("/index")
def create_index(store: DocumentStore = Depends(get_store)):
    response = store.create_index()
    if response is False:
        raise HTTPException(status_code=409, detail=f"Index '{store.get_index()}' could not be created")
    return response


@app.delete("/index")
def delete_index(store: DocumentStore = Depends(get_store)):
    response = store.delete_index()
    if response is False:
        raise HTTPException(status_code=404, detail=f"Index '{store.get_index()}' could not be deleted")
    return response


@app.put("/mapping")
def set_mapping(mapping: Dict[str, Any], store: DocumentStore = Depends(get_store)):
    try:
        return store.set_mapping(mapping)
    except ENGINE_ERRORS as e:
        raise engine_error(e)


@app.post("/documents")
def put_document(document: DocumentIn, store: DocumentStore = Depends(get_store)):
    try:
        return store.put(document.model_dump())
    except ENGINE_ERRORS as e:
        raise engine_error(e)


@app.post("/documents/_bulk")
def bulk_documents(documents: List[DocumentIn], store: DocumentStore = Depends(get_store)):
    try:
        return store.bulk([document.model_dump() for document in documents])
    except ENGINE_ERRORS as e:
        raise engine_error(e)


@app.get("/documents", response_model=SearchResponse)
def all_documents(limit: int = Query(default=50, ge=1, le=100),
                  offset: int = Query(default=0, ge=0),
                  store: DocumentStore = Depends(get_store)):
    try:
        return store.all(limit, offset)
    except ENGINE_ERRORS as e:
        raise engine_error(e)


@app.get("/documents/{doc_id}")
def get_document(doc_id: str, store: DocumentStore = Depends(get_store)):
    document = store.get(doc_id)
    if document is False:
        raise HTTPException(status_code=404, detail=f"Document '{doc_id}' not found")
    return document


@app.patch("/documents/{doc_id}")
def update_document(doc_id: str, data: Dict[str, Any], store: DocumentStore = Depends(get_store)):
    response = store.update(doc_id, data)
    if response is False:
        raise HTTPException(status_code=404, detail=f"Document '{doc_id}' not found")
    return response


@app.delete("/documents/{doc_id}")
def delete_document(doc_id: str, store: DocumentStore = Depends(get_store)):
    try:
        return store.delete(doc_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=f"Document '{doc_id}' not found")
    except ENGINE_ERRORS as e:
        raise engine_error(e)


@app.post("/search/match", response_model=SearchResponse)
def match(search: FieldSearch, store: DocumentStore = Depends(get_store)):
    try:
        return store.match(search.field, search.value, search.limit, search.offset)
    except ENGINE_ERRORS as e:
        raise engine_error(e)


@app.post("/search/match-any", response_model=SearchResponse)
def match_any(search: FieldSearch, store: DocumentStore = Depends(get_store)):
    try:
        return store.match_any(search.field, search.value, search.limit, search.offset)
    except ENGINE_ERRORS as e:
        raise engine_error(e)


@app.post("/search/multi-match", response_model=SearchResponse)
def multi_match(search: MultiFieldSearch, store: DocumentStore = Depends(get_store)):
    try:
        return store.multi_match(search.fields, search.value, search.limit, search.offset)
    except ENGINE_ERRORS as e:
        raise engine_error(e)


@app.get("/count")
def count(store: DocumentStore = Depends(get_store)):
    try:
        return {"count": store.count()}
    except ENGINE_ERRORS as e:
        raise engine_error(e)


@app.on_event("startup")
def startup_event():
    app.state.store = DocumentStore(ElasticsearchSettings.from_env())


@app.on_event("shutdown")
def shutdown_event():
    app.state.store.close()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
