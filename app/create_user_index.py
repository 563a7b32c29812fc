import os

from document_store import DocumentStore
from es_settings import ElasticsearchSettings

# Ensures environment variables are set
os.environ.setdefault("ES_HOST", "localhost")
os.environ.setdefault("ES_PORT", "9200")
os.environ.setdefault("ES_SCHEME", "http")

USER_INDEX = "users"
USER_TYPE = "users"

# Defines the index analyzers with stemming and lowercase optimization
INDEX_OPTIMIZATIONS = {
    "analysis": {
        "analyzer": {
            "standard_stem_analyzer": {
                "type": "custom",
                "tokenizer": "standard",
                "filter": ["lowercase", "porter_stem"]
            }
        }
    }
}

# Data model
USER_MAPPINGS = {
    "id": {"type": "long"},
    "username": {"type": "text", "analyzer": "standard", "fields": {"keyword": {"type": "keyword"}}},
    "role": {"type": "text", "analyzer": "standard", "fields": {"keyword": {"type": "keyword"}}},
    "email": {"type": "keyword"},
    "created_at": {"type": "date"}
}


def create_user_index(store: DocumentStore):
    """
    Creates the user index and puts the user mapping on it.

    Returns:
    - True when the index was newly created, False if it already existed.
    """
    store.set_index(USER_INDEX)
    store.set_type(USER_TYPE)
    created = store.create_index(settings=INDEX_OPTIMIZATIONS)
    store.set_mapping(USER_MAPPINGS)
    return created is not False


if __name__ == "__main__":
    with DocumentStore(ElasticsearchSettings.from_env()) as store:
        if create_user_index(store):
            print(f"Index '{USER_INDEX}' created successfully.")
        else:
            print(f"Index '{USER_INDEX}' already exists, mapping updated.")
