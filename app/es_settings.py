import os
import logging
from typing import Literal, Mapping, Optional

from elasticsearch import Elasticsearch
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://localhost:9200"


# Pieces of the node URL when it is given as ES_SCHEME, ES_HOST and ES_PORT
class HostParts(BaseModel):
    scheme: Literal["http", "https"] = "http"
    host: str = Field(default="localhost", min_length=1)
    port: int = Field(default=9200, gt=0, le=65535)

    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


class ElasticsearchSettings(BaseModel):
    host: str = DEFAULT_HOST  # Full URL of the Elasticsearch node
    index: str = ""  # Index the store starts on
    document_type: str = ""  # Document type label the store starts on
    request_timeout: float = Field(default=10.0, gt=0)  # Per-request timeout in seconds
    max_retries: int = Field(default=3, ge=0)  # Transport-level retries
    retry_on_timeout: bool = False
    auto_refresh: bool = True  # Refresh the index before every read

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ElasticsearchSettings":
        """
        Builds settings from environment variables.

        ELASTICSEARCH_HOST wins when present; otherwise the URL is composed
        from ES_SCHEME, ES_HOST and ES_PORT.

        Parameter:
        - environ: Mapping to read from (defaults to os.environ).

        Returns:
        - An ElasticsearchSettings instance.
        """
        env = os.environ if environ is None else environ

        host = env.get("ELASTICSEARCH_HOST")
        if host:
            if "://" not in host:
                host = f"http://{host}"
        else:
            parts = HostParts(
                scheme=env.get("ES_SCHEME", "http"),
                host=env.get("ES_HOST", "localhost"),
                port=env.get("ES_PORT", 9200),
            )
            host = parts.url()

        values = {"host": host}
        optional = {
            "index": "ES_INDEX",
            "document_type": "ES_DOCUMENT_TYPE",
            "request_timeout": "ES_REQUEST_TIMEOUT",
            "max_retries": "ES_MAX_RETRIES",
            "retry_on_timeout": "ES_RETRY_ON_TIMEOUT",
            "auto_refresh": "ES_AUTO_REFRESH",
        }
        for field, variable in optional.items():
            if variable in env:
                values[field] = env[variable]
        return cls(**values)

    def client(self) -> Elasticsearch:
        """Create an Elasticsearch client for the configured node."""
        logger.info("Connecting to Elasticsearch at %s", self.host)
        return Elasticsearch(
            self.host,
            request_timeout=self.request_timeout,
            max_retries=self.max_retries,
            retry_on_timeout=self.retry_on_timeout,
        )
