"""
Elasticsearch store client.

Thin wrapper around the Elasticsearch REST API using a connection-pooled
requests.Session. It exposes the two operations the service needs:

- search(payload): run a _search request and return the raw result document
- index_document(doc_id, body): upsert a single document by id

Transport failures and error statuses are translated into the service error
taxonomy (product_search.errors) so callers never handle requests exceptions.
"""

import time
from typing import Dict, Any, Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter

from product_search import config
from product_search.errors import InternalError, Unavailable, UpstreamError


class ElasticsearchStore:
    """
    Handles search and index requests against one Elasticsearch index.

    A single session is kept for the lifetime of the client so TCP
    connections are reused across requests. The session is shared by
    concurrent request handlers; requests.Session connection pooling is
    relied on for that, no locking is done here.
    """

    def __init__(
        self,
        endpoint: str = config.ELASTICSEARCH_URL,
        index: str = config.ELASTICSEARCH_INDEX,
        timeout: float = config.STORE_TIMEOUT_SECONDS,
        pool_size: int = config.STORE_POOL_SIZE,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            endpoint: Base URL of the cluster, e.g. "http://localhost:9200"
            index: Index name used for both search and writes
            timeout: Default per-request timeout in seconds
            pool_size: Max pooled connections per host
            session: Pre-built session (tests inject a mock here)
        """
        # Ensure no trailing slash duplication
        self.endpoint = endpoint.rstrip("/")
        self.index = index
        self.timeout = timeout

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self.session = session

    def _url(self, path: str) -> str:
        return f"{self.endpoint}/{self.index}/{path}"

    def _send(self, method: str, url: str, timeout: Optional[float], **kwargs) -> requests.Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.timeout if timeout is None else timeout,
                **kwargs
            )
        except requests.RequestException as e:
            raise Unavailable(f"Error reaching Elasticsearch at {url}: {e}") from e

        if not response.ok:
            raise UpstreamError(
                response.status_code,
                f"{response.status_code} {response.reason}",
                response.text,
            )
        return response

    def search(self, payload: Dict[str, Any], timeout: Optional[float] = None) -> Dict[str, Any]:
        """
        Execute a search request.

        Args:
            payload: Request body from payload_builder.build_search_payload()
            timeout: Overrides the client's default timeout for this call

        Returns:
            The decoded Elasticsearch response, untouched

        Raises:
            Unavailable: Network error or timeout
            UpstreamError: Elasticsearch answered with an error status
            InternalError: The response body is not valid JSON
        """
        start = time.time()
        response = self._send(
            "POST",
            self._url("_search"),
            timeout,
            json=payload,
            headers={"Content-Type": "application/json"},
        )
        elapsed_ms = (time.time() - start) * 1000
        print(f"[Store] Search response status: {response.status_code} {response.reason} ({elapsed_ms:.2f}ms)")

        try:
            return response.json()
        except ValueError as e:
            raise InternalError(f"Error decoding search response: {e}") from e

    def index_document(self, doc_id: str, body: str, timeout: Optional[float] = None) -> Dict[str, Any]:
        """
        Upsert one document by id.

        Args:
            doc_id: Document id; an existing document with this id is replaced
            body: Serialized JSON document
            timeout: Overrides the client's default timeout for this call

        Returns:
            Elasticsearch acknowledgement (e.g. {"result": "created", ...}),
            or {} when the body is not JSON

        Raises:
            Unavailable: Network error or timeout
            UpstreamError: Elasticsearch answered with an error status
        """
        url = self._url(f"_doc/{quote(str(doc_id), safe='')}")
        response = self._send(
            "PUT",
            url,
            timeout,
            data=body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
        try:
            return response.json()
        except ValueError:
            return {}

    def ping(self) -> bool:
        """
        Check that the cluster answers on its root endpoint.

        Returns:
            True if the cluster responded with a success status
        """
        try:
            response = self.session.get(self.endpoint, timeout=self.timeout)
        except requests.RequestException as e:
            print(f"[Store] Elasticsearch not reachable at {self.endpoint}: {e}")
            return False
        return response.ok

    def close(self):
        self.session.close()

