"""Typesense API client.

Calls the Typesense REST API over HTTP. One request per call; failures are
raised to the caller.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import requests

from AmbIndex.utils.log import log

DEFAULT_TIMEOUT = 10.0
API_KEY_HEADER = "X-TYPESENSE-API-KEY"

HEADERS = {
    "User-Agent": "amb-index/0.1",
    "Accept": "application/json",
}


class TypesenseError(RuntimeError):
    """Raised when Typesense answers with an unexpected status code."""

    def __init__(self, status_code: int, body: str, *, action: str = "request") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Typesense {action} failed: status={status_code} body={body}")


class DocumentExistsError(TypesenseError):
    """Raised when a document with the same id is already indexed."""


class TypesenseApiClient:
    """Low-level HTTP client for the Typesense REST API.

    Responsible only for making requests and returning decoded JSON. Document
    mapping and query compilation are handled elsewhere.
    """

    def __init__(self, *, host: str, api_key: str, timeout: Optional[float] = None) -> None:
        """Initialize the client with a reusable HTTP session.

        Args:
            host: Base URL, e.g. ``http://localhost:8108``.
            api_key: Typesense API key.
            timeout: Optional request timeout in seconds.
        """
        self.host = host.rstrip("/")
        self.timeout = timeout or DEFAULT_TIMEOUT
        self._session = requests.Session()
        self._session.headers.update(HEADERS)
        self._session.headers[API_KEY_HEADER] = api_key

    def close(self) -> None:
        """Close the underlying HTTP session and release pooled connections.
        """
        self._session.close()

    def __enter__(self) -> TypesenseApiClient:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close session."""
        self.close()

    def collection_exists(self, name: str) -> bool:
        """Return True if the collection exists.

        Raises:
            TypesenseError: On any status other than 200 or 404.
        """
        resp = self._request("GET", f"/collections/{name}")
        if resp.status_code == 404:
            return False
        if resp.status_code != 200:
            raise TypesenseError(resp.status_code, resp.text, action="collection lookup")
        return True

    def create_collection(self, schema: Mapping[str, Any]) -> dict[str, Any]:
        """Create a collection from a schema payload.

        Raises:
            TypesenseError: If the collection could not be created.
        """
        resp = self._request("POST", "/collections", json_body=schema)
        if resp.status_code not in (200, 201):
            raise TypesenseError(resp.status_code, resp.text, action="collection create")
        return resp.json()

    def search(self, collection: str, params: Mapping[str, str]) -> dict[str, Any]:
        """Run a document search.

        Args:
            collection: Collection name.
            params: Search parameters (``q``, ``query_by``, ``filter_by``...).
                Values are percent-encoded by the HTTP layer.

        Returns:
            Decoded search response.

        Raises:
            TypesenseError: If the search was rejected.
        """
        resp = self._request("GET", f"/collections/{collection}/documents/search", params=params)
        if resp.status_code != 200:
            raise TypesenseError(resp.status_code, resp.text, action="search")
        payload = resp.json()
        return payload if isinstance(payload, dict) else {}

    def index_document(self, collection: str, document: Mapping[str, Any]) -> dict[str, Any]:
        """Create one document.

        Raises:
            DocumentExistsError: If a document with the same id exists.
            TypesenseError: On any other failure.
        """
        resp = self._request("POST", f"/collections/{collection}/documents", json_body=document)
        if resp.status_code == 409:
            raise DocumentExistsError(resp.status_code, resp.text, action="index")
        if resp.status_code not in (200, 201):
            raise TypesenseError(resp.status_code, resp.text, action="index")
        return resp.json()

    def delete_documents(self, collection: str, filter_by: str) -> int:
        """Delete all documents matching a filter.

        Returns:
            Number of deleted documents as reported by Typesense.

        Raises:
            TypesenseError: If the deletion failed.
        """
        resp = self._request("DELETE", f"/collections/{collection}/documents", params={"filter_by": filter_by})
        if resp.status_code != 200:
            raise TypesenseError(resp.status_code, resp.text, action="delete")
        payload = resp.json()
        num_deleted = payload.get("num_deleted", 0) if isinstance(payload, dict) else 0
        return num_deleted if isinstance(num_deleted, int) else 0

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        """Issue one HTTP request against the Typesense host."""
        url = f"{self.host}{path}"
        log.debug("Typesense %s %s params=%s", method, url, dict(params or {}))
        resp = self._session.request(method, url, params=params, json=json_body, timeout=self.timeout)
        log.debug("Typesense response: status=%s bytes=%s", resp.status_code, len(resp.content or b""))
        return resp
