"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1 over a
shared httpx.AsyncClient. Only the calls the coordinator needs are
implemented: get, create-only insert, and masked patch.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Any
from urllib.parse import quote, unquote

import httpx

from app.core.path_validation import validate_document_id
from app.infrastructure.firebase._rest_encoding import (
    decode_document,
    encode_document,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"

Params = list[tuple[str, str]]


class DocumentExistsError(Exception):
    """createDocument answered 409: the document id is already taken."""


def _segment(document_id: str) -> str:
    """Encode an id for use as one URL path segment (?, # and % included)."""
    return quote(document_id, safe="")


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _refresh_token(credentials) -> str:
    """Blocking token refresh (google-auth uses requests)."""
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class DocumentSnapshot:
    """Decoded document: id plus plain-Python field values."""

    def __init__(self, id_: str, data: dict[str, Any]):
        self.id = id_
        self._data = data

    @classmethod
    def from_rest(cls, path: str, document: dict) -> DocumentSnapshot:
        return cls(unquote(path.rsplit("/", 1)[-1]), decode_document(document))

    def to_dict(self) -> dict[str, Any]:
        return self._data


class DocumentReference:
    """A single document path."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self.path = path

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; None if it does not exist."""
        out = await self._client.send("GET", self.path)
        return DocumentSnapshot.from_rest(self.path, out) if out is not None else None

    async def update(
        self, data: dict[str, Any], field_paths: Iterable[str]
    ) -> DocumentSnapshot | None:
        """PATCH only field_paths; other stored fields are untouched.

        Firestore deletes a masked path that is absent from the body, so a
        null must be passed as an explicit None. The document has to exist
        (currentDocument.exists); None is returned when it does not,
        otherwise the whole updated document.
        """
        paths = sorted(field_paths)
        params: Params = [("updateMask.fieldPaths", p) for p in paths]
        params.append(("currentDocument.exists", "true"))
        body = encode_document({p: data[p] for p in paths if p in data})
        out = await self._client.send("PATCH", self.path, body=body, params=params)
        return DocumentSnapshot.from_rest(self.path, out) if out is not None else None


class CollectionReference:
    """A collection path (top-level or under a parent document)."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self.path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        """Reference to one document; the id is percent-encoded as a path segment."""
        return DocumentReference(self._client, f"{self.path}/{_segment(document_id)}")

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """createDocument with an explicit id; DocumentExistsError if taken."""
        await self._client.send(
            "POST",
            self.path,
            body=encode_document(data),
            params=[("documentId", document_id)],
        )


class FirestoreRESTClient:
    """Firestore REST v1 client for one project's default database."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._credentials = credentials
        self._root = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client or httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP pool unless it was injected."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshing runs in a worker thread."""
        return await asyncio.to_thread(_refresh_token, self._credentials)

    async def send(
        self,
        method: str,
        path: str,
        *,
        body: dict | None = None,
        params: Params | None = None,
    ) -> dict | None:
        """Call the REST API for a resource path.

        Returns the decoded JSON body, or None on 404. A 409 raises
        DocumentExistsError; any other non-2xx raises httpx.HTTPStatusError.
        """
        resp = await self._http.request(
            method,
            f"{_BASE}/{path}",
            json=body,
            params=params,
            headers={"Authorization": f"Bearer {await self.get_token()}"},
        )
        if resp.status_code == 404:
            return None
        if resp.status_code == 409:
            raise DocumentExistsError(path)
        resp.raise_for_status()
        return resp.json() if resp.content else {}

    def parent_path(self, collection_id: str, document_id: str) -> str:
        """Full resource path of collection_id/document_id, usable as a parent.

        Raises:
            ValueError: If document_id is not a valid path segment.
        """
        validate_document_id(document_id)
        return f"{self._root}/{collection_id}/{_segment(document_id)}"

    def collection(
        self, collection_id: str, parent: str | None = None
    ) -> CollectionReference:
        """Top-level collection, or a subcollection of the document at parent."""
        return CollectionReference(self, f"{parent or self._root}/{collection_id}")
