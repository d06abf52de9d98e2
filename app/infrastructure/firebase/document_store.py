"""Firestore-backed document store (implements IDocumentStore).

Translates REST client outcomes into domain exceptions: 404 reads are
None, 409 creates are DocumentAlreadyExistsException, and every transport,
auth or HTTP error becomes StoreUnavailableException.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterable
from typing import Any, TypeVar

import httpx
from google.auth.exceptions import GoogleAuthError

from app.domain.exceptions import (
    DocumentAlreadyExistsException,
    ScopeResolutionException,
    StoreUnavailableException,
)
from app.infrastructure.firebase._rest_client import (
    CollectionReference,
    DocumentExistsError,
    FirestoreRESTClient,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STORE_ERRORS = (httpx.HTTPError, GoogleAuthError)


class FirestoreDocumentStore:
    """Document store over the Firestore REST client. Safe for concurrent use."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    def _coll(self, collection: str, parent: str | None) -> CollectionReference:
        return self._client.collection(collection, parent=parent)

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except _STORE_ERRORS as e:
            logger.error("Firestore %s failed: %s", operation, e)
            raise StoreUnavailableException(operation, str(e)) from e

    def parent_path(self, collection: str, document_id: str) -> str:
        """Return the full Firestore path of collection/document_id."""
        try:
            return self._client.parent_path(collection, document_id)
        except ValueError as e:
            raise ScopeResolutionException(collection, document_id, str(e)) from e

    async def exists(
        self, collection: str, document_id: str, parent: str | None = None
    ) -> bool:
        """Return True if the document is present (404 is False, not an error)."""
        snapshot = await self._call(
            "get", self._coll(collection, parent).document(document_id).get()
        )
        return snapshot is not None

    async def insert(
        self,
        collection: str,
        document_id: str,
        document: dict[str, Any],
        parent: str | None = None,
    ) -> None:
        """Create-only insert; a concurrent creator of the same id gets a conflict."""
        coll = self._coll(collection, parent)
        try:
            await self._call("insert", coll.create(document_id, document))
        except DocumentExistsError:
            raise DocumentAlreadyExistsException(
                coll.document(document_id).path
            ) from None

    async def get_by_id(
        self, collection: str, document_id: str, parent: str | None = None
    ) -> dict[str, Any] | None:
        """Return document fields, or None if not found."""
        snapshot = await self._call(
            "get", self._coll(collection, parent).document(document_id).get()
        )
        return snapshot.to_dict() if snapshot is not None else None

    async def update_fields(
        self,
        collection: str,
        document_id: str,
        field_mask: Iterable[str],
        partial: dict[str, Any],
        parent: str | None = None,
    ) -> dict[str, Any] | None:
        """PATCH with updateMask; None when the document does not exist."""
        doc_ref = self._coll(collection, parent).document(document_id)
        snapshot = await self._call("update", doc_ref.update(partial, field_mask))
        return snapshot.to_dict() if snapshot is not None else None
