"""In-memory document store for local runs and tests (implements IDocumentStore).

Documents are keyed by their full path ("users/u1/tasks/t1") and copied on
the way in and out so callers never share state with the store.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from app.core.path_validation import validate_document_id
from app.domain.exceptions import (
    DocumentAlreadyExistsException,
    ScopeResolutionException,
)


class InMemoryDocumentStore:
    """Process-local store with create-only inserts and masked updates.

    Each operation completes without awaiting, so on a single event loop a
    check-and-insert cannot interleave with another request.
    """

    def __init__(self) -> None:
        self._docs: dict[str, dict[str, Any]] = {}

    @staticmethod
    def _path(collection: str, document_id: str, parent: str | None) -> str:
        base = f"{parent}/{collection}" if parent else collection
        return f"{base}/{document_id}"

    def parent_path(self, collection: str, document_id: str) -> str:
        try:
            validate_document_id(document_id)
        except ValueError as e:
            raise ScopeResolutionException(collection, document_id, str(e)) from e
        return f"{collection}/{document_id}"

    async def exists(
        self, collection: str, document_id: str, parent: str | None = None
    ) -> bool:
        return self._path(collection, document_id, parent) in self._docs

    async def insert(
        self,
        collection: str,
        document_id: str,
        document: dict[str, Any],
        parent: str | None = None,
    ) -> None:
        path = self._path(collection, document_id, parent)
        if path in self._docs:
            raise DocumentAlreadyExistsException(path)
        self._docs[path] = copy.deepcopy(document)

    async def get_by_id(
        self, collection: str, document_id: str, parent: str | None = None
    ) -> dict[str, Any] | None:
        doc = self._docs.get(self._path(collection, document_id, parent))
        return copy.deepcopy(doc) if doc is not None else None

    async def update_fields(
        self,
        collection: str,
        document_id: str,
        field_mask: Iterable[str],
        partial: dict[str, Any],
        parent: str | None = None,
    ) -> dict[str, Any] | None:
        doc = self._docs.get(self._path(collection, document_id, parent))
        if doc is None:
            return None
        # Same rule as Firestore updateMask: masked but absent means delete.
        for name in field_mask:
            if name in partial:
                doc[name] = copy.deepcopy(partial[name])
            else:
                doc.pop(name, None)
        return copy.deepcopy(doc)

    def document_count(self, collection: str, parent: str | None = None) -> int:
        """Number of documents directly in collection (test helper)."""
        base = f"{parent}/{collection}/" if parent else f"{collection}/"
        return sum(
            1 for path in self._docs
            if path.startswith(base) and "/" not in path[len(base):]
        )
