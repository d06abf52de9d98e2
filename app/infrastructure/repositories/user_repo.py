"""User repository over a document store (implements IUserRepository)."""

from __future__ import annotations

from app.application.interfaces.services import IDocumentStore
from app.domain.exceptions import (
    DocumentAlreadyExistsException,
    UserAlreadyExistsException,
)
from app.infrastructure.firebase.collections import COLLECTION_USERS


class UserRepository:
    """Users are bare documents keyed by the externally issued user id."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def create_user(self, user_id: str) -> None:
        """Create users/{user_id} with an empty task list placeholder."""
        # Same segment rules as task scopes; raises ScopeResolutionException.
        self._store.parent_path(COLLECTION_USERS, user_id)
        try:
            await self._store.insert(COLLECTION_USERS, user_id, {"tasks": []})
        except DocumentAlreadyExistsException:
            raise UserAlreadyExistsException(user_id) from None
