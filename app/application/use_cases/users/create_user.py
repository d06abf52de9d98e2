"""Create user use case: handles UserCreatedEvent from the account service."""

from __future__ import annotations

import logging

from app.application.interfaces.repositories import IUserRepository
from app.application.interfaces.services import IExistenceChecker
from app.domain.events import UserCreatedEvent
from app.domain.exceptions import UserAlreadyExistsException
from app.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """Registers a user document so tasks can be scoped under it."""

    def __init__(
        self,
        user_repo: IUserRepository,
        existence: IExistenceChecker,
    ) -> None:
        self._user_repo = user_repo
        self._existence = existence

    @traced("users.create_user")
    async def execute(self, event: UserCreatedEvent) -> None:
        """Create users/{user_id}.

        Raises:
            UserAlreadyExistsException: If the user is already stored (checked
                first, and again by the store's create-only insert).
            ScopeResolutionException: If the user id is not a valid document id.
            StoreUnavailableException: If the store fails.
        """
        logger.debug("Create user request: %s", event)
        if await self._existence.user_exists(event.user_id):
            raise UserAlreadyExistsException(event.user_id)
        await self._user_repo.create_user(event.user_id)
        logger.info("User created: %s", event.user_id)
