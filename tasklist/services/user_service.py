"""User service for login-time user provisioning."""

import logging

from tasklist.core.logging import span
from tasklist.domain.user import User
from tasklist.repositories.user_repository import UserRepository


logger = logging.getLogger(__name__)


class UserService:
    """User lookups keyed by identity provider subject."""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def find_or_create_user(self, auth0_id: str, email: str, name: str) -> User:
        """Get the user for a subject, creating it on first login.

        Args:
            auth0_id: Identity provider subject claim
            email: Email claim, only stored on creation
            name: Display name claim, only stored on creation

        Returns:
            The existing or newly created user

        Raises:
            PersistenceError: If the document store fails
        """
        with span("user_service.find_or_create_user", auth0_id=auth0_id):
            return await self.user_repository.find_or_create(auth0_id, email, name)

    async def get_user_by_auth0_id(self, auth0_id: str) -> User | None:
        """Get user by identity provider subject, or None if never seen."""
        return await self.user_repository.find_by_auth0_id(auth0_id)
