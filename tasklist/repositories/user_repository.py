"""User repository - document store operations for User."""

import logging
from datetime import UTC, datetime

from tasklist.core.db_client import DocumentStore
from tasklist.core.errors import DuplicateKeyError, PersistenceError
from tasklist.domain.user import User, UserCreate


logger = logging.getLogger(__name__)

COLLECTION = "users"


class UserRepository:
    """Repository for User document operations."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def find_by_auth0_id(self, auth0_id: str) -> User | None:
        """Get a user by identity provider subject."""
        document = await self.store.find_one(COLLECTION, {"auth0_id": auth0_id})
        return User.model_validate(document) if document else None

    async def create(self, data: UserCreate) -> User:
        """Create a new user.

        Raises:
            DuplicateKeyError: If a user with the same subject already exists
        """
        document = await self.store.insert_one(
            COLLECTION,
            {**data.model_dump(), "created_at": datetime.now(UTC)},
        )
        logger.info("Created user", extra={"user_id": document["_id"]})
        return User.model_validate(document)

    async def find_or_create(self, auth0_id: str, email: str, name: str) -> User:
        """Return the user for a subject, creating it on first sight.

        Two first logins racing for the same subject both reach ``create``; the
        unique index rejects the loser, which then returns the winner's row.
        """
        user = await self.find_by_auth0_id(auth0_id)
        if user:
            return user

        try:
            return await self.create(UserCreate(auth0_id=auth0_id, email=email, name=name))
        except DuplicateKeyError:
            logger.info("Concurrent user creation, re-fetching", extra={"auth0_id": auth0_id})
            user = await self.find_by_auth0_id(auth0_id)
            if user is None:
                raise PersistenceError(f"User {auth0_id} vanished after duplicate key conflict") from None
            return user
