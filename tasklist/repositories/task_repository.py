"""Task repository - owner-scoped document store operations for Task.

Every query matches ``user_id`` and ``deleted_at: None``, so a task owned by
someone else and a soft-deleted task look exactly like a missing one.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from tasklist.core.db_client import DESCENDING, DocumentStore
from tasklist.domain.task import Task, TaskCreate, TaskStatus, TaskUpdate


logger = logging.getLogger(__name__)

COLLECTION = "tasks"


def _active(user_id: str, **extra: Any) -> dict[str, Any]:
    return {**extra, "user_id": user_id, "deleted_at": None}


class TaskRepository:
    """Repository for Task document operations."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def find_by_user_id(self, user_id: str) -> list[Task]:
        """Get all active tasks of a user, newest first."""
        documents = await self.store.find(COLLECTION, _active(user_id), sort=[("created_at", DESCENDING)])
        return [Task.model_validate(document) for document in documents]

    async def find_by_id(self, task_id: str, user_id: str) -> Task | None:
        """Get an active task by ID within the owner's scope."""
        document = await self.store.find_one(COLLECTION, _active(user_id, _id=task_id))
        return Task.model_validate(document) if document else None

    async def create(self, user_id: str, data: TaskCreate) -> Task:
        """Create a pending task owned by ``user_id``."""
        document = await self.store.insert_one(
            COLLECTION,
            {
                **data.model_dump(),
                "user_id": user_id,
                "status": TaskStatus.PENDING.value,
                "created_at": datetime.now(UTC),
                "deleted_at": None,
            },
        )
        logger.info("Created task", extra={"task_id": document["_id"], "user_id": user_id})
        return Task.model_validate(document)

    async def update(self, task_id: str, user_id: str, data: TaskUpdate) -> Task | None:
        """Apply the supplied fields to an active task; None when nothing matched."""
        document = await self.store.find_one_and_update(
            COLLECTION,
            _active(user_id, _id=task_id),
            {"$set": data.changes()},
        )
        return Task.model_validate(document) if document else None

    async def soft_delete(self, task_id: str, user_id: str) -> bool:
        """Mark an active task deleted. Returns False if already deleted, missing or not owned."""
        modified = await self.store.update_one(
            COLLECTION,
            _active(user_id, _id=task_id),
            {"$set": {"deleted_at": datetime.now(UTC)}},
        )
        return modified > 0
