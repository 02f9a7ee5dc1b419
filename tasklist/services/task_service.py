"""Task service: owner-scoped task operations for the API layer."""

import logging

from tasklist.core.logging import log_with_user_context, span
from tasklist.domain.task import Task, TaskCreate, TaskUpdate
from tasklist.repositories.task_repository import TaskRepository


logger = logging.getLogger(__name__)


class TaskService:
    """Delegates to the task repository with the authenticated owner's id.

    Adds no rules of its own; ownership filtering lives in the repository queries.
    """

    def __init__(self, task_repository: TaskRepository) -> None:
        self.task_repository = task_repository

    async def get_all_tasks(self, user_id: str) -> list[Task]:
        with span("task_service.get_all_tasks", user_id=user_id):
            return await self.task_repository.find_by_user_id(user_id)

    async def get_task_by_id(self, task_id: str, user_id: str) -> Task | None:
        with span("task_service.get_task_by_id", user_id=user_id, task_id=task_id):
            return await self.task_repository.find_by_id(task_id, user_id)

    async def create_task(self, user_id: str, data: TaskCreate) -> Task:
        with span("task_service.create_task", user_id=user_id):
            return await self.task_repository.create(user_id, data)

    async def update_task(self, task_id: str, user_id: str, data: TaskUpdate) -> Task | None:
        with span("task_service.update_task", user_id=user_id, task_id=task_id):
            return await self.task_repository.update(task_id, user_id, data)

    async def delete_task(self, task_id: str, user_id: str) -> bool:
        """Soft-delete a task.

        Returns:
            True if an active task was marked deleted, False otherwise
        """
        with span("task_service.delete_task", user_id=user_id, task_id=task_id):
            deleted = await self.task_repository.soft_delete(task_id, user_id)
            if deleted:
                log_with_user_context(logger, "info", "Soft-deleted task", user_id=user_id, task_id=task_id)
            return deleted
