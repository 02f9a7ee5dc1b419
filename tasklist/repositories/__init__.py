"""Record stores over the document store."""

from tasklist.repositories.task_repository import TaskRepository
from tasklist.repositories.user_repository import UserRepository


__all__ = [
    "TaskRepository",
    "UserRepository",
]
