"""Domain models and DTOs."""

from tasklist.domain.task import Task, TaskCreate, TaskStatus, TaskUpdate
from tasklist.domain.user import User, UserCreate


__all__ = [
    "Task",
    "TaskCreate",
    "TaskStatus",
    "TaskUpdate",
    "User",
    "UserCreate",
]
