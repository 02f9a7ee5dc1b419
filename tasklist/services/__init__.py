from tasklist.services.task_service import TaskService
from tasklist.services.user_service import UserService


__all__ = [
    "TaskService",
    "UserService",
]
