"""Client-side data access and state for tasklist front ends."""

from tasklist.client.api_client import ApiClient, ApiError
from tasklist.client.auth_store import AuthStore
from tasklist.client.bootstrap import create_task_store
from tasklist.client.task_client import TaskClient
from tasklist.client.task_store import TaskStore


__all__ = [
    "ApiClient",
    "ApiError",
    "AuthStore",
    "TaskClient",
    "TaskStore",
    "create_task_store",
]
