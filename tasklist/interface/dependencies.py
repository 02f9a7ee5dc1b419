"""FastAPI dependencies wiring the document store into repositories and services."""

from fastapi import Depends, Request

from tasklist.core.db_client import DocumentStore
from tasklist.repositories.task_repository import TaskRepository
from tasklist.repositories.user_repository import UserRepository
from tasklist.services.task_service import TaskService
from tasklist.services.user_service import UserService


def get_store(request: Request) -> DocumentStore:
    """Document store attached to the application by create_app()."""
    return request.app.state.store


def get_task_service(store: DocumentStore = Depends(get_store)) -> TaskService:
    return TaskService(TaskRepository(store))


def get_user_service(store: DocumentStore = Depends(get_store)) -> UserService:
    return UserService(UserRepository(store))
