"""Pytest configuration and fixtures for unit tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tasklist.core.config import Settings
from tasklist.main import create_app
from tasklist.repositories.task_repository import TaskRepository
from tasklist.repositories.user_repository import UserRepository
from tasklist.services.task_service import TaskService
from tasklist.services.user_service import UserService
from tests.unit.mocks import InMemoryDocumentStore, ManualScheduler


@pytest.fixture
def in_memory_store() -> InMemoryDocumentStore:
    """Provides a fresh InMemoryDocumentStore for each test."""
    return InMemoryDocumentStore()


@pytest.fixture
def task_repository(in_memory_store: InMemoryDocumentStore) -> TaskRepository:
    return TaskRepository(in_memory_store)


@pytest.fixture
def user_repository(in_memory_store: InMemoryDocumentStore) -> UserRepository:
    return UserRepository(in_memory_store)


@pytest.fixture
def task_service(task_repository: TaskRepository) -> TaskService:
    return TaskService(task_repository)


@pytest.fixture
def user_service(user_repository: UserRepository) -> UserService:
    return UserService(user_repository)


@pytest.fixture
def app(test_settings: Settings, in_memory_store: InMemoryDocumentStore) -> FastAPI:
    """Application wired to the in-memory store."""
    return create_app(settings=test_settings, store=in_memory_store)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide FastAPI test client.

    Not entered as a context manager, so the lifespan (startup validation and
    Logfire configuration) does not run.
    """
    return TestClient(app)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
