"""Task endpoints of the tasklist API."""

from typing import Literal, TypedDict

from tasklist.client.api_client import ApiClient
from tasklist.domain.task import Task


class CreateTaskData(TypedDict):
    title: str
    description: str


class UpdateTaskData(TypedDict, total=False):
    title: str
    description: str
    status: Literal["pending", "completed"]


class TaskClient:
    """Remote CRUD calls for the authenticated user's tasks.

    Payloads are sent as given; the server is the validator.
    """

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def get_tasks(self) -> list[Task]:
        response = await self.api.request("GET", "/tasks")
        return [Task.model_validate(item) for item in response.json()]

    async def get_task_by_id(self, task_id: str) -> Task:
        response = await self.api.request("GET", f"/tasks/{task_id}")
        return Task.model_validate(response.json())

    async def create_task(self, data: CreateTaskData) -> Task:
        response = await self.api.request("POST", "/tasks", json=data)
        return Task.model_validate(response.json())

    async def update_task(self, task_id: str, data: UpdateTaskData) -> Task:
        response = await self.api.request("PUT", f"/tasks/{task_id}", json=data)
        return Task.model_validate(response.json())

    async def delete_task(self, task_id: str) -> None:
        await self.api.request("DELETE", f"/tasks/{task_id}")
