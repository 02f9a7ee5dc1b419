"""Client-side task state: the task list plus transient loading and feedback state.

Every remote action follows the same shape: raise ``loading``, clear the
previous error, call the API, reconcile ``tasks`` with the server's answer (or
record an error message), and always drop ``loading`` again. Actions never
raise; failures surface as ``error``.
"""

import logging

from tasklist.client.api_client import ApiError
from tasklist.client.observable import Observable
from tasklist.client.task_client import CreateTaskData, TaskClient, UpdateTaskData
from tasklist.client.timers import AsyncioScheduler, ExpiringSlot, Scheduler
from tasklist.domain.task import Task, TaskStatus


logger = logging.getLogger(__name__)


ERROR_MESSAGE_TTL_SECONDS = 5.0
SUCCESS_MESSAGE_TTL_SECONDS = 3.0

MSG_TASK_CREATED = "Tarea creada exitosamente"
MSG_TASK_UPDATED = "Tarea actualizada exitosamente"
MSG_TASK_DELETED = "Tarea borrada exitosamente"

MSG_FETCH_FAILED = "Error al traer las tareas"
MSG_CREATE_FAILED = "Error al crear la tarea"
MSG_UPDATE_FAILED = "Error al actualizar la tarea"
MSG_DELETE_FAILED = "Error al borrar la tarea"


def _failure_message(exc: Exception, fallback: str) -> str:
    if isinstance(exc, ApiError) and exc.server_error:
        return exc.server_error
    return fallback


class TaskStore(Observable):
    """Observable container for the user's tasks.

    Attributes:
        tasks: Tasks in display order, newest first
        loading: True while a remote action is in flight
        error: Current error message, cleared after ``error_ttl`` seconds
        success: Current success message, cleared after ``success_ttl`` seconds
        message_id: Incremented whenever a new error or success message is shown,
            so repeated identical messages can be told apart
    """

    def __init__(
        self,
        task_client: TaskClient,
        *,
        scheduler: Scheduler | None = None,
        error_ttl: float = ERROR_MESSAGE_TTL_SECONDS,
        success_ttl: float = SUCCESS_MESSAGE_TTL_SECONDS,
    ) -> None:
        super().__init__()
        self.task_client = task_client
        self.tasks: list[Task] = []
        self.loading = False
        self.error: str | None = None
        self.success: str | None = None
        self.message_id = 0

        scheduler = scheduler or AsyncioScheduler()
        self._error_slot = ExpiringSlot(scheduler, error_ttl, self._expire_error)
        self._success_slot = ExpiringSlot(scheduler, success_ttl, self._expire_success)

    def set_loading(self, loading: bool) -> None:
        self.loading = loading
        self._notify()

    def set_error(self, error: str | None) -> None:
        self.error = error
        if error is not None:
            self.message_id += 1
            self._error_slot.restart()
        else:
            self._error_slot.cancel()
        self._notify()

    def set_success(self, success: str | None) -> None:
        self.success = success
        if success is not None:
            self.message_id += 1
            self._success_slot.restart()
        else:
            self._success_slot.cancel()
        self._notify()

    def _expire_error(self) -> None:
        self.error = None
        self._notify()

    def _expire_success(self) -> None:
        self.success = None
        self._notify()

    async def fetch_tasks(self) -> None:
        self.set_loading(True)
        self.set_error(None)

        try:
            tasks = await self.task_client.get_tasks()
        except Exception as e:
            logger.warning("fetch_tasks_failed", extra={"error": str(e)})
            self.set_error(_failure_message(e, MSG_FETCH_FAILED))
        else:
            self.tasks = tasks
            self._notify()
        finally:
            self.set_loading(False)

    async def create_task(self, data: CreateTaskData) -> None:
        self.set_loading(True)
        self.set_error(None)

        try:
            task = await self.task_client.create_task(data)
        except Exception as e:
            logger.warning("create_task_failed", extra={"error": str(e)})
            self.set_error(_failure_message(e, MSG_CREATE_FAILED))
        else:
            self.tasks.insert(0, task)
            self.set_success(MSG_TASK_CREATED)
        finally:
            self.set_loading(False)

    async def update_task(self, task_id: str, data: UpdateTaskData) -> None:
        self.set_loading(True)
        self.set_error(None)

        try:
            updated_task = await self.task_client.update_task(task_id, data)
        except Exception as e:
            logger.warning("update_task_failed", extra={"error": str(e), "task_id": task_id})
            self.set_error(_failure_message(e, MSG_UPDATE_FAILED))
        else:
            index = next((i for i, task in enumerate(self.tasks) if task.id == task_id), None)
            if index is not None:
                self.tasks[index] = updated_task
            self.set_success(MSG_TASK_UPDATED)
        finally:
            self.set_loading(False)

    async def delete_task(self, task_id: str) -> None:
        self.set_loading(True)
        self.set_error(None)

        try:
            await self.task_client.delete_task(task_id)
        except Exception as e:
            logger.warning("delete_task_failed", extra={"error": str(e), "task_id": task_id})
            self.set_error(_failure_message(e, MSG_DELETE_FAILED))
        else:
            self.tasks = [task for task in self.tasks if task.id != task_id]
            self.set_success(MSG_TASK_DELETED)
        finally:
            self.set_loading(False)

    @property
    def pending_tasks(self) -> list[Task]:
        return [task for task in self.tasks if task.status == TaskStatus.PENDING]

    @property
    def completed_tasks(self) -> list[Task]:
        return [task for task in self.tasks if task.status == TaskStatus.COMPLETED]
