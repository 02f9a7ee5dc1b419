"""Error taxonomy shared by the storage, service and HTTP layers."""

from typing import Any


class ErrorCode:
    """Error codes attached to structured log records."""

    ERR_UNAUTHORIZED = "ERR_UNAUTHORIZED"
    ERR_VALIDATION_FAILED = "ERR_VALIDATION_FAILED"
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_PERSISTENCE = "ERR_PERSISTENCE"
    ERR_DUPLICATE_KEY = "ERR_DUPLICATE_KEY"


class TaskListError(Exception):
    """Base class for errors raised by tasklist."""

    code: str = ErrorCode.ERR_PERSISTENCE


class UnauthorizedError(TaskListError):
    """The request carries no usable identity claim."""

    code = ErrorCode.ERR_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ValidationFailedError(TaskListError):
    """A request body violated its schema.

    Attributes:
        details: Field-level issues, each a dict with ``path`` and ``message``.
    """

    code = ErrorCode.ERR_VALIDATION_FAILED

    def __init__(self, details: list[dict[str, Any]]) -> None:
        super().__init__("Validation failed")
        self.details = details


class NotFoundError(TaskListError):
    """The task does not exist, belongs to someone else, or was deleted."""

    code = ErrorCode.ERR_TASK_NOT_FOUND

    def __init__(self, message: str = "Task not found") -> None:
        super().__init__(message)


class PersistenceError(TaskListError):
    """An unexpected document store failure."""

    code = ErrorCode.ERR_PERSISTENCE


class DuplicateKeyError(PersistenceError):
    """An insert violated a unique index."""

    code = ErrorCode.ERR_DUPLICATE_KEY
