"""Task domain models, enums and request payloads."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from tasklist.core.config import constants


class TaskStatus(StrEnum):
    """Task completion status."""

    PENDING = "pending"
    COMPLETED = "completed"


def _bounded_text(value: str, *, max_length: int, empty_message: str, too_long_message: str) -> str:
    """Trim a text field and enforce its length bounds."""
    value = value.strip()
    if not value:
        raise PydanticCustomError("string_too_short", empty_message)
    if len(value) > max_length:
        raise PydanticCustomError("string_too_long", too_long_message, {"max_length": max_length})
    return value


class Task(BaseModel):
    """Task data transfer object."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Unique task ID from the document store")
    title: str = Field(..., description="Task title")
    description: str = Field(..., description="Detailed task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Completion status")
    user_id: str = Field(..., description="Owning user ID")
    created_at: datetime = Field(..., description="Creation timestamp")
    deleted_at: datetime | None = Field(default=None, description="Soft-delete timestamp, null while active")


class TaskCreate(BaseModel):
    """Request payload for creating a task."""

    title: str
    description: str

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _bounded_text(
            v,
            max_length=constants.TITLE_MAX_LENGTH,
            empty_message="Title is required",
            too_long_message="Title must be less than {max_length} characters",
        )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _bounded_text(
            v,
            max_length=constants.DESCRIPTION_MAX_LENGTH,
            empty_message="Description is required",
            too_long_message="Description must be less than {max_length} characters",
        )


class TaskUpdate(BaseModel):
    """Request payload for partially updating a task.

    Unknown keys are ignored; at least one of title, description or status
    must be supplied, and a supplied field may not be null.
    """

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None

    @field_validator("title", "description", "status", mode="before")
    @classmethod
    def reject_explicit_null(cls, v: object) -> object:
        if v is None:
            raise PydanticCustomError("null_not_allowed", "Field cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _bounded_text(
            v,
            max_length=constants.TITLE_MAX_LENGTH,
            empty_message="Title cannot be empty",
            too_long_message="Title too long",
        )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _bounded_text(
            v,
            max_length=constants.DESCRIPTION_MAX_LENGTH,
            empty_message="Description cannot be empty",
            too_long_message="Description too long",
        )

    @model_validator(mode="after")
    def require_one_field(self) -> "TaskUpdate":
        if not self.model_fields_set:
            raise PydanticCustomError("missing_fields", "At least one field must be provided")
        return self

    def changes(self) -> dict[str, str]:
        """Return only the supplied fields, JSON-ready."""
        return self.model_dump(mode="json", exclude_unset=True)
