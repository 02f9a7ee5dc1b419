"""Request body validation performed before any business logic runs."""

import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from tasklist.core.errors import ValidationFailedError


M = TypeVar("M", bound=BaseModel)


def format_issues(error: ValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic errors into ``{"path": [...], "message": ...}`` issues."""
    return [{"path": list(issue["loc"]), "message": issue["msg"]} for issue in error.errors()]


def validate_request(schema: type[M]) -> Callable[[Request], Awaitable[M]]:
    """Build a dependency that parses the JSON body against ``schema``.

    An empty body is treated as ``{}`` so that missing fields are reported
    individually.

    Raises:
        ValidationFailedError: On malformed JSON or any schema violation
    """

    async def dependency(request: Request) -> M:
        raw = await request.body()
        try:
            payload = json.loads(raw) if raw else {}
        except ValueError as e:
            raise ValidationFailedError([{"path": [], "message": f"Malformed JSON body: {e}"}]) from e

        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            raise ValidationFailedError(format_issues(e)) from e

    return dependency
