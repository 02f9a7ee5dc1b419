"""Map the error taxonomy to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from tasklist.core.errors import NotFoundError, PersistenceError, UnauthorizedError, ValidationFailedError


logger = logging.getLogger(__name__)


async def handle_unauthorized(_request: Request, _exc: Exception) -> JSONResponse:
    return JSONResponse(
        content={"error": "Unauthorized"},
        status_code=status.HTTP_401_UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def handle_validation_failed(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, ValidationFailedError)
    logger.info("validation_failed", extra={"path": request.url.path, "issues": len(exc.details)})
    return JSONResponse(
        content={"error": "Validation failed", "details": exc.details},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def handle_not_found(_request: Request, _exc: Exception) -> JSONResponse:
    return JSONResponse(content={"error": "Task not found"}, status_code=status.HTTP_404_NOT_FOUND)


async def handle_persistence_error(request: Request, exc: Exception) -> JSONResponse:
    """Failures outside the task routes' own handling, e.g. while provisioning the user."""
    logger.error("persistence_error", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(
        content={"error": "Internal server error", "message": str(exc)},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UnauthorizedError, handle_unauthorized)
    app.add_exception_handler(ValidationFailedError, handle_validation_failed)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(PersistenceError, handle_persistence_error)
