"""tasklist - multi-user to-do list REST API."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tasklist import __version__
from tasklist.core.config import Settings, get_settings
from tasklist.core.db_client import DocumentStore, SQLiteDocumentStore
from tasklist.core.logging import configure_logfire, instrument_fastapi
from tasklist.interface.auth import TokenVerifier
from tasklist.interface.error_handlers import register_exception_handlers
from tasklist.interface.task_router import router as task_router


logger = logging.getLogger(__name__)


def validate_startup_configuration(settings: Settings) -> None:
    """Fail fast when bearer tokens cannot be verified.

    Raises:
        SystemExit: If neither AUTH_SECRET nor AUTH_JWKS_URL is configured
    """
    logger.info("startup_validation_begin")

    if not settings.has_token_verification:
        msg = "Token verification not configured. Set AUTH_SECRET or AUTH_JWKS_URL environment variable."
        logger.error("startup_validation_failed", extra={"error": msg})
        print(f"\n❌ Startup validation failed: {msg}\n", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    logger.info("startup_validation", extra={"stage": "credentials", "status": "ok"})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    settings: Settings = app.state.settings
    # Configure logging first so validation logs are captured
    configure_logfire(settings)
    validate_startup_configuration(settings)

    store = app.state.store
    if isinstance(store, SQLiteDocumentStore):
        try:
            await store.open()
        except Exception as e:
            logger.error("database_connection_failed", extra={"error": str(e)})
            print(f"\n❌ Failed to open database: {e}\n", file=sys.stderr)  # noqa: T201
            sys.exit(1)
        logger.info("Database initialized")

    yield

    if isinstance(store, SQLiteDocumentStore):
        await store.close()


def create_app(*, settings: Settings | None = None, store: DocumentStore | None = None) -> FastAPI:
    """Build the application and its wiring.

    Args:
        settings: Settings to use; read from the environment when omitted
        store: Document store to use; a SQLite store at ``settings.database_path``
            (opened during lifespan) when omitted
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="tasklist",
        description="Multi-user to-do list",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else SQLiteDocumentStore(settings.database_path)
    app.state.token_verifier = TokenVerifier(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Instrument FastAPI with Logfire
    instrument_fastapi(app)

    register_exception_handlers(app)
    app.include_router(task_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "ok"}, status_code=200)

    return app


app = create_app()
