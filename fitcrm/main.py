"""
FastAPI application entry point.

Using an application factory (create_app) so tests can build an app
around their own settings and in-memory store.

For local development:
    uvicorn fitcrm.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import clients, health
from .config.settings import Settings, get_settings
from .core.clients.errors import DuplicateClientIdError, NotFoundError, ValidationError
from .infrastructure.storage.client import StorageConfig, StorageError, create_storage_client
from .infrastructure.storage.repository import ClientRepository
from .infrastructure.wger.client import WgerConfig, create_exercise_client

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

logger = logging.getLogger(__name__)


def build_repository(settings: Settings) -> ClientRepository:
    """Create the store and the repository on top of it."""
    store = create_storage_client(
        config=StorageConfig(data_dir=settings.data_dir),
        mock_mode=settings.storage_mock_mode,
    )
    return ClientRepository(store, storage_key=settings.storage_key)


def build_suggestion_source(settings: Settings):
    config = WgerConfig(
        api_url=settings.exercise_api_url,
        language=settings.exercise_language,
        preview_length=settings.exercise_preview_length,
        timeout_seconds=settings.exercise_timeout_seconds,
    )
    return create_exercise_client(config=config, mock_mode=settings.exercise_mock_mode)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build the long-lived collaborators on startup.

    The repository and suggestion client are created once per process and
    handed to routes through app.state.
    """
    settings: Settings = app.state.settings

    logger.info(
        "FitCRM starting",
        extra={
            "version": settings.api_version,
            "mock_mode": {
                "storage": settings.storage_mock_mode,
                "exercises": settings.exercise_mock_mode,
            }
        }
    )

    missing_fields = settings.validate_required_fields()
    if missing_fields:
        logger.error(
            "Missing required configuration",
            extra={"missing_fields": missing_fields}
        )

    if getattr(app.state, "repository", None) is None:
        app.state.repository = build_repository(settings)
    if getattr(app.state, "suggestion_source", None) is None:
        app.state.suggestion_source = build_suggestion_source(settings)

    yield

    logger.info("FitCRM shutting down")


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[ClientRepository] = None,
    suggestion_source=None,
) -> FastAPI:
    """
    Application factory.

    Collaborators passed in are used as-is; anything omitted is built from
    settings during startup.
    """
    settings = settings or get_settings()

    logging.getLogger().setLevel(settings.log_level.upper())

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="""
        Client management for fitness professionals.

        ## Screens

        - **List**: `GET /api/v1/clients?q=` searches clients by name
        - **Form**: `POST /api/v1/clients` adds, `PUT /api/v1/clients/{id}` edits
        - **Detail**: `GET /api/v1/clients/{id}/view` shows a client with
          suggested exercises from the wger catalog
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.repository = repository
    app.state.suggestion_source = suggestion_source

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    app.include_router(
        clients.router,
        prefix="/api/v1/clients",
        tags=["Clients"],
    )

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": settings.api_title,
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.info(
            "Client not found",
            extra={"path": request.url.path, "client_id": exc.client_id}
        )
        return JSONResponse(status_code=404, content={"detail": "Client not found!"})

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=422,
            content={"detail": f"Error: {exc.message}", "reasons": exc.reasons},
        )

    @app.exception_handler(DuplicateClientIdError)
    async def duplicate_id_handler(request: Request, exc: DuplicateClientIdError):
        logger.warning(
            "Duplicate client id",
            extra={"path": request.url.path, "client_id": exc.client_id}
        )
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(
            "Client storage unavailable",
            extra={"path": request.url.path, "error": str(exc)}
        )
        return JSONResponse(
            status_code=503,
            content={"detail": "Client storage is unavailable."}
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all exception handler.

        Logs the full error server-side and returns a generic message.
        """
        logger.error(
            "Unhandled exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
            },
            exc_info=exc,
        )

        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error."}
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "fitcrm.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )
