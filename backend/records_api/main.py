"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from records_api.config import Settings, get_settings
from records_api.domain.exceptions import (
    ConstraintError,
    EntityNotFoundError,
    StorageError,
    ValidationError,
)
from records_api.infrastructure.database import Database
from records_api.infrastructure.logging.log_config import setup_logging
from records_api.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, open and close the database."""
    setup_logging(app.state.settings)

    database: Database = app.state.database
    await database.open()

    yield

    # Shutdown
    await database.close()


def _failure(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    content: dict = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors onto HTTP status codes and the JSON envelope."""

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _failure(status.HTTP_400_BAD_REQUEST, exc.message, exc.kind.value)

    @app.exception_handler(RequestValidationError)
    async def _malformed_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _failure(status.HTTP_400_BAD_REQUEST, "Request body must be a JSON object")

    @app.exception_handler(EntityNotFoundError)
    async def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
        return _failure(status.HTTP_404_NOT_FOUND, f"{exc.entity_type} not found")

    @app.exception_handler(ConstraintError)
    async def _constraint(request: Request, exc: ConstraintError) -> JSONResponse:
        return _failure(status.HTTP_409_CONFLICT, "Email already exists", exc.kind.value)

    @app.exception_handler(StorageError)
    async def _storage(request: Request, exc: StorageError) -> JSONResponse:
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(exc))

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "Unknown error"
        )


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database(
        settings.database_url, echo=settings.database_echo
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "records_api.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
