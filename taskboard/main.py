import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from .config import CORS_ORIGINS, DEBUG_ERRORS, LOG_LEVEL
from .database import Database
from .errors import InternalError, TaskboardError, ValidationError
from .logging_setup import setup_logging
from .routers import tasks, users

logger = logging.getLogger(__name__)


def _error_response(error: TaskboardError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "error": error.message},
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskboardError)
    async def taskboard_error_handler(request: Request, exc: TaskboardError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(ValidationError(_describe_validation_error(exc)))

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Store error on %s %s", request.method, request.url.path)
        return _error_response(InternalError(str(exc) if DEBUG_ERRORS else None))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(InternalError(str(exc) if DEBUG_ERRORS else None))


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """Build the API with its own store handle."""
    database = Database(database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_tables()
        logger.info("Taskboard API ready")
        yield
        database.dispose()

    app = FastAPI(
        title="Taskboard API",
        description="Task management backend with checklists, assignment and analytics",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(users.router, prefix="/api/v1/user", tags=["user"])
    app.include_router(tasks.router, prefix="/api/v1/task", tags=["task"])

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        return "Hello world"

    @app.get("/api/v1/", response_class=PlainTextResponse)
    def read_v1_root():
        return "This is v1 of server"

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


setup_logging(LOG_LEVEL)
app = create_app()
