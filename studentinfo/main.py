"""
StudentInfo API — FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers,
       and returns the app. uvicorn serves the module-level `app`:

           uvicorn studentinfo.main:app --host 0.0.0.0 --port 8000

Application Layout:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:  RequestID → AccessLog → CORS           │
    │                                                      │
    │  Routes:                                             │
    │    POST   /api/addstudent     GET /api/studentlist   │
    │    GET    /api/getbyid/{id}   PATCH /api/update/{id} │
    │    DELETE /api/delete/{id}    GET /health            │
    │                                                      │
    │  Exception Handlers:                                 │
    │    NotFound→404  Database→500  Validation→422        │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the listening address
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studentinfo import __version__
from studentinfo.config import settings
from studentinfo.database import dispose_engine
from studentinfo.exceptions import DatabaseError, NotFoundError, StudentInfoError
from studentinfo.middleware.logging import RequestLoggingMiddleware
from studentinfo.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from studentinfo.routes import health, students

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger for the whole application.

    Format: 2026-01-15T12:00:00 [INFO] studentinfo.access [1f2e3d4c]: GET ...

    Every record passes through RequestIDLogFilter, so %(request_id)s is
    always defined.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if settings.log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("StudentInfo API %s starting up", __version__)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)

    yield

    logger.info("StudentInfo API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> Optional[str]:
    # The catch-all handler runs outside the middleware stack, after the
    # ContextVar is reset; request.state still carries the ID there.
    return getattr(request.state, "request_id", None) or request_id_var.get("") or None


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the API's error envelope.

    Handler table:
        NotFoundError           → 404 {"status": exc.status, "message": ...}
        DatabaseError           → 500 {"status": "error", "message": ...}
        StudentInfoError (base) → 500 {"status": "error", "message": ...}
        RequestValidationError  → 422 {"status": "fail", "message": ..., "details": [...]}
        Exception (fallback)    → 500 generic message, traceback logged
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content={
                "status": exc.status,
                "message": exc.message,
                "request_id": _request_id(request),
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = _request_id(request)
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StudentInfoError)
    async def handle_app_error(request: Request, exc: StudentInfoError):
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": exc.message,
                "request_id": _request_id(request),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        """Malformed path, query or body. Keeps FastAPI's 422 status."""
        logger.warning("Validation error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=422,
            content={
                "status": "fail",
                "message": "Request validation failed",
                "details": jsonable_encoder(exc.errors()),
                "request_id": _request_id(request),
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "An unexpected error occurred.",
                "request_id": _request_id(request),
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble a configured FastAPI instance."""
    app = FastAPI(
        title="StudentInfo API",
        description="CRUD API over the studentinfo table.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RequestID → RequestLogging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(students.router)
    app.include_router(health.router)

    return app


app = create_app()
