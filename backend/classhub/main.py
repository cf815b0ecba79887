"""
ClassHub Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn classhub.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────┐ ┌────────────┐ ┌─────────┐ ┌──────┐ ┌──────┐ │
    │  │ Req ID │→│ Rate Limit │→│ Logging │→│ GZip │→│ CORS │ │
    │  └────────┘ └────────────┘ └─────────┘ └──────┘ └──────┘ │
    │                                                          │
    │  Routes (each a chain of dependencies + handler):        │
    │  /classrooms  /classrooms/{id}/quizzes                   │
    │  /classrooms/{id}/attendances  /teachers  /students      │
    │  /health                                                 │
    │                                                          │
    │  Exception Handlers:                                     │
    │  Validation→400 │ Unauthorized→401 │ Forbidden→403 │     │
    │  NotFound→500 │ Database→500 │ anything else→500         │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, never fatal)

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from classhub import __version__
from classhub.config import settings
from classhub.database import dispose_engine
from classhub.exceptions import (
    ClassHubError,
    DatabaseError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from classhub.middleware.logging import RequestLoggingMiddleware
from classhub.middleware.rate_limit import RateLimitMiddleware
from classhub.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from classhub.responses import error_response
from classhub.routes import attendances, classrooms, health, people, quizzes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s

    Every handler carries RequestIDLogFilter so `request_id` is always
    present on the record ("-" outside a request).
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s"

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    for handler in handlers:
        handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=handlers,
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("ClassHub Backend %s starting up (%s)", __version__, settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("ClassHub Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def format_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, Dict[str, str]]:
    """
    Collapse pydantic error entries into one entry per field path.

    The leading location segment ("body", "query", ...) is dropped, so a
    missing `teacher` in the body is reported under "teacher". The first
    error for a path wins.
    """
    formatted: Dict[str, Dict[str, str]] = {}
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in ("body", "query", "path", "header"):
            location = location[1:]
        path = ".".join(location) or "body"
        formatted.setdefault(
            path,
            {"message": error.get("msg", "Invalid value"), "kind": error.get("type", "value_error"), "path": path},
        )
    return formatted


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError  → 400 (per-field errors in details.errors)
        ValidationError         → 400 Bad Request (context in details)
        UnauthorizedError       → 401
        ForbiddenError          → 403
        NotFoundError           → 500 (failed store lookup)
        DatabaseError           → 500 Internal Server Error (generic message)
        ClassHubError (base)    → 500 (catch-all for custom)
        Exception (fallback)    → 500 Internal Server Error (unexpected errors)

    Exception handlers never expose stack traces or SQL in the response;
    those are logged server-side.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(exc.errors())
        logger.warning("Request validation failed for %s: %s", request.url.path, ", ".join(errors))
        return error_response(
            400,
            ValidationError.error_code,
            "Request validation failed",
            details={"errors": errors},
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return error_response(400, exc.error_code, exc.message, details=exc.context)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        logger.warning("Unauthorized: %s", exc.message)
        return error_response(401, exc.error_code, exc.message)

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        logger.warning("Forbidden: %s", exc.message)
        return error_response(403, exc.error_code, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.error("Store lookup failed: %s", exc.message)
        details = {"resource": exc.resource}
        if exc.resource_id:
            details["id"] = exc.resource_id
        return error_response(500, exc.error_code, exc.message, details=details)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return error_response(
            500,
            exc.error_code,
            "An internal error occurred. Please try again later.",
        )

    @app.exception_handler(ClassHubError)
    async def handle_classhub_error(request: Request, exc: ClassHubError):
        logger.error("Unhandled application error: %s | Context: %s", exc.message, exc.context)
        return error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers into a FastAPI app."""
    app = FastAPI(
        title="ClassHub API",
        description=(
            "Classroom management backend: classrooms, teachers, students, "
            "quizzes and attendance, with teacher/student authorization per classroom."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → RateLimit → Logging → GZip → CORS → routes.
    # RequestID runs first so 429 responses and access log lines carry the id.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(classrooms.router)
    app.include_router(quizzes.router)
    app.include_router(attendances.router)
    app.include_router(people.teachers_router)
    app.include_router(people.students_router)
    app.include_router(health.router)

    return app


app = create_app()
