"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (metadata, lifespan, middleware, routers)
  - Initialize / close the PostgreSQL pool when the postgres backend is active
  - Register the RFC 7807 exception handlers
  - Expose the health check endpoint

Collaborators:
  - RequestContextMiddleware: request id and logging context
  - interfaces.api.http.router: auth + tasks endpoints
  - api.exception_handlers: error normalization
  - container: repositories (health check)

Notes:
  - Settings are validated in the lifespan, not at import time
  - /healthz follows the Kubernetes health check convention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from ..container import get_task_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes the pool."""
    settings = get_settings()
    uses_postgres = settings.storage_backend == "postgres"

    # R: The pool must exist before any Postgres repository is used.
    if uses_postgres:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    try:
        logger.info(
            "TaskVault API starting up",
            extra={
                "app_env": settings.app_env,
                "storage_backend": settings.storage_backend,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )
        yield
    finally:
        if uses_postgres:
            close_pool()
        logger.info("TaskVault API shutting down")


def create_app() -> FastAPI:
    """Build a fresh application instance (tests get an isolated app)."""
    fastapi_app = FastAPI(
        title="TaskVault API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Registration and login (JWT)"},
            {"name": "tasks", "description": "Owner-scoped tasks (Bearer token)"},
        ],
    )

    # R: Request context first so every log line carries the request id.
    fastapi_app.add_middleware(RequestContextMiddleware)

    fastapi_app.include_router(router)
    register_exception_handlers(fastapi_app)

    fastapi_app.add_api_route("/healthz", healthz, methods=["GET"], tags=["health"])

    return fastapi_app


def healthz(request: Request):
    """
    R: Health check that verifies the storage backend.

    Returns:
        ok: True if storage is reachable
        db: "connected" or "disconnected"
        request_id: Correlation ID for this request
    """
    db_status = "disconnected"
    try:
        if get_task_repository().ping():
            db_status = "connected"
    except Exception as e:
        logger.warning("Health check: DB unavailable", extra={"error": str(e)})

    return {
        "ok": db_status == "connected",
        "db": db_status,
        "request_id": getattr(request.state, "request_id", None),
    }


app = create_app()
