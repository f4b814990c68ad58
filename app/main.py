"""Complaint statistics: FastAPI application factory."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.adapters.persistence.database import analytics_engine, engine
from app.application.use_cases.triage_record import RecordNotFoundError
from app.config import settings
from app.infrastructure.api.envelope import failure
from app.infrastructure.api.routes_complaints import categories_router
from app.infrastructure.api.routes_complaints import router as complaints_router
from app.infrastructure.api.routes_health import router as health_router
from app.infrastructure.api.routes_statistics import router as statistics_router
from app.infrastructure.api.routes_templates import router as templates_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    for name, db_engine in (("operational", engine), ("analytics", analytics_engine)):
        try:
            async with db_engine.begin():
                pass  # Connection pool warmed up
            logger.info("Database connection established (%s)", name)
        except Exception as e:
            logger.warning("Database not available on startup (%s): %s", name, e)
    yield
    await engine.dispose()
    await analytics_engine.dispose()


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error in the ``{success: false, message}`` envelope."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return failure(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return failure(422, message)

    @app.exception_handler(RecordNotFoundError)
    async def not_found(request: Request, exc: RecordNotFoundError):
        return failure(404, str(exc))

    @app.exception_handler(ValueError)
    async def bad_value(request: Request, exc: ValueError):
        return failure(400, str(exc))

    @app.exception_handler(OperationalError)
    async def database_unavailable(request: Request, exc: OperationalError):
        logger.error("Database unavailable on %s %s: %s", request.method, request.url.path, exc)
        return failure(503, "Database unavailable")

    @app.exception_handler(OSError)
    async def connection_error(request: Request, exc: OSError):
        logger.error("Connection error on %s %s: %s", request.method, request.url.path, exc)
        return failure(503, "Database unavailable")

    @app.exception_handler(SQLAlchemyError)
    async def database_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return failure(500, "Database error")


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Complaint statistics",
        description="Complaint and inspection triage, statistics and export",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(complaints_router, prefix="/api")
    app.include_router(categories_router, prefix="/api")
    app.include_router(templates_router, prefix="/api")
    app.include_router(statistics_router, prefix="/api")

    return app


app = create_app()
