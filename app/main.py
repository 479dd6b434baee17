"""FastAPI application factory and startup configuration.

Run locally with ``python -m app.main`` (or ``uvicorn app.main:app``); the
listen address comes from HOST / PORT. The database is checked and the
schema created during startup; if that fails the process does not start.
"""
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging import get_logger, set_trace_id, setup_logging
from app.database import engine, init_db
from app.api.deps import get_db
from app.api.properties import router as properties_router
from app.api.responses import fail, ok
from app.schemas.property_schema import REQUIRED_MESSAGES

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    setup_logging()
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)

    try:
        await init_db()
    except Exception:
        logger.critical("Database initialisation failed, aborting startup", exc_info=True)
        raise
    logger.info("Database ready")

    yield

    await engine.dispose()
    logger.info("Shutting down %s", settings.app_name)


def _trace_headers(request: Request) -> dict:
    trace_id = getattr(request.state, "trace_id", None)
    return {"X-Trace-Id": trace_id} if trace_id else {}


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Property Dashboard API — list, filter, create, edit and delete property records.",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def add_trace_id(request: Request, call_next):
        request.state.trace_id = set_trace_id()
        started = time.perf_counter()
        # Unhandled exceptions escape call_next and become a 500 further out
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers["X-Trace-Id"] = request.state.trace_id
            return response
        finally:
            logger.info(
                "%s %s", request.method, request.url.path,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": status,
                    "duration": round(time.perf_counter() - started, 4),
                },
            )

    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        trace_id = getattr(request.state, "trace_id", None)
        logger.exception("Unhandled exception [trace_id=%s]", trace_id, exc_info=exc)
        return fail(500, "Internal server error", _trace_headers(request))

    @application.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return fail(404, str(exc), _trace_headers(request))

    @application.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        logger.info("Rejected payload: %s", exc.message)
        return fail(400, str(exc), _trace_headers(request))

    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError.from_errors(exc.errors(), REQUIRED_MESSAGES)
        logger.info("Rejected request: %s", error.message)
        return fail(400, str(error), _trace_headers(request))

    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return fail(exc.status_code, message, _trace_headers(request))

    application.include_router(properties_router, prefix="/api/properties", tags=["properties"])

    @application.get("/", tags=["system"])
    async def root():
        return {
            "message": settings.app_name,
            "version": settings.app_version,
            "endpoints": {"properties": "/api/properties"},
        }

    @application.get("/health", tags=["system"])
    async def health_check(db: AsyncSession = Depends(get_db, scope="function")):
        db_status = "ok"
        try:
            await db.execute(text("SELECT 1"))
        except Exception as e:
            db_status = f"error: {str(e)}"

        return ok(
            {
                "status": "healthy" if db_status == "ok" else "unhealthy",
                "version": settings.app_version,
                "database": db_status,
            }
        ).model_dump(exclude_none=True)

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
