"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from brokerage import __version__
from brokerage.api.routers import (
    accounts_router,
    orders_router,
    portfolio_router,
    securities_router,
    users_router,
)
from brokerage.config.logging_config import setup_logging
from brokerage.config.settings import StorageBackend, get_settings
from brokerage.core.exceptions import AppError, NotFoundError, PersistenceError
from brokerage.repositories.sqlalchemy.database import init_db
from brokerage.repositories.sqlite import SqliteDatabase

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    settings = get_settings()
    if settings.storage_backend is StorageBackend.SQLITE:
        SqliteDatabase(settings.get_database_path()).init_schema()
    else:
        init_db()
    logger.info("Started %s with %s storage", settings.app_name, settings.storage_backend.value)
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Brokerage portfolio engine: orders, holdings and reporting",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(accounts_router)
app.include_router(users_router)
app.include_router(orders_router)
app.include_router(portfolio_router)
app.include_router(securities_router)


def status_for(exc: AppError) -> int:
    """HTTP status for an application error."""
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, PersistenceError):
        return 503
    return 400


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=status_for(exc),
        content={"error": exc.code, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies or query parameters."""
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"{location}: {first.get('msg', 'invalid request')}" if location else "Invalid request"
    return JSONResponse(status_code=422, content={"error": "VALIDATION_ERROR", "message": message})


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
