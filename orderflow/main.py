"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from orderflow.config import configure_logging, get_settings
from orderflow.database import dispose_engine, initialize_database
from orderflow.domain.common.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    InvariantViolationError,
)
from orderflow.exceptions import OrderflowError
from orderflow.infrastructure.ordering.routers import orders

settings = get_settings()
configure_logging(settings.ENVIRONMENT)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize the database on startup and release it on shutdown."""
    logger.info("starting_application", environment=settings.ENVIRONMENT)
    initialize_database(settings)

    yield

    dispose_engine()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OrderflowError)
async def orderflow_error_handler(request: Request, exc: OrderflowError) -> JSONResponse:
    """Translate application errors into their own status codes."""
    logger.info(
        "application_error",
        path=request.url.path,
        status_code=exc.status_code,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def _domain_error_status(exc: DomainError) -> int:
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (BusinessRuleViolationError, InvariantViolationError)):
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate domain errors into client-facing responses."""
    status_code = _domain_error_status(exc)
    logger.info(
        "domain_error",
        path=request.url.path,
        status_code=status_code,
        error=exc.message,
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "context": exc.context},
    )


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok", "version": settings.VERSION}


app.include_router(orders.router, prefix=settings.API_V1_PREFIX)
