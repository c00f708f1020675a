"""
SmartFlow time tracking service.
Builds the FastAPI application: logging, middleware, exception handlers and routers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from smartflow.application.dto.base_dto import ErrorResponseDTO, HealthCheckResponseDTO
from smartflow.config import settings
from smartflow.infrastructure.db.database import create_tables
from smartflow.infrastructure.web.middleware.error_handler import (
    BusinessException,
    ErrorHandlerMiddleware,
    business_exception_handler,
    request_validation_handler,
)
from smartflow.infrastructure.web.routers import (
    time_categories,
    time_entries,
    time_tracking,
    timesheets,
    time_reports,
)

logger = logging.getLogger(__name__)

# (router module, path segment, OpenAPI tag)
ROUTERS = (
    (time_categories, "time-categories", "Time Categories"),
    (time_entries, "time-entries", "Time Entries"),
    (time_tracking, "time-tracking", "Time Tracking"),
    (timesheets, "timesheets", "Timesheets"),
    (time_reports, "time-reports", "Time Reports"),
)


def configure_logging() -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    logger.info("Starting %s %s (%s)", settings.api_title, settings.api_version, settings.environment)
    create_tables()
    yield
    logger.info("%s stopped", settings.api_title)


async def route_not_found_handler(request: Request, exc) -> JSONResponse:
    body = ErrorResponseDTO(
        error="Not Found",
        message=f"The path {request.url.path} was not found",
        status_code=status.HTTP_404_NOT_FOUND,
        error_code="NOT_FOUND",
    )
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump(exclude_none=True))


def create_application() -> FastAPI:
    """Assemble the application; docs are only served in debug mode."""
    docs_prefix = settings.api_prefix if settings.debug else None
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{docs_prefix}/docs" if docs_prefix is not None else None,
        redoc_url=f"{docs_prefix}/redoc" if docs_prefix is not None else None,
        openapi_url=f"{docs_prefix}/openapi.json" if docs_prefix is not None else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(status.HTTP_404_NOT_FOUND, route_not_found_handler)

    for module, segment, tag in ROUTERS:
        app.include_router(module.router, prefix=f"{settings.api_prefix}/{segment}", tags=[tag])

    @app.get(f"{settings.api_prefix}/health", response_model=HealthCheckResponseDTO, tags=["Health"])
    async def health_check() -> HealthCheckResponseDTO:
        return HealthCheckResponseDTO(
            status="healthy",
            version=settings.api_version,
            environment=settings.environment,
        )

    return app


configure_logging()
app = create_application()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "smartflow.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
