"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from swimclub.core.config import get_settings
from swimclub.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from swimclub.domain.exceptions import (
    AccountExistsError,
    DispatchFailureError,
    InvalidInvitationError,
    InvalidInvitationStateError,
    InvitationError,
    InvitationExpiredError,
    InvitationNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from swimclub.infrastructure.persistence.database import (
    close_database,
    init_database,
)

logger = get_logger(__name__)

# Most specific class first; the first isinstance match wins
ERROR_STATUS_CODES: list[tuple[type[InvitationError], int]] = [
    (UnauthorizedError, 403),
    (ValidationError, 400),
    (InvitationNotFoundError, 404),
    (InvalidInvitationError, 404),
    (InvalidInvitationStateError, 409),
    (AccountExistsError, 409),
    (InvitationExpiredError, 410),
    (DispatchFailureError, 502),
]


def status_code_for(exc: InvitationError) -> int:
    """Map a domain error to its HTTP status code."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings = get_settings()

    # Startup
    configure_logging(settings)
    logger.info(
        "Starting SwimClub",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    # Shutdown
    logger.info("Shutting down SwimClub")
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Invitation and registration service for a swim club",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint.

        Returns 200 if the service is running. Does not check
        database connectivity.
        """
        return {
            "status": "healthy",
            "service": "SwimClub",
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness check including database connectivity."""
        from swimclub.infrastructure.persistence.database import get_db_manager

        if await get_db_manager().check_connection():
            return {
                "status": "ready",
                "service": "SwimClub",
                "version": get_settings().app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": "SwimClub",
                "database": "disconnected",
            },
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from swimclub.infrastructure.api.routes import (
        auth_router,
        invitations_router,
        registration_router,
    )

    settings = get_settings()

    app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])
    app.include_router(
        invitations_router, prefix=f"{settings.api_prefix}/invitations", tags=["invitations"]
    )
    app.include_router(
        registration_router, prefix=f"{settings.api_prefix}/register", tags=["registration"]
    )

    @app.get(settings.api_prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_version": "v1",
        }


def register_exception_handlers(app: FastAPI) -> None:
    """Register domain and global exception handlers.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(InvitationError)
    async def invitation_error_handler(request: Request, exc: InvitationError):
        """Translate domain errors into JSON error responses."""
        status_code = status_code_for(exc)
        logger.info(
            "Request rejected",
            path=str(request.url.path),
            method=request.method,
            status_code=status_code,
            error=exc.label,
            message=exc.message,
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.label, "message": exc.message},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(exc) if get_settings().debug else "An unexpected error occurred",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and bind a correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID") or new_correlation_id()
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
