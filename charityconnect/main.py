from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from datetime import datetime, timezone
from typing import Optional
import time
import uuid
from charityconnect.core.config import Settings, settings as default_settings
from charityconnect.core.logging import logger
from charityconnect.core.exceptions import (
    AppError,
    app_error_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from charityconnect.api.api import api_router
from charityconnect.database.database import Database
from charityconnect.schemas.lookup import HealthResponse
from charityconnect.services.notifications import SmsNotifier
from charityconnect.services.payments import PaymentGateway

STARTED_AT = time.time()

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}


def _format_uptime(seconds: float) -> str:
    seconds = int(seconds)
    return f"{seconds // 60}m {seconds % 60}s"


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    payment_gateway: Optional[PaymentGateway] = None,
    notifier: Optional[SmsNotifier] = None,
) -> FastAPI:
    """Build the application with its store and collaborators."""
    settings = settings or default_settings

    app = FastAPI(
        title=settings.APP_NAME,
        description="Donation coordination API: donations, needy-person registry and analytics",
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
    )

    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)
    app.state.payment_gateway = payment_gateway or PaymentGateway.from_settings(settings)
    app.state.notifier = notifier or SmsNotifier.from_settings(settings)

    # Add exception handlers
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        request_id = str(uuid.uuid4())

        # Add request ID to request state
        request.state.request_id = request_id

        logger.info(
            f"Request: {request.method} {request.url.path}",
            extra={"request_id": request_id}
        )

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"Response: {response.status_code} - {process_time:.3f}s",
            extra={"request_id": request_id}
        )

        response.headers["X-Request-ID"] = request_id
        for header, value in SECURITY_HEADERS.items():
            response.headers[header] = value

        return response

    # Include API routes
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.on_event("startup")
    async def startup_event():
        """Initialize application on startup."""
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Using {app.state.database.kind} storage")

        try:
            app.state.database.create_all()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Database initialization failed: {e}")
            raise

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on application shutdown."""
        logger.info("Application shutting down")
        app.state.database.dispose()

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running",
            "environment": settings.ENVIRONMENT,
            "docs": "/docs" if settings.DEBUG else "disabled"
        }

    @app.get(f"{settings.API_PREFIX}/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint for monitoring."""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc),
            uptime=_format_uptime(time.time() - STARTED_AT),
            version=settings.APP_VERSION,
            environment=settings.ENVIRONMENT,
            storage=app.state.database.kind,
        )

    return app


app = create_app()
