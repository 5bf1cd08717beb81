from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
import time
import logging

from .api.v1.bookings import router as bookings_router
from .api.v1.doctors import router as doctors_router
from .api.v1.services import router as services_router
from .api.v1.users import router as users_router
from .core.config import settings as default_settings, Settings
from .core.database import Database
from .services.catalog_service import CatalogService

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build an application bound to its own settings and database."""
    settings = settings or default_settings

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="Appointment booking backend for a doctors portal",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings
    app.state.database = Database.from_settings(settings)

    # Middleware setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.ALLOWED_HOSTS != ["*"]:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

    # Custom middleware for request logging and timing
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        # Log request
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response

    # Exception handlers
    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "message": getattr(exc, "detail", None) or "The requested resource was not found",
                "path": str(request.url.path)
            }
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {str(exc)}")
        return JSONResponse(
            status_code=503,
            content={
                "error": "Service Unavailable",
                "message": "The data store is unavailable"
            }
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Internal server error: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred"
            }
        )

    # Include routers
    app.include_router(users_router)
    app.include_router(doctors_router)
    app.include_router(bookings_router)
    app.include_router(services_router)

    # Startup and shutdown events
    @app.on_event("startup")
    async def startup_event():
        """Initialize application on startup."""
        logger.info(f"Starting {settings.APP_NAME}...")

        database = app.state.database
        logger.info(f"Using {database.backend_name} database")

        try:
            database.init_db()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {str(e)}")
            raise

        if settings.SEED_DEFAULT_SERVICES:
            db = database.session()
            try:
                CatalogService(db).seed_defaults()
            finally:
                db.close()

        if not settings.email_enabled:
            logger.warning("EMAIL_SENDER / EMAIL_SENDER_KEY not set, appointment emails are disabled")

        logger.info("Application startup complete")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on application shutdown."""
        logger.info(f"Shutting down {settings.APP_NAME}...")
        app.state.database.dispose()

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": settings.VERSION
        }

    # Root endpoint
    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness text."""
        return f"{settings.APP_NAME} is running"

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "doctors_portal.main:app",
        host="0.0.0.0",
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
        log_level="info"
    )
