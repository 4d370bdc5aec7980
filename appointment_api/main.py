from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import time

from .api.v1.auth import router as auth_router
from .api.graphql.schema import create_graphql_router
from .core.config import Settings, get_settings
from .core.database import (
    create_db_engine, create_redis_client, create_session_factory, init_db
)
from .core.exceptions import AppError, format_validation_error
from .core.logging import configure_logging


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with explicit settings, logger, database and Redis."""
    settings = settings or get_settings()
    logger = configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="User authentication and appointment scheduling over REST and GraphQL",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings
    app.state.logger = logger
    app.state.engine = create_db_engine(settings.get_database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.redis = create_redis_client(settings.REDIS_URL)

    # Middleware setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Only add TrustedHostMiddleware in production, not in testing
    if not settings.TESTING:
        app.add_middleware(
            TrustedHostMiddleware,
            allowed_hosts=["localhost", "127.0.0.1", "*.localhost", "testserver"]
        )

    # Custom middleware for request logging and timing
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response

    # Exception handlers
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.warning(f"{request.method} {request.url.path} failed: {exc.code}: {exc}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc)}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = format_validation_error(exc.errors())
        logger.warning(f"{request.method} {request.url.path} failed: InvalidInput: {message}")
        return JSONResponse(
            status_code=422,
            content={"error": message}
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "path": str(request.url.path)
            }
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Internal server error: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred"}
        )

    # Include routers
    app.include_router(auth_router)
    app.include_router(create_graphql_router(), prefix="/graphql")

    # Startup and shutdown events
    @app.on_event("startup")
    async def startup_event():
        """Initialize application on startup."""
        logger.info(f"Starting {settings.APP_NAME}...")

        db_url = settings.get_database_url
        db_type = "PostgreSQL" if "postgresql" in db_url else "SQLite" if "sqlite" in db_url else "Unknown"
        logger.info(f"Using {db_type} database")

        try:
            init_db(app.state.engine)
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {str(e)}")
            raise

        logger.info("Application startup complete")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on application shutdown."""
        logger.info(f"Shutting down {settings.APP_NAME}...")
        app.state.engine.dispose()

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
    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.VERSION,
            "endpoints": {
                "authentication": "/auth",
                "graphql": "/graphql",
                "docs": "/docs",
                "health": "/health"
            }
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "appointment_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().DEBUG,
        log_level="info"
    )
