"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
import logging

from estate_api.config import Settings, get_settings
from estate_api.database import (
    build_engine,
    build_session_factory,
    get_db,
    test_database_connection,
    fetch_database_time,
    create_tables,
    close_db_connection
)
from estate_api.repositories.errors import StorageError, classify_storage_error
from estate_api.routers import (
    auth_router,
    favorites_router,
    properties_router,
    reviews_router,
    users_router,
    admin_router
)
from estate_api.services.auth import AuthService
from estate_api.services.error_handler import ErrorHandlerService
from estate_api.utils.exceptions import APIException, ServiceUnavailableError
from estate_api.middleware.validation import ValidationMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

settings = get_settings()


async def ensure_admin_account(session_factory: async_sessionmaker, settings: Settings) -> None:
    """
    Create the bootstrap admin once. Failures are logged and never stop startup.
    """
    try:
        async with session_factory() as session:
            await AuthService(session, settings).ensure_admin_user()
    except Exception as e:
        logger.error(f"Error creating admin user: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Builds the connection pool, prepares the schema and the admin account,
    and disposes the pool on shutdown.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    engine = build_engine(settings)
    session_factory = build_session_factory(engine)
    app.state.engine = engine
    app.state.session_factory = session_factory

    db_connected = await test_database_connection(session_factory)
    if db_connected:
        if settings.create_tables_on_startup:
            try:
                await create_tables(engine)
            except Exception as e:
                logger.error(f"Failed to create tables: {e}")
        await ensure_admin_account(session_factory, settings)
    else:
        # Keep serving; requests that need the database will fail individually
        logger.error("Failed to connect to database on startup")

    yield

    # Shutdown
    logger.info("Shutting down application")
    await close_db_connection(engine)


# Create FastAPI application instance
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    A real-estate listing API.

    ## Features

    * **Listings**: Admins create and delete properties; owners and admins edit them
    * **Favorites**: Users save properties to a personal list
    * **Reviews**: Users rate and review properties
    * **Authentication**: JWT bearer tokens with user and admin roles

    ## Authentication

    Use `/api/signup` or `/api/signin` to obtain a token, then send it in the
    Authorization header as `Bearer <token>`.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Signup and signin"},
        {"name": "Properties", "description": "Property listing management"},
        {"name": "Reviews", "description": "Property reviews"},
        {"name": "Favorites", "description": "Saved properties"},
        {"name": "Users", "description": "User profiles"},
        {"name": "Admin", "description": "Administration endpoints"},
        {"name": "Health", "description": "Service health endpoints"}
    ],
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

# Add request id, logging and size limit middleware
app.add_middleware(
    ValidationMiddleware,
    max_request_size=settings.max_request_size,
    enable_request_logging=not settings.is_testing
)

# Include API routers
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(properties_router, prefix=settings.api_prefix)
app.include_router(reviews_router, prefix=settings.api_prefix)
app.include_router(favorites_router, prefix=settings.api_prefix)
app.include_router(users_router, prefix=settings.api_prefix)
app.include_router(admin_router, prefix=settings.api_prefix)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle malformed JSON and request type errors."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    return ErrorHandlerService.handle_storage_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors raised outside the repositories."""
    return ErrorHandlerService.handle_storage_error(classify_storage_error(exc), request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle unknown routes and unsupported methods."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"], response_class=PlainTextResponse)
async def root():
    """Liveness check."""
    return "Real Estate API is running"


@app.get("/health/db", tags=["Health"])
async def database_health_check(db: AsyncSession = Depends(get_db)):
    """
    Database health check.
    Returns the database server's current time.
    """
    try:
        db_time = await fetch_database_time(db)
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        raise ServiceUnavailableError("Database connection failed")

    return {
        "status": "healthy",
        "database": "connected",
        "time": db_time
    }


def run() -> None:
    """Console entry point."""
    import uvicorn
    uvicorn.run(
        "estate_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )


if __name__ == "__main__":
    run()
