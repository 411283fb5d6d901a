"""User Management API - FastAPI Application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from usermgmt.api.error_handlers import register_error_handlers
from usermgmt.api.middleware import add_cors_middleware, logging_middleware
from usermgmt.auth import require_authorized
from usermgmt.config import settings
from usermgmt.database import engine, init_db
from usermgmt.logger import configure_logging, get_logger
from usermgmt.routers import health, users

# Initialize logging early
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - init DB on startup, release the pool on shutdown."""
    await init_db()
    logger.info("Application started", version=settings.app_version, environment=settings.environment)
    yield
    await engine.dispose()
    logger.info("Application shutting down")


app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    contact={
        "name": settings.contact_name,
        "email": settings.contact_email,
        "url": settings.contact_url,
    },
    license_info={"name": settings.license_name, "url": settings.license_url},
    openapi_url="/api-docs",
    docs_url="/swagger-ui",
    redoc_url="/redoc",
    lifespan=lifespan,
    # Applies the access policy to every API route; docs routes bypass dependencies
    dependencies=[Depends(require_authorized)],
)

app.middleware("http")(logging_middleware)
add_cors_middleware(app)
register_error_handlers(app)

app.include_router(health.router)
app.include_router(users.router)
