"""
Main FastAPI application entry point.
Configures the application, middleware, and routes.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlmodel import Session

from acquisitions.api.errors import register_exception_handlers
from acquisitions.api.routes import auth, health, users
from acquisitions.core.config import settings
from acquisitions.core.exceptions import AlreadyExistsError
from acquisitions.core.logging import get_logger, setup_logging
from acquisitions.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from acquisitions.db.session import engine, init_db
from acquisitions.models.user import UserRole
from acquisitions.schemas.user import UserCreate
from acquisitions.services.auth_service import AuthService

setup_logging()
logger = get_logger(__name__)


def bootstrap_admin(session: Session) -> None:
    """Create the first admin account unless that email is already registered."""
    auth_service = AuthService(session)
    if auth_service.users.get_by_email(settings.FIRST_SUPERUSER_EMAIL) is not None:
        return

    logger.info("Creating first admin user...")
    admin_in = UserCreate(
        name=settings.FIRST_SUPERUSER_NAME,
        email=settings.FIRST_SUPERUSER_EMAIL,
        password=settings.FIRST_SUPERUSER_PASSWORD,
        role=UserRole.ADMIN,
    )
    try:
        auth_service.create_user(admin_in)
    except AlreadyExistsError:
        # Another worker created it first
        return
    logger.info(f"Admin user created: {admin_in.email}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.
    Runs startup and shutdown logic.
    """
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION} ({settings.ENVIRONMENT})")

    init_db()

    if not settings.DISABLE_BOOTSTRAP_USERS:
        with Session(engine) as session:
            bootstrap_admin(session)
    else:
        logger.info("User bootstrapping disabled (DISABLE_BOOTSTRAP_USERS=true)")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Added last so it runs first and logs every request
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["content-type", "accept"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(health.router)
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(users.router, prefix=settings.API_PREFIX)


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
def root() -> str:
    logger.info(f"Hello from {settings.PROJECT_NAME}")
    return "Hello World!"


@app.get(settings.API_PREFIX)
def api_root() -> dict:
    """API root endpoint."""
    return {"message": "Welcome to the Acquisitions API"}
