"""
Database engine and session management using SQLModel.
"""

from typing import Generator

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from acquisitions.core.config import settings
from acquisitions.core.logging import get_logger

logger = get_logger(__name__)


def build_engine(database_uri: str) -> Engine:
    """Create an engine for SQLite (local/dev) or PostgreSQL."""
    if database_uri.startswith("sqlite"):
        return create_engine(
            database_uri,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},  # Routes run in a threadpool
        )
    # pool_pre_ping ensures connections are alive before using them
    return create_engine(
        database_uri,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


engine = build_engine(settings.SQLALCHEMY_DATABASE_URI)


def init_db(bind: Engine = engine) -> None:
    """Create the users table if it does not exist yet."""
    # Registers the table on SQLModel.metadata
    from acquisitions.models.user import User  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(bind)


def get_session() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session for FastAPI routes.
    Services commit their own writes and roll back on failure.

    Yields:
        Database session instance
    """
    with Session(engine) as session:
        yield session
