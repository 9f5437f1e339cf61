"""
User model with role-based access control.
Implements a simple admin/user role system.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class UserRole(str, Enum):
    """User role enumeration for RBAC."""

    ADMIN = "admin"
    USER = "user"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """
    User account.

    Attributes:
        id: Primary key
        name: Display name
        email: Unique email address (used for sign-in), stored lower-cased
        password: Password hash, never the plain text
        role: User role (admin or user)
        created_at: Timestamp of account creation
        updated_at: Timestamp of last update
    """

    __tablename__ = "users"  # type: ignore
    # Ids are never reused: session tokens identify the actor by id
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password: str = Field(max_length=255)
    role: UserRole = Field(default=UserRole.USER)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
