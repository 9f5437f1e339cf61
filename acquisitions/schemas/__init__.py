"""Pydantic schemas for request/response validation."""

from acquisitions.schemas.token import TokenPayload
from acquisitions.schemas.user import (
    ErrorResponse,
    MessageResponse,
    UserCreate,
    UserDeleteResponse,
    UserDetailResponse,
    UserListResponse,
    UserLogin,
    UserMessageResponse,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "TokenPayload",
    "UserCreate",
    "UserDeleteResponse",
    "UserDetailResponse",
    "UserListResponse",
    "UserLogin",
    "UserMessageResponse",
    "UserResponse",
    "UserUpdate",
]
