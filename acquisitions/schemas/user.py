"""
User schemas for API request/response validation.
Separates internal models from API contracts using Pydantic.
"""

from datetime import datetime
from typing import Annotated, Any, List, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, StringConstraints, model_validator

from acquisitions.models.user import UserRole

EMAIL_MAX_LENGTH = 255


def _normalize_email(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _check_email_length(value: str) -> str:
    if len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
    return value


UserName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=255)]
UserEmail = Annotated[EmailStr, BeforeValidator(_normalize_email), AfterValidator(_check_email_length)]
UserPassword = Annotated[str, Field(min_length=6, max_length=128)]


class UserCreate(BaseModel):
    """Schema for sign-up."""

    name: UserName
    email: UserEmail
    password: UserPassword
    role: UserRole = UserRole.USER


class UserLogin(BaseModel):
    """Schema for sign-in."""

    email: UserEmail
    password: Annotated[str, Field(min_length=1)]


class UserUpdate(BaseModel):
    """
    Schema for partial user updates.
    All fields are optional, but at least one must be provided.
    """

    name: Optional[UserName] = None
    email: Optional[UserEmail] = None
    role: Optional[UserRole] = None

    @model_validator(mode="after")
    def require_one_field(self) -> "UserUpdate":
        if self.name is None and self.email is None and self.role is None:
            raise ValueError("At least one field must be provided to update")
        return self


class UserResponse(BaseModel):
    """
    Schema for user data in API responses.
    Excludes the password hash.
    """

    id: int
    name: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str


class UserMessageResponse(MessageResponse):
    """Sign-up, sign-in and update responses."""

    user: UserResponse


class UserListResponse(BaseModel):
    users: List[UserResponse]


class UserDetailResponse(BaseModel):
    user: UserResponse


class UserDeleteResponse(MessageResponse):
    user_id: int = Field(alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    details: Optional[List[str]] = None
