"""
User management routes.
Every route requires a session; update and delete are limited to the
account owner or an admin, and only admins may change roles.
"""

from typing import Annotated

from fastapi import APIRouter, Path

from acquisitions.api.deps import ActorDep, UserServiceDep
from acquisitions.core.exceptions import ForbiddenError
from acquisitions.core.logging import get_logger
from acquisitions.schemas.user import (
    ErrorResponse,
    UserDeleteResponse,
    UserDetailResponse,
    UserListResponse,
    UserMessageResponse,
    UserResponse,
    UserUpdate,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={401: {"model": ErrorResponse}},
)

UserId = Annotated[int, Path(gt=0, description="User ID")]


@router.get("", response_model=UserListResponse)
def list_users(actor: ActorDep, user_service: UserServiceDep) -> UserListResponse:
    """List all users."""
    users = user_service.list_users()
    logger.info("Fetched all users", extra={"count": len(users), "actor_id": actor.id})
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.get(
    "/{user_id}",
    response_model=UserDetailResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_user(user_id: UserId, actor: ActorDep, user_service: UserServiceDep) -> UserDetailResponse:
    """Fetch one user by ID."""
    user = user_service.get_by_id(user_id)
    logger.info("User fetched by id", extra={"user_id": user_id, "actor_id": actor.id})
    return UserDetailResponse(user=UserResponse.model_validate(user))


@router.patch(
    "/{user_id}",
    response_model=UserMessageResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
def update_user(
    user_id: UserId,
    user_in: UserUpdate,
    actor: ActorDep,
    user_service: UserServiceDep,
) -> UserMessageResponse:
    """
    Update a user's name, email or role.

    Raises:
        ForbiddenError: If the actor is neither the user nor an admin,
            or a non-admin tries to change a role
        NotFoundError: If the user does not exist
    """
    if not actor.can_act_on(user_id):
        raise ForbiddenError(
            "You are not allowed to update this user", actor_id=actor.id, user_id=user_id
        )
    if user_in.role is not None and not actor.is_admin:
        raise ForbiddenError(
            "Only admin users can change user roles", actor_id=actor.id, user_id=user_id
        )

    updates = user_in.model_dump(exclude_none=True)
    user = user_service.update(user_id, updates)
    logger.info(
        "User updated",
        extra={"user_id": user_id, "actor_id": actor.id, "fields": sorted(updates)},
    )

    return UserMessageResponse(
        message="User updated successfully",
        user=UserResponse.model_validate(user),
    )


@router.delete(
    "/{user_id}",
    response_model=UserDeleteResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
def delete_user(user_id: UserId, actor: ActorDep, user_service: UserServiceDep) -> UserDeleteResponse:
    """
    Permanently delete a user.

    Raises:
        ForbiddenError: If the actor is neither the user nor an admin
        NotFoundError: If the user does not exist
    """
    if not actor.can_act_on(user_id):
        raise ForbiddenError(
            "You are not allowed to delete this user", actor_id=actor.id, user_id=user_id
        )

    deleted_id = user_service.delete(user_id)
    logger.info("User deleted", extra={"user_id": deleted_id, "actor_id": actor.id})

    return UserDeleteResponse(message="User deleted successfully", user_id=deleted_id)
