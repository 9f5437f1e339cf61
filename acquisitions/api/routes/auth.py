"""
Authentication routes for sign-up, sign-in and sign-out.
Sessions are JWTs carried in an HTTP-only cookie.
"""

from fastapi import APIRouter, Request, Response, status

from acquisitions.api.deps import AuthServiceDep
from acquisitions.core.cookies import clear_session_cookie, read_session_cookie, set_session_cookie
from acquisitions.core.exceptions import InvalidTokenError
from acquisitions.core.logging import get_logger
from acquisitions.core.security import create_access_token, decode_access_token
from acquisitions.models.user import User
from acquisitions.schemas.token import TokenPayload
from acquisitions.schemas.user import (
    ErrorResponse,
    MessageResponse,
    UserCreate,
    UserLogin,
    UserMessageResponse,
    UserResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _start_session(response: Response, user: User) -> None:
    claims = TokenPayload(id=user.id, email=user.email, role=user.role)  # type: ignore[arg-type]
    set_session_cookie(response, create_access_token(claims.model_dump(mode="json")))


@router.post(
    "/sign-up",
    response_model=UserMessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def sign_up(user_in: UserCreate, response: Response, auth_service: AuthServiceDep) -> UserMessageResponse:
    """
    Register a new user and start a session.

    Raises:
        AlreadyExistsError: If email already registered
    """
    user = auth_service.create_user(user_in)
    _start_session(response, user)
    logger.info(f"User registered successfully: {user.email} (ID: {user.id})")

    return UserMessageResponse(
        message="User registered successfully",
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/sign-in",
    response_model=UserMessageResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def sign_in(credentials: UserLogin, response: Response, auth_service: AuthServiceDep) -> UserMessageResponse:
    """
    Verify credentials and start a session.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password is wrong
    """
    user = auth_service.sign_in(credentials.email, credentials.password)
    _start_session(response, user)

    return UserMessageResponse(
        message="Signed in successfully",
        user=UserResponse.model_validate(user),
    )


@router.post("/sign-out", response_model=MessageResponse)
def sign_out(request: Request, response: Response) -> MessageResponse:
    """End the session by clearing the cookie. Works without a valid session."""
    actor_id = None
    token = read_session_cookie(request)
    if token:
        try:
            actor_id = decode_access_token(token).id
        except InvalidTokenError:
            pass  # Stale cookies are cleared all the same

    clear_session_cookie(response)
    logger.info("User signed out", extra={"actor_id": actor_id})
    return MessageResponse(message="Signed out successfully")
