"""
API dependencies for FastAPI dependency injection.
Provides reusable dependencies for sessions, services and the request actor.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie
from sqlmodel import Session

from acquisitions.core.config import settings
from acquisitions.core.exceptions import UnauthenticatedError
from acquisitions.core.logging import get_logger
from acquisitions.core.security import decode_access_token
from acquisitions.db.session import get_session
from acquisitions.schemas.token import TokenPayload
from acquisitions.services.auth_service import AuthService
from acquisitions.services.user_service import UserService

logger = get_logger(__name__)

# Documents the session cookie in OpenAPI; missing cookies are handled below
session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)

SessionDep = Annotated[Session, Depends(get_session)]


def get_user_service(session: SessionDep) -> UserService:
    return UserService(session)


def get_auth_service(session: SessionDep) -> AuthService:
    return AuthService(session)


def get_current_actor(
    request: Request,
    token: Annotated[Optional[str], Depends(session_cookie)],
) -> TokenPayload:
    """
    Dependency to get the acting principal from the session cookie.

    Returns:
        Verified token claims

    Raises:
        UnauthenticatedError: If no session cookie is present
        InvalidTokenError: If the token is invalid or expired
    """
    if not token:
        logger.info("Request without session cookie")
        raise UnauthenticatedError()
    actor = decode_access_token(token)
    # Error handlers log failures with this id
    request.state.actor_id = actor.id
    return actor


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ActorDep = Annotated[TokenPayload, Depends(get_current_actor)]
