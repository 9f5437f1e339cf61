"""
Session cookie helpers.

The session token travels in a single HTTP-only cookie. It is marked
SameSite=Strict, and Secure everywhere except local development, with a
max-age equal to the token lifetime so cookie and token expire together.
"""

from typing import Optional

from fastapi import Request, Response

from acquisitions.core.config import settings


def set_session_cookie(response: Response, token: str) -> None:
    """Write the JWT session token onto the response."""
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_max_age,
        path="/",
        httponly=True,
        samesite="strict",
        secure=not settings.is_development,
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie immediately."""
    response.delete_cookie(
        settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="strict",
        secure=not settings.is_development,
    )


def read_session_cookie(request: Request) -> Optional[str]:
    """Return the session token carried by the request, if any."""
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None
