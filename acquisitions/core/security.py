"""
Security utilities for password hashing and JWT session tokens.

Passwords are hashed with ``pbkdf2_sha256`` (salted, round count from
settings) for stable cross-platform behavior in tests and local development.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

from jose import JWTError, jwt
from jose.exceptions import JOSEError
from passlib.context import CryptContext
from pydantic import ValidationError

from acquisitions.core.config import settings
from acquisitions.core.exceptions import HashingError, InvalidTokenError, TokenSigningError
from acquisitions.core.logging import get_logger
from acquisitions.schemas.token import TokenPayload

logger = get_logger(__name__)

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__default_rounds=settings.PASSWORD_HASH_ROUNDS,
)


def hash_password(password: str) -> str:
    """
    Hash a password using the configured scheme.

    Args:
        password: Plain text password

    Returns:
        Hashed password string

    Raises:
        HashingError: If the hashing backend fails
    """
    try:
        return pwd_context.hash(password)
    except (TypeError, ValueError) as e:
        logger.error(f"Error hashing password: {type(e).__name__}")
        raise HashingError() from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.
    The comparison is constant-time.

    Args:
        plain_password: The plain text password
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise (including unreadable hashes)
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("Stored password hash is not in a recognized format")
        return False


# Verified against when the email is unknown so both sign-in failures cost the same.
DUMMY_PASSWORD_HASH = hash_password("acquisitions-timing-dummy")


def create_access_token(claims: Mapping[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a signed JWT session token.

    Args:
        claims: Claims to encode (id, email, role)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string

    Raises:
        TokenSigningError: If the token cannot be signed
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = dict(claims)
    if "id" in to_encode:
        to_encode.setdefault("sub", str(to_encode["id"]))
    to_encode.update({"iat": now, "exp": now + expires_delta})

    try:
        return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    except (JOSEError, TypeError) as e:
        logger.error(f"Error signing JWT token: {e}")
        raise TokenSigningError() from e


def decode_access_token(token: str) -> TokenPayload:
    """
    Verify a session token and return its claims.

    Raises:
        InvalidTokenError: On a bad signature, an expired token or missing claims
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return TokenPayload.model_validate(payload)
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise InvalidTokenError() from e
    except ValidationError as e:
        logger.warning(f"JWT claims malformed: {e.error_count()} error(s)")
        raise InvalidTokenError() from e
