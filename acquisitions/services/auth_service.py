"""
Authentication service: account creation and credential checks.
"""

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from acquisitions.core.exceptions import AlreadyExistsError, InvalidCredentialsError
from acquisitions.core.logging import get_logger
from acquisitions.core.security import DUMMY_PASSWORD_HASH, hash_password, verify_password
from acquisitions.models.user import User
from acquisitions.schemas.user import UserCreate
from acquisitions.services.user_service import UserService

logger = get_logger(__name__)


class AuthService:
    """Creates accounts and verifies sign-in credentials."""

    def __init__(self, session: Session):
        self.session = session
        self.users = UserService(session)

    def create_user(self, user_in: UserCreate) -> User:
        """
        Create a new user with a hashed password.

        Args:
            user_in: Validated sign-up data

        Returns:
            Created user instance

        Raises:
            AlreadyExistsError: If the email is already registered
        """
        if self.users.get_by_email(user_in.email) is not None:
            logger.warning(f"Sign-up attempt with existing email: {user_in.email}")
            raise AlreadyExistsError(email=user_in.email)

        db_user = User(
            name=user_in.name,
            email=user_in.email,
            password=hash_password(user_in.password),
            role=user_in.role,
        )

        try:
            self.session.add(db_user)
            self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent sign-up for the same email
            self.session.rollback()
            logger.warning(f"Sign-up attempt with existing email: {user_in.email}")
            raise AlreadyExistsError(email=user_in.email) from e
        except Exception as e:
            logger.error(f"Failed to create user {user_in.email}: {e}")
            self.session.rollback()
            raise

        self.session.refresh(db_user)
        logger.info(f"User created: {db_user.email} (ID: {db_user.id})")
        return db_user

    def sign_in(self, email: str, password: str) -> User:
        """
        Authenticate a user by email and password.

        An unknown email and a wrong password raise the same error, and both
        paths run one hash verification.

        Raises:
            InvalidCredentialsError: If the credentials do not match a user
        """
        user = self.users.get_by_email(email)
        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.warning(f"Failed sign-in attempt for email: {email}")
            raise InvalidCredentialsError()

        if not verify_password(password, user.password):
            logger.warning(f"Failed sign-in attempt for email: {email}")
            raise InvalidCredentialsError()

        logger.info(f"User signed in: {user.email} (ID: {user.id})")
        return user
