"""
User service layer implementing business logic for user operations.
Separates business logic from API routes and database operations.
"""

from typing import Any, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from acquisitions.core.exceptions import AlreadyExistsError, NotFoundError
from acquisitions.core.logging import get_logger
from acquisitions.models.user import User, UserRole, utcnow

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("name", "email", "role")


class UserService:
    """Service class for user CRUD operations."""

    def __init__(self, session: Session):
        self.session = session

    def list_users(self) -> List[User]:
        """Return every user, oldest first."""
        users = list(self.session.exec(select(User).order_by(User.id)).all())
        logger.info(f"Fetched {len(users)} users")
        return users

    def get_by_id(self, user_id: int) -> User:
        """
        Retrieve a user by ID.

        Args:
            user_id: User ID to search for

        Returns:
            The matching user

        Raises:
            NotFoundError: If no user has this ID
        """
        user = self.session.get(User, user_id)
        if user is None:
            logger.info(f"User {user_id} not found")
            raise NotFoundError(user_id=user_id)
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Retrieve a user by email address.

        Args:
            email: Email address to search for (matched case-insensitively)

        Returns:
            User if found, None otherwise
        """
        statement = select(User).where(User.email == email.strip().lower())
        return self.session.exec(statement).first()

    def update(self, user_id: int, updates: Mapping[str, Any]) -> User:
        """
        Apply a partial update to a user.

        Only name, email and role are recognized; other keys and None values
        are ignored. When nothing recognized is supplied the current record
        is returned unchanged.

        Args:
            user_id: ID of the user to update
            updates: Field values to apply

        Returns:
            The updated user

        Raises:
            NotFoundError: If no user has this ID
            AlreadyExistsError: If the new email belongs to another user
        """
        user = self.get_by_id(user_id)

        changes = {
            field: value
            for field, value in updates.items()
            if field in UPDATABLE_FIELDS and value is not None
        }
        if not changes:
            logger.info(f"No changes supplied for user {user_id}")
            return user

        if "email" in changes:
            changes["email"] = changes["email"].strip().lower()
        if "role" in changes:
            changes["role"] = UserRole(changes["role"])

        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = utcnow()

        try:
            self.session.add(user)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning(f"Email conflict while updating user {user_id}")
            raise AlreadyExistsError(user_id=user_id) from e
        except Exception as e:
            logger.error(f"Failed to update user {user_id}: {e}")
            self.session.rollback()
            raise

        self.session.refresh(user)
        logger.info(f"Updated user {user_id}", extra={"fields": sorted(changes)})
        return user

    def delete(self, user_id: int) -> int:
        """
        Permanently delete a user.

        Returns:
            The deleted user's ID

        Raises:
            NotFoundError: If no user has this ID
        """
        user = self.get_by_id(user_id)

        try:
            self.session.delete(user)
            self.session.commit()
        except Exception as e:
            logger.error(f"Failed to delete user {user_id}: {e}")
            self.session.rollback()
            raise

        logger.info(f"Deleted user {user_id}")
        return user_id
