"""
Token schemas for JWT session authentication.
"""

from pydantic import BaseModel

from acquisitions.models.user import UserRole


class TokenPayload(BaseModel):
    """
    Decoded session token claims.

    The verified payload is also the request actor: authorization decisions
    are made from these claims without a database round trip.
    """

    id: int
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_act_on(self, user_id: int) -> bool:
        """Actors may manage their own account; admins may manage any."""
        return self.is_admin or self.id == user_id
