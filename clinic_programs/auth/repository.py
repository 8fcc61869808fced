"""
User repository - persistence access for the Identity & Access component.
"""
from typing import Optional

from ..core.repository import SqlRepository
from .models import User


class UserRepository(SqlRepository):
    """Repository for user lookups and creation."""

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def add(self, user: User) -> User:
        """
        Persist a new user.

        Raises:
            IntegrityError: If the email is already taken (after rollback)
        """
        self.db.add(user)
        return self._commit(user)
