"""
Authentication service layer for business logic.

Covers registration, login, token authentication and role authorization.
Role checks always re-read the user from the store because the role claim
inside a token may be stale.
"""
import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from fastapi import BackgroundTasks
from jose import JWTError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from ..core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_access_token,
)
from ..exceptions import (
    AuthenticationException,
    ConflictException,
    ForbiddenException,
    InvalidTokenException,
)
from .models import User, UserRole
from .repository import UserRepository
from .schemas import TokenIdentity, UserRegister, UserSummary
from .utils import email_configured, notify_registration

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_ROLE = UserRole.DOCTOR


class AuthService:
    """Identity & Access operations over a user repository."""

    def __init__(self, users: UserRepository):
        self.users = users

    def register(
        self,
        data: UserRegister,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> Tuple[User, bool]:
        """
        Register a new user.

        Args:
            data: Validated registration payload
            background_tasks: FastAPI BackgroundTasks for the confirmation email

        Returns:
            Tuple of the created user and whether a confirmation email was queued

        Raises:
            ConflictException: If a user with this email already exists
        """
        logger.info(f"Registration attempt for email: {data.email}")

        if self.users.get_by_email(data.email):
            logger.warning(f"Registration failed: Email {data.email} already registered")
            raise ConflictException("A user with this email already exists.")

        user = User(
            email=data.email,
            full_name=data.full_name,
            password_hash=hash_password(data.password),
            role=data.role or DEFAULT_ROLE,
        )
        try:
            user = self.users.add(user)
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            raise ConflictException("A user with this email already exists.")
        logger.info(f"User account created: {user.id} ({user.role.value})")

        email_queued = False
        if background_tasks is not None and email_configured():
            background_tasks.add_task(notify_registration, user.email, user.full_name, user.role.value)
            email_queued = True
        elif background_tasks is not None:
            logger.info("Email not configured; skipping registration confirmation")

        return user, email_queued

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Authenticate a user and issue an access token.

        Args:
            email: User's email address
            password: User's password

        Returns:
            Dict with the token and a user summary

        Raises:
            AuthenticationException: If no user has this email or the password is wrong
        """
        user = self.users.get_by_email(email)
        if not user:
            logger.warning(f"Login failed: no user for {email}")
            raise AuthenticationException("User not found")

        if not verify_password(password, user.password_hash):
            logger.warning(f"Login failed: invalid password for {email}")
            raise AuthenticationException("Invalid Password")

        token = create_access_token({
            "id": user.id,
            "email": user.email,
            "role": user.role.value,
        })
        logger.info(f"Login successful: User {user.id} ({email})")

        return {
            "token": token,
            "user": UserSummary.model_validate(user),
        }

    def authenticate(self, token: Optional[str]) -> TokenIdentity:
        """
        Verify a bearer token and decode the identity it carries.

        Raises:
            AuthenticationException: If no token was supplied
            InvalidTokenException: If the token is malformed, forged or expired
        """
        if not token:
            raise AuthenticationException("Access denied")

        try:
            payload = decode_access_token(token)
            return TokenIdentity(
                id=payload["id"],
                email=payload["email"],
                role=payload["role"],
            )
        except (JWTError, KeyError, PydanticValidationError) as e:
            logger.warning(f"Rejected bearer token: {str(e)}")
            raise InvalidTokenException("Invalid token")

    def current_user(self, identity: TokenIdentity) -> User:
        """
        Load the stored user behind an authenticated identity.

        Raises:
            AuthenticationException: If the user no longer exists
        """
        user = self.users.get_by_id(identity.id)
        if not user:
            raise AuthenticationException("User no longer exists")
        return user

    def authorize_role(self, token: Optional[str], allowed_roles: Iterable[UserRole]) -> User:
        """
        Authenticate the token, then check the user's current stored role.

        Args:
            token: Bearer token
            allowed_roles: Roles permitted to continue

        Returns:
            User: The stored user

        Raises:
            AuthenticationException: If the token is missing or the user no longer exists
            InvalidTokenException: If the token is invalid
            ForbiddenException: If the stored role is not in ``allowed_roles``
        """
        identity = self.authenticate(token)
        allowed = list(allowed_roles)

        user = self.current_user(identity)
        if user.role not in allowed:
            logger.warning(
                f"User {user.id} with role {user.role.value} denied; "
                f"required one of {[role.value for role in allowed]}"
            )
            raise ForbiddenException(
                f"Forbidden: only {' or '.join(role.value for role in allowed)} users can perform this action"
            )
        return user
