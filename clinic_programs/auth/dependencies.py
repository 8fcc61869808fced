"""
FastAPI dependencies for authentication and authorization.
"""
from typing import List, Optional
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from ..database import get_db
from .models import User, UserRole
from .repository import UserRepository
from .schemas import TokenIdentity
from .service import AuthService

# Bearer token scheme; missing tokens are reported by AuthService, not FastAPI
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Build the auth service for the current request."""
    return AuthService(UserRepository(db))

def get_current_identity(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenIdentity:
    """
    Authenticate the bearer token and attach the identity to the request.

    Returns:
        TokenIdentity: Decoded {id, email, role}
    """
    identity = auth_service.authenticate(token)
    request.state.identity = identity
    return identity

def require_roles(allowed_roles: List[UserRole]):
    """
    Dependency factory to require specific roles.

    The role is checked against the stored user, not the token claim.

    Args:
        allowed_roles: List of roles that are allowed access

    Returns:
        Function that returns the stored user when the role matches
    """
    def role_checker(
        request: Request,
        token: Optional[str] = Depends(oauth2_scheme),
        auth_service: AuthService = Depends(get_auth_service),
    ) -> User:
        user = auth_service.authorize_role(token, allowed_roles)
        request.state.identity = TokenIdentity(id=user.id, email=user.email, role=user.role)
        return user
    return role_checker

# Convenience dependencies for specific roles
require_doctor = require_roles([UserRole.DOCTOR])
require_doctor_or_admin = require_roles([UserRole.DOCTOR, UserRole.ADMIN])
