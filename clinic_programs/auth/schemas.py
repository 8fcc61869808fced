"""
User Schemas - Pydantic models for user data validation and serialization.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from .models import UserRole

class UserBase(BaseModel):
    """
    Base User Schema - Contains fields common to all user-related schemas

    Fields:
    - email: User's email address
    - full_name: User's full name
    """
    email: EmailStr
    full_name: str = Field(..., min_length=1)

class UserRegister(UserBase):
    """
    User Registration Schema - Used when registering a new user

    Extends UserBase with:
    - password: User's plain text password (will be hashed before storage)
    - role: DOCTOR or ADMIN, defaults to DOCTOR when omitted
    """
    password: str = Field(..., min_length=6)
    role: Optional[UserRole] = None

class UserLogin(BaseModel):
    """
    User Login Schema - Used for authentication

    Fields:
    - email: User's email address
    - password: User's plain text password
    """
    email: EmailStr
    password: str

class UserResponse(BaseModel):
    """
    User Response Schema - Used when returning user data

    The password hash is never part of the response.
    """
    id: str
    email: EmailStr
    full_name: str
    role: UserRole
    created_at: datetime

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class UserSummary(BaseModel):
    """User summary returned with a login token."""
    id: str
    email: EmailStr
    role: UserRole
    full_name: str

    class Config:
        from_attributes = True

class TokenIdentity(BaseModel):
    """
    Identity decoded from a bearer token.

    Fields:
    - id: User ID
    - email: User's email address
    - role: Role claim at issue time (may be stale)
    """
    id: str
    email: str
    role: UserRole

class RegisterResponse(BaseModel):
    """
    Registration Response Schema

    Fields:
    - message: Human readable outcome
    - user: Created user
    - confirmation_email_queued: Whether an onboarding email was scheduled
    """
    message: str
    user: UserResponse
    confirmation_email_queued: bool

class LoginResponse(BaseModel):
    """
    Login Response Schema - Returned after successful authentication

    Fields:
    - message: Human readable outcome
    - token: JWT access token (1 hour lifetime by default)
    - token_type: Type of token (always "bearer")
    - user: User summary
    """
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    user: UserSummary

class CurrentUserResponse(BaseModel):
    message: str
    user: UserResponse
