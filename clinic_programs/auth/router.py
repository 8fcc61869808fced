"""
Authentication routes: registration, login and current-user lookup.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, status
import logging

from .dependencies import get_auth_service, get_current_identity
from .schemas import (
    CurrentUserResponse,
    LoginResponse,
    RegisterResponse,
    TokenIdentity,
    UserLogin,
    UserRegister,
    UserResponse,
)
from .service import AuthService

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED, summary="Register User")
async def register_route(
    register_data: UserRegister,
    background_tasks: BackgroundTasks,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a doctor or admin account.

    A confirmation email is scheduled when mail is configured; a delivery
    failure never fails the registration.
    """
    user, email_queued = auth_service.register(register_data, background_tasks)
    return RegisterResponse(
        message="User Registered Successfully",
        user=UserResponse.model_validate(user),
        confirmation_email_queued=email_queued,
    )

@router.post("/login", response_model=LoginResponse, summary="User Login")
async def login_route(
    login_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Exchange email and password for a bearer token.
    """
    result = auth_service.login(login_data.email, login_data.password)
    return LoginResponse(**result)

@router.get("/me", response_model=CurrentUserResponse, summary="Get Current User Profile")
async def current_user_route(
    identity: TokenIdentity = Depends(get_current_identity),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Return the stored profile of the token's user.
    """
    user = auth_service.current_user(identity)
    return CurrentUserResponse(message="User fetched successfully", user=UserResponse.model_validate(user))
