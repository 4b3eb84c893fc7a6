"""
Authentication Handler

Handles user registration and login endpoints.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ Utils  ↗

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Business logic belongs in the SERVICE layer, not here. Service errors
(DuplicateResourceError → 409, AuthenticationError → 401) are rendered by the
global exception handlers.
"""

from fastapi import APIRouter, Depends, status

from audio_vault.api.dependencies.services import get_auth_service
from audio_vault.shared.schemas.user import (
    AuthResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from audio_vault.shared.services.auth_service import AuthService


router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    user_data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.

    Creates a new user account and returns authentication token.

    Args:
        user_data: Registration data (email, password, optional username)
        auth_service: Injected AuthService instance

    Returns:
        AuthResponse with user data and JWT token

    Raises:
        409: If email or username already registered
    """
    user, access_token, expires_in = await auth_service.register_user(
        email=user_data.email,
        password=user_data.password,
        username=user_data.username,
    )

    return AuthResponse(
        token=access_token,
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate user and return JWT token.

    Raises:
        401: If credentials are invalid
    """
    user, access_token, expires_in = await auth_service.login_user(
        email=credentials.email,
        password=credentials.password,
    )

    return AuthResponse(
        token=access_token,
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    )
