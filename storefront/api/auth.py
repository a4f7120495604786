"""Authentication API endpoints.

Provides endpoints for registering users and logging in.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from storefront.api.dependencies import get_auth_service
from storefront.api.schemas import (
    AddressSchema,
    AuthResponse,
    CartEntrySchema,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    UserSchema,
)
from storefront.application.auth_service import AuthResult, AuthService
from storefront.domain.entities import User

router = APIRouter(prefix="/auth", tags=["Auth"])


# ============================================================================
# Converters
# ============================================================================


def user_to_schema(user: User) -> UserSchema:
    """Convert User entity to its public schema."""
    return UserSchema(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        role=user.role,
        phone=user.phone,
        address=[AddressSchema(**a.to_dict()) for a in user.addresses],
        cart=[CartEntrySchema(**c.to_dict()) for c in user.cart],
    )


def auth_to_response(result: AuthResult, message: str) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=result.token,
        user=user_to_schema(result.user),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
    summary="Register a user",
)
async def register(
    request_body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Register a new user and return an access token.

    Args:
        request_body: Registration details.
        service: Auth service.

    Returns:
        Token and the created user.
    """
    result = await service.register(
        first_name=request_body.first_name,
        last_name=request_body.last_name,
        email=request_body.email,
        password=request_body.password,
        phone=request_body.phone,
        address=request_body.address,
        role=request_body.role,
    )
    return auth_to_response(result, "User registered successfully")


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing credentials"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
    summary="Log in",
)
async def login(
    request_body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Exchange email and password for an access token."""
    result = await service.login(request_body.email, request_body.password)
    return auth_to_response(result, "Login successful")
