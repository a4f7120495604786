"""User API endpoints."""

from fastapi import APIRouter, Request

from storefront.api.schemas import ErrorResponse, ProfileResponse, ProfileSchema

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/profile",
    response_model=ProfileResponse,
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
    summary="Current user",
)
async def get_profile(request: Request) -> ProfileResponse:
    """Return the identity carried by the caller's access token."""
    claims = request.state.user
    return ProfileResponse(
        message="This is a protected route",
        user=ProfileSchema(
            user_id=claims["sub"],
            email=claims["email"],
            role=claims["role"],
        ),
    )
