"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_profile_service
from api.v1.schemas.profile import (
    ProfileCompletion,
    ProfileDetailResponse,
    ProfileResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
    responses={404: {"description": "Profile not completed yet"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the signed-in user's profile document."""
    profile = await service.get(user.id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.put(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Complete my profile",
    responses={
        200: {"description": "Profile saved"},
        422: {"description": "A required field is missing or malformed"},
        503: {"description": "Profile store unavailable; nothing was written"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def complete_my_profile(
    request: Request,
    body: ProfileCompletion,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Save the profile form. Access flags and a locked game granted earlier are kept."""
    profile = await service.complete_profile(user.id, user.email, body.to_submission())
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.post(
    "/me/heartbeat",
    response_model=ProfileDetailResponse,
    summary="Mark me as active",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def heartbeat(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Refresh ``last_active``; drives the admin online/active indicators."""
    profile = await service.touch(user.id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))
