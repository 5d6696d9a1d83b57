"""Sign-in session hook."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser, get_admin_resolution
from api.v1.schemas.profile import ProfileResponse
from api.v1.schemas.session import NextStep, SessionResponse
from core.rate_limit import WRITE_LIMIT, limiter
from domain.entities.profile import UserProfile, UserRole
from domain.services.admin_resolution_service import AdminResolution

router = APIRouter(prefix="/session", tags=["session"])


def _next_step(is_admin: bool, profile: UserProfile | None) -> NextStep:
    if is_admin:
        return NextStep.ADMIN
    if profile is None:
        return NextStep.PROFILE_SETUP
    if profile.current_game is not None:
        return NextStep.CONFIRMATION
    return NextStep.GAMES


@router.post(
    "",
    response_model=SessionResponse,
    summary="Resolve the signed-in user's role",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def start_session(
    request: Request,
    user: CurrentUser,
    resolution: Annotated[AdminResolution, Depends(get_admin_resolution)],
) -> SessionResponse:
    """
    Call once after every sign-in with the identity provider.

    Allow-listed administrators get a profile provisioned (or upgraded) here
    without filling in the profile form. The response tells the client which
    screen to open next.
    """
    profile = resolution.profile
    return SessionResponse(
        user_id=str(user.id),
        email=user.email,
        role=UserRole.ADMIN if resolution.is_admin else UserRole.USER,
        is_admin=resolution.is_admin,
        has_profile=profile is not None,
        next_step=_next_step(resolution.is_admin, profile),
        profile=ProfileResponse.from_entity(profile) if profile else None,
    )
