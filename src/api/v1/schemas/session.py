"""Pydantic schemas for the sign-in session hook."""

from enum import StrEnum

from pydantic import BaseModel

from api.v1.schemas.profile import ProfileResponse
from domain.entities.profile import UserRole


class NextStep(StrEnum):
    """Where the client should send the user after sign-in."""

    PROFILE_SETUP = "profile_setup"
    GAMES = "games"
    CONFIRMATION = "confirmation"
    ADMIN = "admin"


class SessionResponse(BaseModel):
    """Result of admin resolution for the signed-in identity."""

    user_id: str
    email: str
    role: UserRole
    is_admin: bool
    has_profile: bool
    next_step: NextStep
    profile: ProfileResponse | None = None
