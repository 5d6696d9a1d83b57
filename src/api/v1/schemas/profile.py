"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.entities.profile import GameType, SelectionState, UserProfile, UserRole
from domain.services.profile_merge import ProfileSubmission


class GameAccessSchema(BaseModel):
    """Per-game access flags."""

    strength: bool = False
    mind: bool = False
    chance: bool = False


class ProfileCompletion(BaseModel):
    """Schema for the profile-completion form."""

    name: str = Field(..., min_length=1, max_length=255)
    gitam_email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    mobile_number: str = Field(..., pattern=r"^[0-9]{10}$")
    branch: str = Field(..., min_length=1, max_length=100)
    year: str = Field(..., pattern=r"^[1-4]$")
    registration_number: str = Field(..., min_length=1, max_length=50)

    @field_validator("name", "gitam_email", "branch", "registration_number", mode="before")
    @classmethod
    def strip_whitespace(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    def to_submission(self) -> ProfileSubmission:
        return ProfileSubmission(**self.model_dump())


class ProfileResponse(BaseModel):
    """Schema for a profile document."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "ravi@example.com",
                "name": "Ravi Teja",
                "gitam_email": "rteja@gitam.in",
                "mobile_number": "9876543210",
                "branch": "CSE",
                "year": "3",
                "registration_number": "VU21CSEN0100123",
                "role": "user",
                "game_access": {"strength": True, "mind": False, "chance": False},
                "current_game": None,
                "selection_state": "access_granted",
                "game_selected_at": None,
                "last_active": "2026-03-01T10:00:00",
                "created_at": "2026-03-01T09:00:00",
                "updated_at": "2026-03-01T10:00:00",
            }
        },
    )

    id: UUID
    email: str
    name: str
    gitam_email: str
    mobile_number: str
    branch: str
    year: str
    registration_number: str
    role: UserRole
    game_access: GameAccessSchema
    current_game: GameType | None = None
    selection_state: SelectionState
    game_selected_at: datetime | None = None
    last_active: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: UserProfile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            email=profile.email,
            name=profile.name,
            gitam_email=profile.gitam_email,
            mobile_number=profile.mobile_number,
            branch=profile.branch,
            year=profile.year,
            registration_number=profile.registration_number,
            role=profile.role,
            game_access=GameAccessSchema(**profile.game_access.as_dict()),
            current_game=profile.current_game,
            selection_state=profile.selection_state,
            game_selected_at=profile.game_selected_at,
            last_active=profile.last_active,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class ProfileSnapshotMessage(BaseModel):
    """Live view of the caller's own profile; ``profile`` is None until completed."""

    type: str = "snapshot"
    profile: ProfileResponse | None = None
