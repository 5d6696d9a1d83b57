"""Pydantic schemas for the admin console API."""

from datetime import datetime

from pydantic import BaseModel

from api.v1.schemas.profile import ProfileResponse
from domain.entities.profile import GameStats, GameType, UserProfile
from domain.services.stats import (
    compute_game_stats,
    count_waiting_for_access,
    count_with_access,
    is_online,
)


class AdminUserResponse(ProfileResponse):
    """Profile row in the admin tables, with login status."""

    is_online: bool

    @classmethod
    def from_entity_at(cls, profile: UserProfile, now: datetime) -> "AdminUserResponse":
        base = ProfileResponse.from_entity(profile)
        return cls(**base.model_dump(), is_online=is_online(profile, now))


class GameStatsResponse(BaseModel):
    """Aggregate dashboard numbers."""

    total_users: int
    active_users: int
    game_distribution: dict[GameType, int]

    @classmethod
    def from_entity(cls, stats: GameStats) -> "GameStatsResponse":
        return cls(
            total_users=stats.total_users,
            active_users=stats.active_users,
            game_distribution=dict(stats.game_distribution),
        )


class AdminUserListResponse(BaseModel):
    """Schema for list of users."""

    data: list[AdminUserResponse]
    users_with_access: int
    users_waiting_for_access: int

    @classmethod
    def build(cls, profiles: list[UserProfile], now: datetime) -> "AdminUserListResponse":
        return cls(
            data=[AdminUserResponse.from_entity_at(p, now) for p in profiles],
            users_with_access=count_with_access(profiles),
            users_waiting_for_access=count_waiting_for_access(profiles),
        )


class AdminUserDetailResponse(BaseModel):
    """Schema for single user."""

    data: AdminUserResponse


class BulkAccessResponse(BaseModel):
    """Result of grant-all / revoke-all."""

    enabled: bool
    affected: int


class AdminSnapshotMessage(BaseModel):
    """Live admin view pushed over the WebSocket on every change."""

    type: str = "snapshot"
    users: list[AdminUserResponse]
    users_with_access: int
    users_waiting_for_access: int
    stats: GameStatsResponse

    @classmethod
    def build(cls, profiles: list[UserProfile], now: datetime) -> "AdminSnapshotMessage":
        return cls(
            users=[AdminUserResponse.from_entity_at(p, now) for p in profiles],
            users_with_access=count_with_access(profiles),
            users_waiting_for_access=count_waiting_for_access(profiles),
            stats=GameStatsResponse.from_entity(compute_game_stats(profiles, now)),
        )
