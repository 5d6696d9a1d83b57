"""Dashboard statistics derived from the loaded profile set."""

from collections.abc import Iterable
from datetime import datetime, timedelta

from domain.entities.profile import GameStats, UserProfile, utcnow

# Two different recency windows: the aggregate "active users" counter is
# stricter than the per-user "online" badge in the access table.
ACTIVE_WINDOW = timedelta(minutes=5)
ONLINE_WINDOW = timedelta(minutes=10)


def _within(profile: UserProfile, window: timedelta, now: datetime) -> bool:
    if profile.last_active is None:
        return False
    return now - profile.last_active <= window


def is_online(profile: UserProfile, now: datetime | None = None) -> bool:
    """Per-user login status shown next to the access toggles."""
    return _within(profile, ONLINE_WINDOW, now or utcnow())


def compute_game_stats(
    profiles: Iterable[UserProfile], now: datetime | None = None
) -> GameStats:
    """Recompute totals from scratch; never persisted."""
    now = now or utcnow()
    stats = GameStats()
    for profile in profiles:
        stats.total_users += 1
        if _within(profile, ACTIVE_WINDOW, now):
            stats.active_users += 1
        if profile.current_game is not None:
            stats.game_distribution[profile.current_game] += 1
    return stats


def count_waiting_for_access(profiles: Iterable[UserProfile]) -> int:
    """Non-admin users with no access flag set."""
    return sum(1 for p in profiles if not p.is_admin and not p.game_access.any())


def count_with_access(profiles: Iterable[UserProfile]) -> int:
    return sum(1 for p in profiles if p.game_access.any())
