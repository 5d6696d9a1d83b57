"""User profile domain entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from uuid import UUID


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the store persists."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class GameType(StrEnum):
    """The three game categories a user can lock in."""

    STRENGTH = "strength"
    MIND = "mind"
    CHANCE = "chance"


class UserRole(StrEnum):
    """Profile role. Only an administrative process may change it."""

    USER = "user"
    ADMIN = "admin"


class SelectionState(StrEnum):
    """Where a user stands in the selection flow.

    NO_ACCESS -> ACCESS_GRANTED is driven by admin access flags and can move
    either way at any time. ACCESS_GRANTED -> LOCKED happens once, on the
    user's own selection; only an admin reset moves LOCKED back.
    """

    NO_ACCESS = "no_access"
    ACCESS_GRANTED = "access_granted"
    LOCKED = "locked"


@dataclass
class GameAccess:
    """Per-game permission flags."""

    strength: bool = False
    mind: bool = False
    chance: bool = False

    @classmethod
    def uniform(cls, value: bool) -> "GameAccess":
        return cls(strength=value, mind=value, chance=value)

    def allows(self, game: GameType) -> bool:
        return bool(getattr(self, game.value))

    def any(self) -> bool:
        return self.strength or self.mind or self.chance

    def as_dict(self) -> dict[str, bool]:
        return {game.value: self.allows(game) for game in GameType}


@dataclass
class UserProfile:
    """One profile document per identity-provider user."""

    id: UUID
    email: str = ""
    name: str = ""
    gitam_email: str = ""
    mobile_number: str = ""
    branch: str = ""
    year: str = ""
    registration_number: str = ""
    role: UserRole = UserRole.USER
    game_access: GameAccess = field(default_factory=GameAccess)
    current_game: GameType | None = None
    game_selected_at: datetime | None = None
    last_active: datetime | None = field(default_factory=utcnow)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def selection_state(self) -> SelectionState:
        # Locked wins: access may be revoked after selection without clearing it
        if self.current_game is not None:
            return SelectionState.LOCKED
        if self.game_access.any():
            return SelectionState.ACCESS_GRANTED
        return SelectionState.NO_ACCESS


@dataclass
class GameStats:
    """Aggregate dashboard numbers, recomputed from the full profile set."""

    total_users: int = 0
    active_users: int = 0
    game_distribution: dict[GameType, int] = field(
        default_factory=lambda: {game: 0 for game in GameType}
    )
