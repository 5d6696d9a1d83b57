"""Profile repository protocol."""

from typing import Any, Protocol
from uuid import UUID

from domain.entities.profile import UserProfile

# Partial updates are keyed by field path. Nested access flags use
# "game_access.<game>", every other key is a top-level UserProfile attribute.
FieldChanges = dict[str, Any]


class IProfileRepository(Protocol):
    """Repository interface for the ``users`` profile collection."""

    async def get(self, id: UUID) -> UserProfile | None:
        """Point read of one profile."""
        ...

    async def set(self, profile: UserProfile) -> UserProfile:
        """Write the full document, creating or overwriting it."""
        ...

    async def update_fields(self, id: UUID, changes: FieldChanges) -> bool:
        """Apply a partial update. Returns False if the profile does not exist."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a profile and return success status."""
        ...

    async def batch_update(self, updates: list[tuple[UUID, FieldChanges]]) -> int:
        """Apply several partial updates inside the current transaction."""
        ...

    async def list_all(self, user_id: UUID | None = None) -> list[UserProfile]:
        """One-shot query: the whole collection, or a single user's document."""
        ...
