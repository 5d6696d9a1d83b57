"""SQLAlchemy implementation of Profile repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import GameAccess, GameType, UserProfile, UserRole
from domain.repositories.profile_repository import FieldChanges
from infrastructure.database.models import UserModel

_ACCESS_COLUMNS = {
    GameType.STRENGTH: "access_strength",
    GameType.MIND: "access_mind",
    GameType.CHANCE: "access_chance",
}

_PLAIN_FIELDS = frozenset(
    {
        "email",
        "name",
        "gitam_email",
        "mobile_number",
        "branch",
        "year",
        "registration_number",
        "role",
        "current_game",
        "game_selected_at",
        "last_active",
        "created_at",
        "updated_at",
    }
)


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> UserProfile | None:
        """Get a profile by user ID."""
        model = await self._session.get(UserModel, id, populate_existing=True)
        return self._to_entity(model) if model else None

    async def set(self, profile: UserProfile) -> UserProfile:
        """Create or fully overwrite a profile."""
        model = await self._session.get(UserModel, profile.id, populate_existing=True)
        if model is None:
            model = UserModel(id=profile.id)
            self._session.add(model)

        for column, value in self._to_columns(profile).items():
            setattr(model, column, value)

        await self._session.flush()
        return self._to_entity(model)

    async def update_fields(self, id: UUID, changes: FieldChanges) -> bool:
        """Apply a partial update without reading the row first."""
        stmt = (
            update(UserModel)
            .where(UserModel.id == id)
            .values(**self._changes_to_columns(changes))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def delete(self, id: UUID) -> bool:
        """Delete a profile."""
        stmt = delete(UserModel).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def batch_update(self, updates: list[tuple[UUID, FieldChanges]]) -> int:
        """Apply each update in the session's transaction; the caller commits."""
        applied = 0
        for user_id, changes in updates:
            if await self.update_fields(user_id, changes):
                applied += 1
        return applied

    async def list_all(self, user_id: UUID | None = None) -> list[UserProfile]:
        """Get every profile, or just one user's, ordered by creation time."""
        stmt = (
            select(UserModel)
            .order_by(UserModel.created_at, UserModel.id)
            .execution_options(populate_existing=True)
        )
        if user_id is not None:
            stmt = stmt.where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    @staticmethod
    def _changes_to_columns(changes: FieldChanges) -> dict[str, Any]:
        """Translate field paths into column assignments."""
        values: dict[str, Any] = {}
        for path, value in changes.items():
            if path.startswith("game_access."):
                game = GameType(path.split(".", 1)[1])
                values[_ACCESS_COLUMNS[game]] = bool(value)
            elif path == "game_access":
                access: GameAccess = value
                for game, column in _ACCESS_COLUMNS.items():
                    values[column] = access.allows(game)
            elif path in _PLAIN_FIELDS:
                if path in ("role", "current_game") and value is not None:
                    value = str(value)
                values[path] = value
            else:
                raise ValueError(f"Unknown profile field: {path}")
        return values

    @staticmethod
    def _to_columns(profile: UserProfile) -> dict[str, Any]:
        return {
            "email": profile.email,
            "name": profile.name,
            "gitam_email": profile.gitam_email,
            "mobile_number": profile.mobile_number,
            "branch": profile.branch,
            "year": profile.year,
            "registration_number": profile.registration_number,
            "role": profile.role.value,
            "access_strength": profile.game_access.strength,
            "access_mind": profile.game_access.mind,
            "access_chance": profile.game_access.chance,
            "current_game": profile.current_game.value if profile.current_game else None,
            "game_selected_at": profile.game_selected_at,
            "last_active": profile.last_active,
            "created_at": profile.created_at,
            "updated_at": profile.updated_at,
        }

    @staticmethod
    def _to_entity(model: UserModel) -> UserProfile:
        """Convert ORM model to domain entity."""
        return UserProfile(
            id=model.id,
            email=model.email,
            name=model.name,
            gitam_email=model.gitam_email,
            mobile_number=model.mobile_number,
            branch=model.branch,
            year=model.year,
            registration_number=model.registration_number,
            role=UserRole(model.role) if model.role else UserRole.USER,
            game_access=GameAccess(
                strength=model.access_strength,
                mind=model.access_mind,
                chance=model.access_chance,
            ),
            current_game=GameType(model.current_game) if model.current_game else None,
            game_selected_at=model.game_selected_at,
            last_active=model.last_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
