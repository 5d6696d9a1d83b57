"""Admin console service: per-user and bulk mutations over all profiles."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from core.exceptions import AdminProfileProtectedError, UserNotFoundError
from domain.entities.profile import GameAccess, GameStats, GameType, UserProfile, utcnow
from domain.repositories.profile_repository import FieldChanges
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.export import export_profiles_csv
from domain.services.stats import compute_game_stats

logger = structlog.get_logger()


class AdminService:
    """Service layer for the admin dashboard.

    Admin profiles are never touched: bulk operations skip them and point
    operations against them raise AdminProfileProtectedError.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_users(self) -> list[UserProfile]:
        async with self._uow_factory() as uow:
            return await uow.profiles.list_all()

    async def get_stats(self, now: datetime | None = None) -> GameStats:
        return compute_game_stats(await self.list_users(), now)

    async def toggle_access(self, user_id: UUID, game: GameType) -> UserProfile:
        """Flip one access flag for one user."""
        async with self._uow_factory() as uow:
            profile = await self._require_mutable(uow, user_id)
            new_value = not profile.game_access.allows(game)
            now = utcnow()
            await uow.profiles.update_fields(
                user_id,
                {f"game_access.{game.value}": new_value, "updated_at": now},
            )
            await uow.commit()

        setattr(profile.game_access, game.value, new_value)
        profile.updated_at = now
        logger.info(
            "admin_access_toggled",
            user_id=str(user_id),
            game=game.value,
            enabled=new_value,
        )
        return profile

    async def reset_game(self, user_id: UUID) -> UserProfile:
        """Clear a locked selection; access flags are left alone."""
        async with self._uow_factory() as uow:
            profile = await self._require_mutable(uow, user_id)
            now = utcnow()
            await uow.profiles.update_fields(
                user_id, {"current_game": None, "updated_at": now}
            )
            await uow.commit()

        previous = profile.current_game
        profile.current_game = None
        profile.updated_at = now
        logger.info(
            "admin_game_reset",
            user_id=str(user_id),
            previous_game=previous.value if previous else None,
        )
        return profile

    async def reset_user(self, user_id: UUID) -> UserProfile:
        """Clear every access flag and the selection for one user."""
        async with self._uow_factory() as uow:
            profile = await self._require_mutable(uow, user_id)
            now = utcnow()
            await uow.profiles.update_fields(
                user_id,
                {
                    "game_access": GameAccess.uniform(False),
                    "current_game": None,
                    "updated_at": now,
                },
            )
            await uow.commit()

        profile.game_access = GameAccess.uniform(False)
        profile.current_game = None
        profile.updated_at = now
        logger.info("admin_user_reset", user_id=str(user_id))
        return profile

    async def delete_user(self, user_id: UUID) -> bool:
        """Permanently delete a user's profile document."""
        async with self._uow_factory() as uow:
            await self._require_mutable(uow, user_id)
            deleted = await uow.profiles.delete(user_id)
            await uow.commit()

        logger.info("admin_user_deleted", user_id=str(user_id))
        return deleted  # type: ignore[no-any-return]

    async def grant_all(self) -> int:
        return await self._set_all_access(True)

    async def revoke_all(self) -> int:
        return await self._set_all_access(False)

    async def export_csv(self) -> str:
        return export_profiles_csv(await self.list_users())

    async def _set_all_access(self, value: bool) -> int:
        """Uniform access for every non-admin user, committed as one batch."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.list_all()
            now = utcnow()
            updates: list[tuple[UUID, FieldChanges]] = [
                (
                    profile.id,
                    {"game_access": GameAccess.uniform(value), "updated_at": now},
                )
                for profile in profiles
                if not profile.is_admin
            ]
            if not updates:
                return 0
            applied = await uow.profiles.batch_update(updates)
            await uow.commit()

        logger.info(
            "admin_access_granted_all" if value else "admin_access_revoked_all",
            affected=applied,
        )
        return applied  # type: ignore[no-any-return]

    async def _require_mutable(self, uow: IUnitOfWork, user_id: UUID) -> UserProfile:
        profile = await uow.profiles.get(user_id)
        if not profile:
            raise UserNotFoundError(str(user_id))
        if profile.is_admin:
            raise AdminProfileProtectedError(str(user_id))
        return profile
