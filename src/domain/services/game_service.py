"""Game selection service."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    GameAccessDeniedError,
    GameAlreadySelectedError,
    NoGameSelectedError,
    ProfileNotFoundError,
)
from domain.entities.profile import GameType, UserProfile, utcnow
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class GameService:
    """Service layer for the one-shot game selection."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_overview(self, user_id: UUID) -> UserProfile:
        """Profile backing the games page (access flags + selection state)."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return profile

    async def select_game(self, user_id: UUID, game: GameType) -> UserProfile:
        """Lock in ``game`` for the user.

        Guarded by the access flag as read immediately before the write.
        The write itself is a plain partial update: two racing selections
        resolve as last-write-wins.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))

            if profile.current_game is not None:
                raise GameAlreadySelectedError(profile.current_game.value)

            if not profile.game_access.allows(game):
                raise GameAccessDeniedError(game.value)

            now = utcnow()
            await uow.profiles.update_fields(
                user_id,
                {
                    "current_game": game,
                    "game_selected_at": now,
                    "last_active": now,
                },
            )
            await uow.commit()

        profile.current_game = game
        profile.game_selected_at = now
        profile.last_active = now
        logger.info("game_selected", user_id=str(user_id), game=game.value)
        return profile

    async def get_selection(self, user_id: UUID) -> UserProfile:
        """Confirmation view: the profile with its locked game."""
        profile = await self.get_overview(user_id)
        if profile.current_game is None:
            raise NoGameSelectedError()
        return profile
