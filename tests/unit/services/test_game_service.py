"""Unit tests for GameService."""

from uuid import UUID

import pytest

from core.exceptions import (
    AppException,
    GameAccessDeniedError,
    GameAlreadySelectedError,
    NoGameSelectedError,
    ProfileNotFoundError,
)
from domain.entities.profile import GameAccess, GameType, SelectionState
from domain.services.game_service import GameService
from tests.factories import make_profile
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> GameService:
    return GameService(lambda: uow)


# --- select_game ---


class TestSelectGame:
    @pytest.mark.asyncio
    async def test_locks_accessible_game(
        self, service: GameService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = make_profile(user_id, access=GameAccess(strength=True))

        result = await service.select_game(user_id, GameType.STRENGTH)

        assert result.current_game == GameType.STRENGTH
        assert result.game_selected_at is not None
        assert result.selection_state == SelectionState.LOCKED
        changes = uow.profiles.update_fields.call_args.args[1]
        assert changes["current_game"] == GameType.STRENGTH
        assert set(changes) == {"current_game", "game_selected_at", "last_active"}
        assert uow.committed

    @pytest.mark.asyncio
    async def test_rejects_game_without_access(
        self, service: GameService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = make_profile(user_id, access=GameAccess(strength=True))

        with pytest.raises(GameAccessDeniedError) as exc_info:
            await service.select_game(user_id, GameType.MIND)

        assert exc_info.value.status_code == 403
        uow.profiles.update_fields.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_rejects_second_selection(
        self, service: GameService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = make_profile(
            user_id,
            access=GameAccess.uniform(True),
            current_game=GameType.STRENGTH,
        )

        with pytest.raises(GameAlreadySelectedError) as exc_info:
            await service.select_game(user_id, GameType.CHANCE)

        assert exc_info.value.status_code == 409
        assert exc_info.value.details == {"current_game": "strength"}
        uow.profiles.update_fields.assert_not_called()

    @pytest.mark.asyncio
    async def test_reselecting_same_game_is_rejected(
        self, service: GameService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = make_profile(
            user_id,
            access=GameAccess(mind=True),
            current_game=GameType.MIND,
        )

        with pytest.raises(GameAlreadySelectedError):
            await service.select_game(user_id, GameType.MIND)

    @pytest.mark.asyncio
    async def test_locked_state_survives_revoked_access(
        self, service: GameService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = make_profile(
            user_id, access=GameAccess(), current_game=GameType.CHANCE
        )

        with pytest.raises(GameAlreadySelectedError):
            await service.select_game(user_id, GameType.CHANCE)

    @pytest.mark.asyncio
    async def test_requires_profile(
        self, service: GameService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.select_game(user_id, GameType.STRENGTH)

    @pytest.mark.asyncio
    async def test_lock_in_sequence(
        self, service: GameService, uow: FakeUnitOfWork, user_id: UUID
    ):
        profile = make_profile(user_id, access=GameAccess(strength=True))
        uow.profiles.get.return_value = profile

        with pytest.raises(GameAccessDeniedError):
            await service.select_game(user_id, GameType.MIND)
        assert profile.current_game is None

        await service.select_game(user_id, GameType.STRENGTH)
        assert profile.current_game == GameType.STRENGTH
        assert profile.game_selected_at is not None

        with pytest.raises(GameAlreadySelectedError):
            await service.select_game(user_id, GameType.CHANCE)
        assert profile.current_game == GameType.STRENGTH
        assert uow.profiles.update_fields.call_count == 1


# --- get_selection ---


class TestGetSelection:
    @pytest.mark.asyncio
    async def test_returns_locked_profile(
        self, service: GameService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = make_profile(user_id, current_game=GameType.MIND)

        result = await service.get_selection(user_id)

        assert result.current_game == GameType.MIND

    @pytest.mark.asyncio
    async def test_raises_when_nothing_locked(
        self, service: GameService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = make_profile(user_id)

        with pytest.raises(NoGameSelectedError) as exc_info:
            await service.get_selection(user_id)

        assert isinstance(exc_info.value, AppException)
        assert exc_info.value.status_code == 404
