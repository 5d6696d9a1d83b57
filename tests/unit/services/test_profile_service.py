"""Unit tests for ProfileService."""

from uuid import UUID

import pytest

from core.exceptions import ProfileNotFoundError, ProfileStoreError
from domain.entities.profile import GameAccess, GameType, UserRole
from domain.services.admin_resolution_service import AdminResolutionService
from domain.services.profile_merge import ProfileSubmission
from domain.services.profile_service import ProfileService
from tests.factories import make_profile
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ProfileService:
    resolver = AdminResolutionService(lambda: uow, ["tgantasa@gitam.in"])
    return ProfileService(lambda: uow, resolver)


@pytest.fixture
def submission() -> ProfileSubmission:
    return ProfileSubmission(
        name="Ravi Teja",
        gitam_email="rteja@gitam.in",
        mobile_number="9876543210",
        branch="CSE",
        year="3",
        registration_number="VU21CSEN0100123",
    )


@pytest.fixture(autouse=True)
def _echo_set(uow: FakeUnitOfWork) -> None:
    async def set_profile(profile):
        return profile

    uow.profiles.set.side_effect = set_profile


# --- get ---


class TestGet:
    @pytest.mark.asyncio
    async def test_returns_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = make_profile(user_id)

        result = await service.get(user_id)

        assert result.id == user_id

    @pytest.mark.asyncio
    async def test_raises_when_missing(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.get(user_id)


# --- complete_profile ---


class TestCompleteProfile:
    @pytest.mark.asyncio
    async def test_creates_profile_with_no_access(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        submission: ProfileSubmission,
    ):
        uow.profiles.get.return_value = None

        result = await service.complete_profile(user_id, "ravi@example.com", submission)

        assert result.email == "ravi@example.com"
        assert result.gitam_email == "rteja@gitam.in"
        assert result.role == UserRole.USER
        assert result.game_access == GameAccess()
        assert result.current_game is None
        assert uow.committed

    @pytest.mark.asyncio
    async def test_keeps_admin_granted_fields(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        submission: ProfileSubmission,
    ):
        existing = make_profile(
            user_id,
            name="Old Name",
            access=GameAccess(strength=True),
            current_game=GameType.STRENGTH,
        )
        uow.profiles.get.return_value = existing

        result = await service.complete_profile(user_id, "ravi@example.com", submission)

        assert result.name == "Ravi Teja"
        assert result.game_access == GameAccess(strength=True)
        assert result.current_game == GameType.STRENGTH
        assert result.game_selected_at == existing.game_selected_at
        assert result.created_at == existing.created_at

    @pytest.mark.asyncio
    async def test_allow_listed_email_becomes_admin(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        submission: ProfileSubmission,
    ):
        uow.profiles.get.return_value = None

        result = await service.complete_profile(user_id, "tgantasa@gitam.in", submission)

        assert result.role == UserRole.ADMIN
        assert result.game_access == GameAccess.uniform(True)

    @pytest.mark.asyncio
    async def test_store_failure_propagates_without_commit(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        user_id: UUID,
        submission: ProfileSubmission,
    ):
        uow.profiles.get.return_value = None
        uow.profiles.set.side_effect = ProfileStoreError()

        with pytest.raises(ProfileStoreError):
            await service.complete_profile(user_id, "ravi@example.com", submission)

        assert not uow.committed


# --- touch ---


class TestTouch:
    @pytest.mark.asyncio
    async def test_updates_last_active(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.update_fields.return_value = True
        uow.profiles.get.return_value = make_profile(user_id)

        await service.touch(user_id)

        changes = uow.profiles.update_fields.call_args.args[1]
        assert list(changes) == ["last_active"]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_raises_when_missing(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.update_fields.return_value = False

        with pytest.raises(ProfileNotFoundError):
            await service.touch(user_id)

        assert not uow.committed
