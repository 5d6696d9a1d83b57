"""Integration tests for the SQLAlchemy profile repository."""

from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.entities.profile import GameAccess, GameType, UserRole, utcnow
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from tests.factories import make_admin, make_profile


@pytest.fixture
def new_uow(session_factory: async_sessionmaker[AsyncSession]):
    return lambda: SQLAlchemyUnitOfWork(session_factory)


class TestSetAndGet:
    @pytest.mark.asyncio
    async def test_round_trip_keeps_every_field(self, new_uow):
        profile = make_profile(
            access=GameAccess(strength=True, chance=True),
            current_game=GameType.CHANCE,
        )

        async with new_uow() as uow:
            await uow.profiles.set(profile)
            await uow.commit()

        async with new_uow() as uow:
            loaded = await uow.profiles.get(profile.id)

        assert loaded == profile

    @pytest.mark.asyncio
    async def test_set_overwrites_existing_document(self, new_uow):
        profile = make_profile(name="First")
        async with new_uow() as uow:
            await uow.profiles.set(profile)
            await uow.commit()

        profile.name = "Second"
        profile.role = UserRole.ADMIN
        async with new_uow() as uow:
            await uow.profiles.set(profile)
            await uow.commit()

        async with new_uow() as uow:
            loaded = await uow.profiles.get(profile.id)
        assert loaded is not None
        assert loaded.name == "Second"
        assert loaded.role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, new_uow):
        async with new_uow() as uow:
            assert await uow.profiles.get(uuid4()) is None


class TestUpdateFields:
    @pytest.mark.asyncio
    async def test_single_access_flag(self, new_uow, seed_profile):
        profile = await seed_profile(make_profile(access=GameAccess(mind=True)))

        async with new_uow() as uow:
            assert await uow.profiles.update_fields(profile.id, {"game_access.strength": True})
            await uow.commit()

        async with new_uow() as uow:
            loaded = await uow.profiles.get(profile.id)
        assert loaded is not None
        assert loaded.game_access == GameAccess(strength=True, mind=True)

    @pytest.mark.asyncio
    async def test_whole_access_and_selection(self, new_uow, seed_profile):
        profile = await seed_profile(
            make_profile(access=GameAccess.uniform(True), current_game=GameType.MIND)
        )

        async with new_uow() as uow:
            await uow.profiles.update_fields(
                profile.id,
                {"game_access": GameAccess.uniform(False), "current_game": None},
            )
            await uow.commit()

        async with new_uow() as uow:
            loaded = await uow.profiles.get(profile.id)
        assert loaded is not None
        assert loaded.game_access == GameAccess()
        assert loaded.current_game is None

    @pytest.mark.asyncio
    async def test_read_after_update_in_same_unit(self, new_uow, seed_profile):
        profile = await seed_profile(make_profile())

        async with new_uow() as uow:
            await uow.profiles.get(profile.id)
            await uow.profiles.update_fields(profile.id, {"current_game": GameType.STRENGTH})
            reloaded = await uow.profiles.get(profile.id)

        assert reloaded is not None
        assert reloaded.current_game == GameType.STRENGTH

    @pytest.mark.asyncio
    async def test_missing_row_reports_false(self, new_uow):
        async with new_uow() as uow:
            assert not await uow.profiles.update_fields(uuid4(), {"last_active": utcnow()})

    @pytest.mark.asyncio
    async def test_unknown_field_is_rejected(self, new_uow, seed_profile):
        profile = await seed_profile(make_profile())

        async with new_uow() as uow:
            with pytest.raises(ValueError):
                await uow.profiles.update_fields(profile.id, {"favourite_colour": "red"})


class TestDeleteAndBatch:
    @pytest.mark.asyncio
    async def test_delete(self, new_uow, seed_profile):
        profile = await seed_profile(make_profile())

        async with new_uow() as uow:
            assert await uow.profiles.delete(profile.id)
            await uow.commit()

        async with new_uow() as uow:
            assert await uow.profiles.get(profile.id) is None
            assert not await uow.profiles.delete(profile.id)

    @pytest.mark.asyncio
    async def test_batch_is_all_or_nothing(self, new_uow, seed_profile):
        first = await seed_profile(make_profile())
        second = await seed_profile(make_profile())

        with pytest.raises(ValueError):
            async with new_uow() as uow:
                await uow.profiles.batch_update(
                    [
                        (first.id, {"game_access": GameAccess.uniform(True)}),
                        (second.id, {"not_a_field": True}),
                    ]
                )
                await uow.commit()

        async with new_uow() as uow:
            loaded = await uow.profiles.get(first.id)
        assert loaded is not None
        assert loaded.game_access == GameAccess()

    @pytest.mark.asyncio
    async def test_batch_counts_applied_rows(self, new_uow, seed_profile):
        first = await seed_profile(make_profile())

        async with new_uow() as uow:
            applied = await uow.profiles.batch_update(
                [
                    (first.id, {"game_access": GameAccess.uniform(True)}),
                    (uuid4(), {"game_access": GameAccess.uniform(True)}),
                ]
            )
            await uow.commit()

        assert applied == 1


class TestListAll:
    @pytest.mark.asyncio
    async def test_lists_everyone_or_one_user(self, new_uow, seed_profile):
        participant = await seed_profile(make_profile())
        admin = await seed_profile(make_admin())

        async with new_uow() as uow:
            everyone = await uow.profiles.list_all()
            only_admin = await uow.profiles.list_all(admin.id)

        assert {p.id for p in everyone} == {participant.id, admin.id}
        assert [p.id for p in only_admin] == [admin.id]
