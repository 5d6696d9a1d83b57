"""Profile service: completion, lookup and activity heartbeat."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError
from domain.entities.profile import UserProfile, utcnow
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.admin_resolution_service import AdminResolutionService
from domain.services.profile_merge import ProfileSubmission, merge_profile_submission

logger = structlog.get_logger()


class ProfileService:
    """Service layer for the owning user's profile."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        admin_resolution: AdminResolutionService,
    ) -> None:
        self._uow_factory = uow_factory
        self._admin_resolution = admin_resolution

    async def get(self, user_id: UUID) -> UserProfile:
        """Get the caller's profile or raise ProfileNotFoundError."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return profile

    async def complete_profile(
        self,
        user_id: UUID,
        email: str,
        submission: ProfileSubmission,
    ) -> UserProfile:
        """Write the merged profile document.

        Reads any pre-existing document first so admin-granted access, a
        locked selection and the creation time survive the overwrite.
        """
        async with self._uow_factory() as uow:
            existing = await uow.profiles.get(user_id)
            profile = merge_profile_submission(
                existing,
                submission,
                user_id=user_id,
                email=email,
                is_admin=self._admin_resolution.is_admin_email(email),
                now=utcnow(),
            )
            saved = await uow.profiles.set(profile)
            await uow.commit()

        logger.info(
            "profile_completed",
            user_id=str(user_id),
            role=saved.role.value,
            created=existing is None,
        )
        return saved

    async def touch(self, user_id: UUID) -> UserProfile:
        """Record activity (dashboard visits keep ``last_active`` fresh)."""
        async with self._uow_factory() as uow:
            updated = await uow.profiles.update_fields(user_id, {"last_active": utcnow()})
            profile = await uow.profiles.get(user_id) if updated else None
            if profile is None:
                raise ProfileNotFoundError(str(user_id))
            await uow.commit()
        return profile
