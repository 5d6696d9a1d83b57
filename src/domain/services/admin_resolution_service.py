"""Decide whether an authenticated identity is an administrator."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from uuid import UUID

import structlog

from core.exceptions import ProfileStoreError
from domain.entities.profile import GameAccess, UserProfile, UserRole, utcnow
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

DEFAULT_ADMIN_NAME = "Admin User"


@dataclass
class AdminResolution:
    """Outcome of one resolution: the role verdict and the stored profile, if any."""

    is_admin: bool
    profile: UserProfile | None = None


class AdminResolutionService:
    """Resolve administrator status from the email allow-list and stored role.

    Allow-listed emails are provisioned or upgraded to a full-access admin
    profile. Every other identity gets whatever role its profile stores.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        admin_emails: Iterable[str],
    ) -> None:
        self._uow_factory = uow_factory
        self._admin_emails = frozenset(admin_emails)

    def is_admin_email(self, email: str | None) -> bool:
        """Exact, case-sensitive allow-list check."""
        if not email:
            return False
        return email in self._admin_emails

    async def resolve(
        self,
        user_id: UUID,
        email: str,
        display_name: str | None = None,
    ) -> AdminResolution:
        """Run once per sign-in (and per admin-guarded request).

        Converges by value: running it twice writes the same document. If the
        store cannot be reached, falls back to the allow-list alone.
        """
        admin_by_email = self.is_admin_email(email)

        try:
            async with self._uow_factory() as uow:
                profile = await uow.profiles.get(user_id)

                if profile is None:
                    if not admin_by_email:
                        return AdminResolution(is_admin=False)
                    profile = await uow.profiles.set(
                        self._provision_admin(user_id, email, display_name)
                    )
                    await uow.commit()
                    logger.info("admin_profile_provisioned", user_id=str(user_id), email=email)
                    return AdminResolution(is_admin=True, profile=profile)

                if admin_by_email and not profile.is_admin:
                    profile.role = UserRole.ADMIN
                    profile.game_access = GameAccess.uniform(True)
                    profile.updated_at = utcnow()
                    profile = await uow.profiles.set(profile)
                    await uow.commit()
                    logger.info("admin_role_upgraded", user_id=str(user_id), email=email)

                return AdminResolution(is_admin=profile.is_admin, profile=profile)

        except ProfileStoreError:
            logger.warning(
                "admin_resolution_fallback",
                user_id=str(user_id),
                admin_by_email=admin_by_email,
            )
            return AdminResolution(is_admin=admin_by_email)

    @staticmethod
    def _provision_admin(
        user_id: UUID, email: str, display_name: str | None
    ) -> UserProfile:
        now = utcnow()
        return UserProfile(
            id=user_id,
            email=email,
            name=display_name or DEFAULT_ADMIN_NAME,
            gitam_email=email,
            mobile_number="",
            branch="Admin",
            year="",
            registration_number="",
            role=UserRole.ADMIN,
            game_access=GameAccess.uniform(True),
            current_game=None,
            last_active=now,
            created_at=now,
            updated_at=now,
        )
