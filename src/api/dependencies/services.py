"""Service and live-feed factories shared by the HTTP and WebSocket routes."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.admin_resolution_service import AdminResolutionService
from domain.services.admin_service import AdminService
from domain.services.game_service import GameService
from domain.services.profile_service import ProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.realtime.profile_feed import ProfileFeed


def _read_uow() -> SQLAlchemyUnitOfWork:
    return SQLAlchemyUnitOfWork(async_session_factory)


@lru_cache
def get_profile_feed() -> ProfileFeed:
    """Process-wide hub; individual subscriptions belong to their connections."""
    return ProfileFeed(_read_uow)


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances that publish on commit."""
    feed = get_profile_feed()

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory, on_commit=feed.publish)

    return factory


@lru_cache
def get_admin_resolution_service() -> AdminResolutionService:
    """Get AdminResolution service instance."""
    return AdminResolutionService(get_uow_factory(), settings.admin_emails_list)


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory(), get_admin_resolution_service())


@lru_cache
def get_game_service() -> GameService:
    """Get Game service instance."""
    return GameService(get_uow_factory())


@lru_cache
def get_admin_service() -> AdminService:
    """Get Admin service instance."""
    return AdminService(get_uow_factory())
