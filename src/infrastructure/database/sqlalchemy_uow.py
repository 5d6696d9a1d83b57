"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import ProfileStoreError
from domain.repositories.unit_of_work import CommitHook
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)

logger = structlog.get_logger()


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    Driver and connection failures escaping the block are re-raised as
    ProfileStoreError so services never see SQLAlchemy types. ``on_commit``
    runs after every successful commit; the live profile feed hangs off it.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        on_commit: Optional[CommitHook] = None,
    ) -> None:
        self._session_factory = session_factory
        self._on_commit = on_commit
        self._session: Optional[AsyncSession] = None

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyProfileRepository(self._session)

    async def commit(self) -> None:
        """Commit the current transaction and notify listeners."""
        if not self._session:
            return
        await self._session.commit()
        if self._on_commit is not None:
            try:
                await self._on_commit()
            except Exception:
                # Broadcast failures never undo a durable write
                logger.exception("commit_hook_failed")

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            try:
                if exc_type:
                    await self.rollback()
                await self._session.close()
            except (SQLAlchemyError, OSError):
                logger.warning("session_cleanup_failed", exc_info=True)
            finally:
                self._session = None

        if isinstance(exc_val, (SQLAlchemyError, OSError)):
            logger.error(
                "profile_store_error",
                error=str(exc_val),
                error_type=type(exc_val).__name__,
            )
            raise ProfileStoreError() from exc_val
