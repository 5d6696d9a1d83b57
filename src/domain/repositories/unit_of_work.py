"""Unit of Work protocol."""

from typing import Any, Awaitable, Callable, Protocol

from domain.repositories.profile_repository import IProfileRepository

# Awaited after each successful commit. Live subscriptions are refreshed here.
CommitHook = Callable[[], Awaitable[None]]


class IUnitOfWork(Protocol):
    """One transaction against the profile store.

    Store failures leave the block as ``ProfileStoreError``; nothing written
    inside an uncommitted block is visible to other units of work.
    """

    profiles: IProfileRepository

    async def commit(self) -> None:
        """Make the block's writes durable, then run the commit hook."""
        ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None: ...
