"""Live profile subscriptions.

A subscription delivers the full set of profiles matching its query: once
when it starts and again after every committed write. Consumers replace
their view with each snapshot; nothing is ever sent as a delta. Only the
newest pending snapshot is kept per subscriber, so a slow consumer skips
intermediate states instead of falling behind.

Every read is stamped with a generation taken before it starts. A
subscription ignores snapshots older than the last one it accepted, so
concurrent publishes whose reads finish out of order never leave a stale
view behind.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

import structlog

from domain.entities.profile import UserProfile
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


@dataclass(frozen=True)
class ProfileQuery:
    """Which documents a subscription watches. ``user_id=None`` means all."""

    user_id: UUID | None = None

    def select(self, profiles: list[UserProfile]) -> list[UserProfile]:
        if self.user_id is None:
            return profiles
        return [p for p in profiles if p.id == self.user_id]


class ProfileSubscription:
    """Cancelable handle returned by ProfileFeed.subscribe.

    Iterate with ``async for snapshot in subscription`` or await ``next()``.
    Iteration ends once ``cancel()`` has been called.
    """

    def __init__(self, feed: "ProfileFeed", query: ProfileQuery) -> None:
        self._feed = feed
        self.query = query
        self._pending: asyncio.Queue[list[UserProfile] | None] = asyncio.Queue(maxsize=1)
        self._cancelled = False
        self._generation = -1

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop receiving snapshots. Safe to call more than once."""
        if self._cancelled:
            return
        self._cancelled = True
        self._feed._remove(self)
        self._replace_pending(None)

    def deliver(self, snapshot: list[UserProfile], generation: int) -> None:
        if self._cancelled or generation < self._generation:
            return
        self._generation = generation
        self._replace_pending(snapshot)

    async def next(self) -> list[UserProfile] | None:
        """Wait for the next snapshot; None once cancelled."""
        if self._cancelled and self._pending.empty():
            return None
        return await self._pending.get()

    def _replace_pending(self, item: list[UserProfile] | None) -> None:
        if self._pending.full():
            self._pending.get_nowait()
        self._pending.put_nowait(item)

    def __aiter__(self) -> "ProfileSubscription":
        return self

    async def __anext__(self) -> list[UserProfile]:
        snapshot = await self.next()
        if snapshot is None:
            raise StopAsyncIteration
        return snapshot

    async def __aenter__(self) -> "ProfileSubscription":
        return self

    async def __aexit__(self, *args: object) -> None:
        self.cancel()


class ProfileFeed:
    """In-process hub that turns committed writes into snapshot pushes."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory
        self._subscriptions: set[ProfileSubscription] = set()
        self._generation = 0

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    async def subscribe(self, query: ProfileQuery | None = None) -> ProfileSubscription:
        """Start a subscription; the current snapshot is queued immediately."""
        subscription = ProfileSubscription(self, query or ProfileQuery())
        self._subscriptions.add(subscription)
        generation = self._next_generation()
        try:
            async with self._uow_factory() as uow:
                snapshot = await uow.profiles.list_all(subscription.query.user_id)
        except Exception:
            subscription.cancel()
            raise
        subscription.deliver(snapshot, generation)
        logger.debug(
            "profile_subscription_started",
            user_id=str(subscription.query.user_id) if subscription.query.user_id else None,
            subscribers=len(self._subscriptions),
        )
        return subscription

    async def publish(self) -> None:
        """Push fresh snapshots to every live subscription.

        The collection is read once per publish and narrowed per query in
        memory, so the cost of a write does not grow with the subscriber count.
        """
        if not self._subscriptions:
            return

        generation = self._next_generation()
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.list_all()

        for subscription in list(self._subscriptions):
            subscription.deliver(subscription.query.select(profiles), generation)

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _remove(self, subscription: ProfileSubscription) -> None:
        self._subscriptions.discard(subscription)
        logger.debug("profile_subscription_stopped", subscribers=len(self._subscriptions))
