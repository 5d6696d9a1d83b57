"""Live snapshot WebSockets.

Browsers cannot set an Authorization header on a WebSocket handshake, so
the bearer token travels in the ``token`` query parameter. Every message
is a full snapshot; clients replace their view with it.
"""

import asyncio
from collections.abc import Callable
from typing import Any

import structlog
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from api.dependencies.auth import get_auth_provider
from api.dependencies.services import get_admin_resolution_service, get_profile_feed
from api.v1.schemas.admin import AdminSnapshotMessage
from api.v1.schemas.profile import ProfileResponse, ProfileSnapshotMessage
from core.exceptions import ProfileStoreError
from domain.entities.profile import UserProfile, utcnow
from domain.services.admin_resolution_service import AdminResolutionService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.realtime.profile_feed import ProfileFeed, ProfileQuery, ProfileSubscription

logger = structlog.get_logger()

router = APIRouter(prefix="/live", tags=["live"])

Renderer = Callable[[list[UserProfile]], dict[str, Any]]


async def _authenticate(
    websocket: WebSocket, auth_provider: JWTAuthProvider
) -> TokenUser | None:
    token = websocket.query_params.get("token")
    if not token:
        return None
    return await auth_provider.validate_token(token)


async def _reject(websocket: WebSocket, reason: str) -> None:
    logger.info("live_connection_rejected", path=websocket.url.path, reason=reason)
    await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=reason)


async def _stream(
    websocket: WebSocket,
    feed: ProfileFeed,
    query: ProfileQuery,
    render: Renderer,
) -> None:
    """Accept the socket and forward snapshots until either side goes away."""
    await websocket.accept()
    try:
        subscription = await feed.subscribe(query)
    except ProfileStoreError:
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        return

    async def watch_client(sub: ProfileSubscription) -> None:
        # Inbound frames carry no meaning; reading only detects the disconnect.
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            sub.cancel()

    watcher = asyncio.create_task(watch_client(subscription))
    logger.info("live_connection_opened", path=websocket.url.path)
    try:
        async for snapshot in subscription:
            await websocket.send_json(render(snapshot))
    except WebSocketDisconnect:
        pass
    finally:
        subscription.cancel()
        watcher.cancel()
        logger.info("live_connection_closed", path=websocket.url.path)


def _render_own_profile(snapshot: list[UserProfile]) -> dict[str, Any]:
    profile = ProfileResponse.from_entity(snapshot[0]) if snapshot else None
    return ProfileSnapshotMessage(profile=profile).model_dump(mode="json")


def _render_admin_view(snapshot: list[UserProfile]) -> dict[str, Any]:
    return AdminSnapshotMessage.build(snapshot, utcnow()).model_dump(mode="json")


@router.websocket("/me")
async def live_own_profile(
    websocket: WebSocket,
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
    feed: ProfileFeed = Depends(get_profile_feed),
) -> None:
    """Push the caller's own profile whenever it changes."""
    user = await _authenticate(websocket, auth_provider)
    if user is None:
        await _reject(websocket, "Invalid or missing token")
        return

    await _stream(websocket, feed, ProfileQuery(user_id=user.id), _render_own_profile)


@router.websocket("/admin/users")
async def live_admin_users(
    websocket: WebSocket,
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
    feed: ProfileFeed = Depends(get_profile_feed),
    resolver: AdminResolutionService = Depends(get_admin_resolution_service),
) -> None:
    """Push every profile plus dashboard statistics whenever anything changes."""
    user = await _authenticate(websocket, auth_provider)
    if user is None:
        await _reject(websocket, "Invalid or missing token")
        return

    resolution = await resolver.resolve(user.id, user.email, user.display_name)
    if not resolution.is_admin:
        await _reject(websocket, "Administrator access required")
        return

    await _stream(websocket, feed, ProfileQuery(), _render_admin_view)
