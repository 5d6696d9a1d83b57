"""Admin console routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from api.dependencies.auth import AdminUser
from api.dependencies.services import get_admin_service
from api.v1.schemas.admin import (
    AdminUserDetailResponse,
    AdminUserListResponse,
    AdminUserResponse,
    BulkAccessResponse,
    GameStatsResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import GameType, utcnow
from domain.services.admin_service import AdminService
from domain.services.export import export_filename

router = APIRouter(prefix="/admin", tags=["admin"])

_POINT_RESPONSES: dict[int | str, dict[str, str]] = {
    403: {"description": "Not an administrator, or target is an administrator"},
    404: {"description": "User not found"},
}


@router.get(
    "/users",
    response_model=AdminUserListResponse,
    summary="List all users",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_users(
    request: Request,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> AdminUserListResponse:
    """All profiles with online status and access counters."""
    return AdminUserListResponse.build(await service.list_users(), utcnow())


@router.get(
    "/stats",
    response_model=GameStatsResponse,
    summary="Dashboard statistics",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_stats(
    request: Request,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> GameStatsResponse:
    """Totals, users active in the last five minutes and the game distribution."""
    return GameStatsResponse.from_entity(await service.get_stats())


@router.post(
    "/users/{user_id}/access/{game}/toggle",
    response_model=AdminUserDetailResponse,
    summary="Toggle one game for one user",
    responses=_POINT_RESPONSES,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def toggle_access(
    request: Request,
    user_id: UUID,
    game: GameType,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> AdminUserDetailResponse:
    """Flip the user's access flag for ``game``."""
    profile = await service.toggle_access(user_id, game)
    return AdminUserDetailResponse(data=AdminUserResponse.from_entity_at(profile, utcnow()))


@router.post(
    "/users/{user_id}/reset-game",
    response_model=AdminUserDetailResponse,
    summary="Unlock a user's game selection",
    responses=_POINT_RESPONSES,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def reset_game(
    request: Request,
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> AdminUserDetailResponse:
    """Clear the locked game so the user can choose again."""
    profile = await service.reset_game(user_id)
    return AdminUserDetailResponse(data=AdminUserResponse.from_entity_at(profile, utcnow()))


@router.post(
    "/users/{user_id}/reset",
    response_model=AdminUserDetailResponse,
    summary="Reset a user's access and selection",
    responses=_POINT_RESPONSES,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def reset_user(
    request: Request,
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> AdminUserDetailResponse:
    """Revoke all access and clear the locked game."""
    profile = await service.reset_user(user_id)
    return AdminUserDetailResponse(data=AdminUserResponse.from_entity_at(profile, utcnow()))


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    responses={204: {"description": "User deleted"}, **_POINT_RESPONSES},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_user(
    request: Request,
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> None:
    """Permanently delete the user's profile."""
    await service.delete_user(user_id)
    return None


@router.post(
    "/access/grant-all",
    response_model=BulkAccessResponse,
    summary="Grant every game to every user",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def grant_all(
    request: Request,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> BulkAccessResponse:
    """All non-admin users, one atomic batch."""
    return BulkAccessResponse(enabled=True, affected=await service.grant_all())


@router.post(
    "/access/revoke-all",
    response_model=BulkAccessResponse,
    summary="Revoke every game from every user",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def revoke_all(
    request: Request,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> BulkAccessResponse:
    """All non-admin users, one atomic batch. Locked selections are kept."""
    return BulkAccessResponse(enabled=False, affected=await service.revoke_all())


@router.get(
    "/export",
    summary="Export users as CSV",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def export_users(
    request: Request,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> Response:
    """Download all profiles as a CSV file."""
    content = await service.export_csv()
    filename = export_filename(utcnow().date())
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
