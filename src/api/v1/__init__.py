"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.admin import router as admin_router
from api.v1.routes.games import router as games_router
from api.v1.routes.live import router as live_router
from api.v1.routes.profile import router as profile_router
from api.v1.routes.session import router as session_router

router = APIRouter()
router.include_router(session_router)
router.include_router(profile_router)
router.include_router(games_router)
router.include_router(admin_router)
router.include_router(live_router)
