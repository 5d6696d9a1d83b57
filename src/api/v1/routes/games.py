"""Game selection routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_game_service
from api.v1.schemas.game import (
    GameCategory,
    GameSelect,
    GameSelectionResponse,
    GamesOverviewResponse,
)
from core.exceptions import NoGameSelectedError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import GameType, UserProfile
from domain.services.game_service import GameService

router = APIRouter(prefix="/games", tags=["games"])

GAME_CATALOG: dict[GameType, tuple[str, str]] = {
    GameType.STRENGTH: ("Game of Strength", "Test your physical prowess and endurance"),
    GameType.MIND: ("Mind Games", "Challenge your intellect and strategy"),
    GameType.CHANCE: ("Game of Chance", "Try your luck and test your fortune"),
}


def _selection_response(profile: UserProfile) -> GameSelectionResponse:
    if profile.current_game is None:
        raise NoGameSelectedError()
    return GameSelectionResponse(
        game=profile.current_game,
        title=GAME_CATALOG[profile.current_game][0],
        name=profile.name,
        selected_at=profile.game_selected_at,
    )


@router.get(
    "",
    response_model=GamesOverviewResponse,
    summary="List games and my access",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_games(
    request: Request,
    user: CurrentUser,
    service: GameService = Depends(get_game_service),
) -> GamesOverviewResponse:
    """Game cards with the caller's access flags and selection state."""
    profile = await service.get_overview(user.id)
    return GamesOverviewResponse(
        selection_state=profile.selection_state,
        current_game=profile.current_game,
        games=[
            GameCategory(
                type=game,
                title=title,
                description=description,
                accessible=profile.game_access.allows(game),
            )
            for game, (title, description) in GAME_CATALOG.items()
        ],
    )


@router.post(
    "/selection",
    response_model=GameSelectionResponse,
    summary="Lock in a game",
    responses={
        200: {"description": "Selection locked"},
        403: {"description": "No access to this game"},
        404: {"description": "Profile not completed yet"},
        409: {"description": "A game is already locked in"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def select_game(
    request: Request,
    body: GameSelect,
    user: CurrentUser,
    service: GameService = Depends(get_game_service),
) -> GameSelectionResponse:
    """Select one game. The choice can only be undone by an administrator."""
    profile = await service.select_game(user.id, body.game)
    return _selection_response(profile)


@router.get(
    "/selection",
    response_model=GameSelectionResponse,
    summary="Get my locked game",
    responses={404: {"description": "No profile or no game selected"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_selection(
    request: Request,
    user: CurrentUser,
    service: GameService = Depends(get_game_service),
) -> GameSelectionResponse:
    """Confirmation screen data."""
    profile = await service.get_selection(user.id)
    return _selection_response(profile)
