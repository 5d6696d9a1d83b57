"""Pydantic schemas for Game API."""

from datetime import datetime

from pydantic import BaseModel

from domain.entities.profile import GameType, SelectionState


class GameCategory(BaseModel):
    """A selectable game card."""

    type: GameType
    title: str
    description: str
    accessible: bool


class GamesOverviewResponse(BaseModel):
    """Games page: catalog with the caller's access flags."""

    selection_state: SelectionState
    current_game: GameType | None = None
    games: list[GameCategory]


class GameSelect(BaseModel):
    """Schema for locking in a game."""

    game: GameType


class GameSelectionResponse(BaseModel):
    """Confirmation view for a locked selection."""

    game: GameType
    title: str
    name: str
    selected_at: datetime | None = None
    locked: bool = True
