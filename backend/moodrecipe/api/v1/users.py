"""
users.py — Per-User Endpoints (favorites, mood history, analytics)

Every route here is protected: the caller id comes from the verified token
and must equal the `{user_id}` path segment.

Endpoints:
- POST /users/{user_id}/favorites → add a favorite (idempotent)
- GET  /users/{user_id}/favorites → list favorite recipe ids in insertion order
- POST /users/{user_id}/moods     → append a mood entry
- GET  /users/{user_id}/analytics → {mood: count}
"""

import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from moodrecipe.api.deps import get_current_user_id
from moodrecipe.core.database import get_db
from moodrecipe.core.security import ensure_owner
from moodrecipe.services.favorites import add_favorite, list_favorites
from moodrecipe.services.moods import mood_analytics, record_mood

router = APIRouter(
    prefix="/users",
    tags=["users"]
)

# -----------------------------------------------------------------------------
# Schemas
# -----------------------------------------------------------------------------

class FavoriteRequest(BaseModel):
    recipeId: int


class FavoritesResponse(BaseModel):
    favorites: List[int]


class MoodRequest(BaseModel):
    mood: Optional[str] = None
    date: Optional[datetime.datetime] = None


class MessageResponse(BaseModel):
    message: str


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.post("/{user_id}/favorites", response_model=MessageResponse)
def create_favorite(
    user_id: int,
    payload: FavoriteRequest,
    caller_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_owner(caller_id, user_id)
    add_favorite(db, caller_id, user_id, payload.recipeId)
    return MessageResponse(message="Favorite added")


@router.get("/{user_id}/favorites", response_model=FavoritesResponse)
def read_favorites(
    user_id: int,
    caller_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_owner(caller_id, user_id)
    return FavoritesResponse(favorites=list_favorites(db, caller_id, user_id))


@router.post("/{user_id}/moods", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_mood_entry(
    user_id: int,
    payload: MoodRequest,
    caller_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_owner(caller_id, user_id)
    record_mood(db, caller_id, user_id, payload.mood, payload.date)
    return MessageResponse(message="Mood recorded")


@router.get("/{user_id}/analytics", response_model=Dict[str, int])
def read_mood_analytics(
    user_id: int,
    caller_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_owner(caller_id, user_id)
    return mood_analytics(db, caller_id, user_id)
