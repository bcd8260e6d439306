"""
integrations.py — Mood Detection and Grocery Ordering Endpoints

Thin wrappers over the capabilities in services/integrations.py. The
providers are stubs today; swapping them does not touch these routes.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel

from moodrecipe.api.deps import get_context, get_current_user_id
from moodrecipe.core.context import AppContext
from moodrecipe.core.errors import InternalError
from moodrecipe.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["integrations"])


class MoodDetectRequest(BaseModel):
    text: Optional[str] = ""


class MoodDetectResponse(BaseModel):
    mood: str


class MessageResponse(BaseModel):
    message: str


@router.post("/mood-detect", response_model=MoodDetectResponse)
async def detect_mood(payload: MoodDetectRequest, ctx: AppContext = Depends(get_context)):
    try:
        mood = ctx.integrations.mood_detector.detect(payload.text or "")
    except Exception as e:
        logger.exception("Mood detection failed: %s", e)
        raise InternalError("Mood detection failed")
    return MoodDetectResponse(mood=mood)


@router.post("/grocery/orders", response_model=MessageResponse)
async def place_grocery_order(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    caller_id: int = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    return MessageResponse(message=ctx.integrations.grocery.place_order(caller_id, payload))
