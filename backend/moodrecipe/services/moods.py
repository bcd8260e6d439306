"""
moods.py — Mood History & Analytics

Purpose:
- Append a mood entry to the owning user's history.
- Summarize the history as {mood: count}.
"""

import datetime
from collections import Counter
from typing import Dict, Optional

from sqlalchemy.orm import Session

from moodrecipe.core.errors import NotFound, ValidationError
from moodrecipe.core.logging import get_logger
from moodrecipe.core.security import ensure_owner, utcnow
from moodrecipe.models.mood_entry import MoodEntry
from moodrecipe.services.credentials import get_user

logger = get_logger(__name__)


def record_mood(
    db: Session,
    caller_id: int,
    target_user_id: int,
    mood: Optional[str],
    date: Optional[datetime.datetime] = None,
) -> MoodEntry:
    ensure_owner(caller_id, target_user_id)

    if not mood or not mood.strip():
        raise ValidationError("Missing required field(s): mood")
    user = get_user(db, target_user_id)
    if user is None:
        raise NotFound("User not found")

    entry = MoodEntry(mood=mood.strip(), date=date or utcnow())
    user.mood_history.append(entry)
    db.commit()
    logger.info("Mood %r recorded for user %s", entry.mood, target_user_id)
    return entry


def mood_analytics(db: Session, caller_id: int, target_user_id: int) -> Dict[str, int]:
    """
    Count history entries per mood.

    Example:
        {"happy": 3, "tired": 1}
    """
    ensure_owner(caller_id, target_user_id)

    user = get_user(db, target_user_id)
    if user is None:
        raise NotFound("User not found")

    return dict(Counter(entry.mood for entry in user.mood_history))
