"""
user.py — ORM Model for Application Users

Purpose:
- Represent authenticated users of the system.
- Stores hashed passwords only, never raw.
- Owns favorites and mood history rows (see favorite.py, mood_entry.py).

Used by:
- services/credentials.py (signup + login)
- services/favorites.py, services/moods.py (ownership-gated writes)
"""

import datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from moodrecipe.core.database import Base


class User(Base):
    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)

    # Identity (both globally unique)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)

    # bcrypt digest
    password_hash = Column(String, nullable=False)

    # e.g. ["vegan", "gluten-free"]
    dietary_preferences = Column(JSON, nullable=False, default=list)

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.datetime.now(datetime.timezone.utc),
    )

    favorites = relationship(
        "Favorite",
        back_populates="user",
        order_by="Favorite.id",
    )
    mood_history = relationship(
        "MoodEntry",
        back_populates="user",
        order_by="MoodEntry.id",
    )

    def __repr__(self):
        return f"<User {self.username}>"
