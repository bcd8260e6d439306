"""
mood_entry.py — ORM Model for Mood History

Append-only log of moods a user has recorded. Rows are never updated or
deleted; analytics are computed from them on read.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from moodrecipe.core.database import Base


class MoodEntry(Base):
    __tablename__ = "mood_entry"

    id = Column(Integer, primary_key=True, autoincrement=True)

    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)

    mood = Column(String, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="mood_history")

    def __repr__(self):
        return f"<MoodEntry {self.mood} | {self.user_id}>"
