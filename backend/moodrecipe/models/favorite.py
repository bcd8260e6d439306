"""
favorite.py — ORM Model for a User's Favorite Recipes

Each row is one (user, recipe) membership. The UNIQUE constraint on the pair
makes "add favorite" an atomic set-add at the store: a concurrent duplicate
insert fails with IntegrityError instead of producing a second row.

Ordering: a user's favorites list is their rows ordered by `id`.
"""

import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from moodrecipe.core.database import Base


class Favorite(Base):
    __tablename__ = "favorite"

    id = Column(Integer, primary_key=True, autoincrement=True)

    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    recipe_id = Column(Integer, ForeignKey("recipe.id"), nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.datetime.now(datetime.timezone.utc),
    )

    user = relationship("User", back_populates="favorites")

    __table_args__ = (
        UniqueConstraint("user_id", "recipe_id", name="uq_favorite_user_recipe"),
    )

    def __repr__(self):
        return f"<Favorite user={self.user_id} recipe={self.recipe_id}>"
