"""
recipe.py — ORM Model for Catalog Recipes

Purpose:
- Represent a recipe in the catalog with its mood and dietary labels.

Important Design Rule:
- The API never writes recipes. The catalog is loaded out-of-band
  (see scripts/seed_recipes.py).
- Tags are stored as JSON lists; matching semantics live in services/recipes.py.
"""

from sqlalchemy import JSON, Column, Integer, String, Text

from moodrecipe.core.database import Base


class Recipe(Base):
    __tablename__ = "recipe"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String, nullable=False)

    # Labels, e.g. mood_tags=["happy", "cozy"], dietary_tags=["vegan"]
    mood_tags = Column(JSON, nullable=False, default=list)
    dietary_tags = Column(JSON, nullable=False, default=list)

    # Ordered ingredient lines
    ingredients = Column(JSON, nullable=False, default=list)
    instructions = Column(Text, nullable=False, default="")

    def __repr__(self):
        return f"<Recipe {self.id} | {self.title}>"
