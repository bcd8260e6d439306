"""
recipes.py — Recipe Catalog Query

Purpose:
- Filter the catalog by mood and dietary tags.
- Load catalog records (used by scripts/seed_recipes.py and tests).

Matching semantics:
- mood:    exact membership in recipe.mood_tags ("happy" does not match "unhappy").
- dietary: every requested tag must be in recipe.dietary_tags (AND, not OR).
- Both filters are conjunctive. An absent or empty filter matches everything.

Results keep catalog storage order (id ascending), so the same query always
returns the same sequence.
"""

from typing import Any, Dict, Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from moodrecipe.core.logging import get_logger
from moodrecipe.models.recipe import Recipe

logger = get_logger(__name__)


def parse_dietary_filter(raw: Optional[str]) -> Set[str]:
    """
    Parse the comma-separated `dietary` query parameter.

    Example:
        parse_dietary_filter("vegan, gluten-free,") → {"vegan", "gluten-free"}
    """
    if not raw:
        return set()
    return {item.strip() for item in raw.split(",") if item.strip()}


def recipe_matches(
    recipe: Recipe,
    mood: Optional[str] = None,
    dietary: Optional[Iterable[str]] = None,
) -> bool:
    if mood and mood not in (recipe.mood_tags or []):
        return False
    required = set(dietary or ())
    if required and not required.issubset(recipe.dietary_tags or []):
        return False
    return True


def query_recipes(
    db: Session,
    mood: Optional[str] = None,
    dietary: Optional[Iterable[str]] = None,
) -> List[Recipe]:
    """
    Return recipes matching both filters, in storage order.

    Tags are JSON columns, so containment is evaluated here rather than in
    SQL; this keeps the semantics identical on SQLite and Postgres.
    """
    required = set(dietary or ())
    recipes = db.query(Recipe).order_by(Recipe.id).all()
    if not mood and not required:
        return recipes

    matched = [r for r in recipes if recipe_matches(r, mood, required)]
    logger.debug(
        "Recipe query mood=%r dietary=%s matched %d of %d",
        mood, sorted(required), len(matched), len(recipes),
    )
    return matched


def get_recipe(db: Session, recipe_id: int) -> Optional[Recipe]:
    return db.query(Recipe).filter(Recipe.id == recipe_id).first()


def seed_catalog(db: Session, records: Iterable[Dict[str, Any]]) -> int:
    """
    Insert catalog records and return how many were added.

    Expected record format:
        {"title": str, "mood_tags": [...], "dietary_tags": [...],
         "ingredients": [...], "instructions": str}
    """
    count = 0
    for record in records:
        db.add(Recipe(
            title=record["title"],
            mood_tags=list(record.get("mood_tags", [])),
            dietary_tags=list(record.get("dietary_tags", [])),
            ingredients=list(record.get("ingredients", [])),
            instructions=record.get("instructions", ""),
        ))
        count += 1
    db.commit()
    logger.info("Seeded %d recipes", count)
    return count
