"""
favorites.py — Favorites Manager

Purpose:
- Add a recipe to a user's favorites (idempotent set-add).
- List a user's favorites in the order they were added.

Both operations re-check ownership even though the route already did.

Concurrency:
- Two concurrent adds of the same recipe can both pass the existence check.
  The (user_id, recipe_id) UNIQUE constraint rejects the second insert and
  that IntegrityError is treated as "already a favorite".
"""

from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from moodrecipe.core.errors import NotFound, StoreError
from moodrecipe.core.logging import get_logger
from moodrecipe.core.security import ensure_owner
from moodrecipe.models.favorite import Favorite
from moodrecipe.services.credentials import get_user
from moodrecipe.services.recipes import get_recipe

logger = get_logger(__name__)


def _favorite_exists(db: Session, user_id: int, recipe_id: int) -> bool:
    return (
        db.query(Favorite.id)
        .filter(Favorite.user_id == user_id, Favorite.recipe_id == recipe_id)
        .first()
        is not None
    )


def add_favorite(db: Session, caller_id: int, target_user_id: int, recipe_id: int) -> bool:
    """
    Add `recipe_id` to the target user's favorites.

    Returns:
        True if a new favorite was stored, False if it was already there.

    Raises:
        Forbidden: caller_id != target_user_id.
        NotFound: unknown user or recipe.
        StoreError: any other store failure.
    """
    ensure_owner(caller_id, target_user_id)

    user = get_user(db, target_user_id)
    if user is None:
        raise NotFound("User not found")
    if get_recipe(db, recipe_id) is None:
        raise NotFound("Recipe not found")

    if _favorite_exists(db, target_user_id, recipe_id):
        return False

    user.favorites.append(Favorite(recipe_id=recipe_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Favorite %s for user %s added concurrently", recipe_id, target_user_id)
        return False
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to add favorite %s for user %s: %s", recipe_id, target_user_id, e)
        raise StoreError("Could not update favorites") from e

    logger.info("Favorite %s added for user %s", recipe_id, target_user_id)
    return True


def list_favorites(db: Session, caller_id: int, target_user_id: int) -> List[int]:
    ensure_owner(caller_id, target_user_id)

    user = get_user(db, target_user_id)
    if user is None:
        raise NotFound("User not found")

    # Relationship is ordered by Favorite.id, i.e. insertion order
    return [favorite.recipe_id for favorite in user.favorites]
