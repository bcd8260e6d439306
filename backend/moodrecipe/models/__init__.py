from moodrecipe.models.favorite import Favorite
from moodrecipe.models.mood_entry import MoodEntry
from moodrecipe.models.recipe import Recipe
from moodrecipe.models.user import User

__all__ = ["Favorite", "MoodEntry", "Recipe", "User"]
