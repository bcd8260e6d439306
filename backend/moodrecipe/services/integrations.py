"""
integrations.py — Pluggable External Capabilities

Purpose:
- Describe the three outside services the backend talks to as one-method
  interfaces: mood classification, social sharing and grocery ordering.
- Provide the stub implementations used until real providers are wired in.

A real provider only has to implement the matching method; pass it to
create_app() through `Integrations` and no route or service changes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

from moodrecipe.core.logging import get_logger

logger = get_logger(__name__)


class MoodDetector(Protocol):
    def detect(self, text: str) -> str: ...


class RecipeSharer(Protocol):
    def share(self, user_id: int, payload: Optional[Dict[str, Any]]) -> str: ...


class GroceryOrderer(Protocol):
    def place_order(self, user_id: int, payload: Optional[Dict[str, Any]]) -> str: ...


# -----------------------------------------------------------------------------
# Stub implementations
# -----------------------------------------------------------------------------

class KeywordMoodDetector:
    """
    Stand-in for the AI mood classifier: "happy" anywhere in the text
    (case-insensitive) means happy, everything else is neutral.
    """

    keyword = "happy"

    def detect(self, text: str) -> str:
        if self.keyword in (text or "").lower():
            return "happy"
        return "neutral"


class MockRecipeSharer:
    message = "Shared recipe to social media (mock)"

    def share(self, user_id: int, payload: Optional[Dict[str, Any]]) -> str:
        logger.info("Mock share requested by user %s", user_id)
        return self.message


class MockGroceryOrderer:
    message = "Order placed successfully (mock)"

    def place_order(self, user_id: int, payload: Optional[Dict[str, Any]]) -> str:
        logger.info("Mock grocery order requested by user %s", user_id)
        return self.message


@dataclass
class Integrations:
    """Bundle of capabilities handed to create_app()."""

    mood_detector: MoodDetector = field(default_factory=KeywordMoodDetector)
    sharer: RecipeSharer = field(default_factory=MockRecipeSharer)
    grocery: GroceryOrderer = field(default_factory=MockGroceryOrderer)
