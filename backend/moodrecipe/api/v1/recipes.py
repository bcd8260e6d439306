"""
recipes.py — Recipe Catalog Endpoints

Endpoints:
- GET  /recipes?mood=happy&dietary=vegan,gluten-free → filtered catalog
- GET  /recipes/{recipe_id}                         → single recipe
- POST /recipes/share                               → share (mock integration)
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from moodrecipe.api.deps import get_context, get_current_user_id
from moodrecipe.core.context import AppContext
from moodrecipe.core.database import get_db
from moodrecipe.core.errors import NotFound
from moodrecipe.services.recipes import get_recipe, parse_dietary_filter, query_recipes

router = APIRouter(
    prefix="/recipes",
    tags=["recipes"]
)

# -----------------------------------------------------------------------------
# Schemas
# -----------------------------------------------------------------------------

class RecipeOut(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Sunny Chickpea Salad",
                "mood_tags": ["happy"],
                "dietary_tags": ["vegan", "gluten-free"],
                "ingredients": ["chickpeas", "lemon", "parsley"],
                "instructions": "Toss everything together.",
            }
        },
    )

    id: int
    title: str
    mood_tags: List[str]
    dietary_tags: List[str]
    ingredients: List[str]
    instructions: str


class MessageResponse(BaseModel):
    message: str


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.get("", response_model=List[RecipeOut])
def list_recipes(
    mood: Optional[str] = Query(default=None, description="Single mood tag, exact match"),
    dietary: Optional[str] = Query(default=None, description="Comma-separated tags, all required"),
    db: Session = Depends(get_db),
):
    return query_recipes(db, mood=mood or None, dietary=parse_dietary_filter(dietary))


@router.post("/share", response_model=MessageResponse)
async def share_recipe(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    caller_id: int = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    return MessageResponse(message=ctx.integrations.sharer.share(caller_id, payload))


@router.get("/{recipe_id}", response_model=RecipeOut)
def read_recipe(recipe_id: int, db: Session = Depends(get_db)):
    recipe = get_recipe(db, recipe_id)
    if recipe is None:
        raise NotFound("Recipe not found")
    return recipe
