"""API endpoints for recipes, recipe variants and recipe insights."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.schemas import (
    RecipeIngredientRequest,
    StepRequest,
    insight_to_dict,
    recipe_to_dict,
)
from app.database import get_db
from app.services.insight_service import InsightService
from app.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


# =============================================================================
# Request Models
# =============================================================================

class UpsertRecipeRequest(BaseModel):
    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    prep_time_minutes: int = Field(0, ge=0)
    cook_time_minutes: int = Field(0, ge=0)
    yield_text: Optional[str] = Field(None, max_length=100)
    steps: List[StepRequest] = []
    ingredients: List[RecipeIngredientRequest] = []


class CreateVariantRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    set_as_favorite: bool = False
    user_id: Optional[str] = None


def _recipe_kwargs(request: UpsertRecipeRequest) -> dict:
    return {
        "name": request.name,
        "description": request.description,
        "prep_time_minutes": request.prep_time_minutes,
        "cook_time_minutes": request.cook_time_minutes,
        "yield_text": request.yield_text,
        "steps": [step.model_dump() for step in request.steps],
        "ingredients": [i.to_line() for i in request.ingredients],
    }


# =============================================================================
# Endpoints
# =============================================================================

@router.post("", status_code=201)
async def create_recipe(request: UpsertRecipeRequest, db: Session = Depends(get_db)):
    """Create a recipe with its baseline ingredients."""
    try:
        recipe = RecipeService.create_recipe(
            db, user_id=request.user_id, **_recipe_kwargs(request)
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return recipe_to_dict(recipe)


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: int, db: Session = Depends(get_db)):
    recipe = RecipeService.get_recipe(db, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe_to_dict(recipe)


@router.put("/{recipe_id}")
async def update_recipe(
    recipe_id: int, request: UpsertRecipeRequest, db: Session = Depends(get_db)
):
    """Replace a recipe. Existing prep summaries are not recomputed."""
    try:
        recipe = RecipeService.update_recipe(db, recipe_id, **_recipe_kwargs(request))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe_to_dict(recipe)


@router.delete("/{recipe_id}")
async def delete_recipe(recipe_id: int, db: Session = Depends(get_db)):
    if not RecipeService.delete_recipe(db, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"message": "Recipe deleted"}


@router.get("/{recipe_id}/insights")
async def get_recipe_insights(recipe_id: int, db: Session = Depends(get_db)):
    """Get the aggregated rating insight of a recipe (404 until its first rating)."""
    insight = InsightService.get_insight(db, recipe_id)
    if not insight:
        raise HTTPException(status_code=404, detail="No insights for this recipe yet")
    return insight_to_dict(insight)


@router.post("/{prep_id}/variants", status_code=201)
async def create_variant_from_prep(
    prep_id: int, request: CreateVariantRequest, db: Session = Depends(get_db)
):
    """Save a prep as a new recipe variant of the recipe it was made from."""
    try:
        variant = RecipeService.create_variant_from_prep(
            db,
            prep_id,
            name=request.name,
            set_as_favorite=request.set_as_favorite,
            user_id=request.user_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not variant:
        raise HTTPException(status_code=404, detail="Prep not found")
    return recipe_to_dict(variant)


@router.put("/{recipe_id}/favorite")
async def set_favorite_variant(recipe_id: int, db: Session = Depends(get_db)):
    """Make a variant the favorite of its original recipe."""
    variant = RecipeService.set_favorite_variant(db, recipe_id)
    if not variant:
        raise HTTPException(status_code=404, detail="Recipe variant not found")
    return recipe_to_dict(variant)
