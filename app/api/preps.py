"""API endpoints for recording preps of a recipe."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.schemas import (
    PrepIngredientRequest,
    StepRequest,
    prep_summary_to_dict,
    prep_to_dict,
)
from app.database import get_db
from app.services.prep_service import PrepService
from app.services.recipe_service import RecipeService

router = APIRouter(prefix="/api/preps", tags=["preps"])


# =============================================================================
# Request Models
# =============================================================================

class UpsertPrepRequest(BaseModel):
    recipe_id: int
    user_id: str = Field(min_length=1)
    summary_notes: Optional[str] = Field(None, max_length=2000)
    prep_time_minutes: Optional[int] = Field(None, ge=0)
    cook_time_minutes: Optional[int] = Field(None, ge=0)
    steps: List[StepRequest] = []
    ingredients: List[PrepIngredientRequest] = []


def _prep_kwargs(request: UpsertPrepRequest) -> dict:
    return {
        "ingredients": [i.to_input() for i in request.ingredients],
        "steps": [step.model_dump() for step in request.steps],
        "summary_notes": request.summary_notes,
        "prep_time_minutes": request.prep_time_minutes,
        "cook_time_minutes": request.cook_time_minutes,
    }


# =============================================================================
# Endpoints
# =============================================================================

@router.post("", status_code=201)
async def create_prep(request: UpsertPrepRequest, db: Session = Depends(get_db)):
    """
    Record a prep of a recipe.

    Each ingredient is tagged added/kept/modified against the recipe and a
    change summary is stored with the prep.
    """
    try:
        prep = PrepService.create_prep(
            db, recipe_id=request.recipe_id, user_id=request.user_id, **_prep_kwargs(request)
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not prep:
        raise HTTPException(
            status_code=404, detail=f"Base recipe with ID {request.recipe_id} not found"
        )
    return prep_to_dict(prep)


@router.put("/{prep_id}")
async def update_prep(
    prep_id: int, request: UpsertPrepRequest, db: Session = Depends(get_db)
):
    """Replace a prep's details; ingredient statuses and the change summary are recomputed."""
    existing = PrepService.get_prep(db, prep_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Prep not found")
    if existing.recipe_id != request.recipe_id:
        raise HTTPException(status_code=400, detail="A prep cannot move to another recipe")

    try:
        prep = PrepService.update_prep(db, prep_id, **_prep_kwargs(request))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return prep_to_dict(prep)


@router.get("/recipe/{recipe_id}")
async def get_recipe_preps(recipe_id: int, db: Session = Depends(get_db)):
    if not RecipeService.get_recipe(db, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    preps = PrepService.get_recipe_preps(db, recipe_id)
    return {"preps": [prep_summary_to_dict(p) for p in preps]}


@router.get("/{prep_id}")
async def get_prep(prep_id: int, db: Session = Depends(get_db)):
    prep = PrepService.get_prep(db, prep_id)
    if not prep:
        raise HTTPException(status_code=404, detail="Prep not found")
    return prep_to_dict(prep)


@router.delete("/{prep_id}")
async def delete_prep(prep_id: int, db: Session = Depends(get_db)):
    if not PrepService.delete_prep(db, prep_id):
        raise HTTPException(status_code=404, detail="Prep not found")
    return {"message": "Prep deleted"}
