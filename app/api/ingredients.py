"""API endpoints for the ingredient catalogue."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.schemas import ingredient_to_dict
from app.database import get_db
from app.services.ingredient_service import IngredientService

router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])


class CreateIngredientRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)


@router.post("", status_code=201)
async def create_ingredient(
    request: CreateIngredientRequest, db: Session = Depends(get_db)
):
    """Create an ingredient, or return the existing one with the same normalized name."""
    try:
        ingredient = IngredientService.get_or_create(db, request.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ingredient_to_dict(ingredient)


@router.get("")
async def list_ingredients(search: Optional[str] = None, db: Session = Depends(get_db)):
    ingredients = IngredientService.list_ingredients(db, search=search)
    return {"ingredients": [ingredient_to_dict(i) for i in ingredients]}
