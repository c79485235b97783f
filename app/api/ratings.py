"""API endpoints for rating preps."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.schemas import DimensionScores, rating_to_dict
from app.database import get_db
from app.services.prep_service import PrepService
from app.services.rating_service import RatingService

router = APIRouter(prefix="/api/preps/{prep_id}/ratings", tags=["prep ratings"])
dimensions_router = APIRouter(prefix="/api/rating-dimensions", tags=["prep ratings"])


class UpsertRatingRequest(BaseModel):
    user_id: str = Field(min_length=1)
    liked: bool = False
    overall_rating: int
    dimensions: DimensionScores = {}
    what_worked_well: Optional[str] = Field(None, max_length=1000)
    what_to_change: Optional[str] = Field(None, max_length=1000)
    additional_notes: Optional[str] = Field(None, max_length=2000)


@router.post("", status_code=201)
async def create_rating(
    prep_id: int, request: UpsertRatingRequest, db: Session = Depends(get_db)
):
    """Rate a prep. The recipe's insight is recomputed afterwards."""
    try:
        rating = RatingService.create_rating(db, prep_id, **request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not rating:
        raise HTTPException(status_code=404, detail=f"Prep with ID {prep_id} not found")
    return rating_to_dict(rating)


@router.put("/{rating_id}")
async def update_rating(
    prep_id: int,
    rating_id: int,
    request: UpsertRatingRequest,
    db: Session = Depends(get_db),
):
    """Update the author's rating of a prep. The recipe's insight is recomputed afterwards."""
    try:
        rating = RatingService.update_rating(db, prep_id, rating_id, **request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not rating:
        raise HTTPException(status_code=404, detail="Rating not found")
    return rating_to_dict(rating)


@router.get("")
async def get_ratings(prep_id: int, db: Session = Depends(get_db)):
    if not PrepService.get_prep(db, prep_id):
        raise HTTPException(status_code=404, detail="Prep not found")
    ratings = RatingService.get_prep_ratings(db, prep_id)
    return {"ratings": [rating_to_dict(r) for r in ratings]}


@dimensions_router.get("")
async def list_dimensions(db: Session = Depends(get_db)):
    return {
        "dimensions": [
            {
                "key": d.key,
                "display_name": d.display_name,
                "description": d.description,
                "sort_order": d.sort_order,
            }
            for d in RatingService.get_dimensions(db)
        ]
    }
