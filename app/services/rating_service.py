"""Business logic for prep ratings."""

import logging
from typing import Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.models.prep import Prep
from app.models.prep_rating import PrepRating
from app.models.rating_dimension import RatingDimension
from app.services.insight_service import InsightService

logger = logging.getLogger(__name__)


class RatingService:
    """Service for rating preps and keeping recipe insights current."""

    @staticmethod
    def get_dimensions(db: Session) -> List[RatingDimension]:
        """All recognised rating dimensions in display order."""
        return (
            db.query(RatingDimension)
            .order_by(RatingDimension.sort_order, RatingDimension.key)
            .all()
        )

    @staticmethod
    def validate_dimensions(db: Session, dimensions: Mapping[str, int]) -> None:
        """
        Check dimension keys against the configured set and scores against the rating scale.

        Raises:
            ValueError: on an unknown key or an out-of-range score
        """
        if not dimensions:
            return

        known = {d.key for d in RatingService.get_dimensions(db)}
        unknown = sorted(set(dimensions) - known)
        if unknown:
            logger.warning("Rejected rating with unknown dimensions %s", unknown)
            raise ValueError(f"Unknown rating dimensions: {unknown}")

        for key, score in dimensions.items():
            if not settings.rating_min <= score <= settings.rating_max:
                raise ValueError(
                    f"Dimension '{key}' must be between "
                    f"{settings.rating_min} and {settings.rating_max}"
                )

    @staticmethod
    def _validate_overall(overall_rating: int) -> None:
        if not settings.rating_min <= overall_rating <= settings.rating_max:
            raise ValueError(
                f"Overall rating must be between {settings.rating_min} and {settings.rating_max}"
            )

    @staticmethod
    def create_rating(
        db: Session,
        prep_id: int,
        user_id: str,
        overall_rating: int,
        liked: bool = False,
        dimensions: Optional[Dict[str, int]] = None,
        what_worked_well: Optional[str] = None,
        what_to_change: Optional[str] = None,
        additional_notes: Optional[str] = None,
    ) -> Optional[PrepRating]:
        """
        Rate a prep and refresh its recipe's insight.

        Args:
            db: Database session
            prep_id: Prep being rated
            user_id: Rating author; one rating per (prep, author)
            overall_rating: Overall score on the configured scale
            liked: Whether the author liked the result
            dimensions: Per-dimension scores keyed by RatingDimension.key

        Returns:
            Created PrepRating, or None if the prep does not exist

        Raises:
            ValueError: on a duplicate rating, unknown dimension or out-of-range score
        """
        prep = db.query(Prep).filter(Prep.id == prep_id).first()
        if not prep:
            return None

        existing = (
            db.query(PrepRating)
            .filter(PrepRating.prep_id == prep_id, PrepRating.user_id == user_id)
            .first()
        )
        if existing:
            raise ValueError("A rating for this prep by this user already exists")

        RatingService._validate_overall(overall_rating)
        RatingService.validate_dimensions(db, dimensions or {})

        rating = PrepRating(
            prep_id=prep_id,
            user_id=user_id,
            liked=liked,
            overall_rating=overall_rating,
            dimensions=dict(dimensions or {}),
            what_worked_well=what_worked_well,
            what_to_change=what_to_change,
            additional_notes=additional_notes,
        )
        db.add(rating)
        db.commit()
        db.refresh(rating)

        InsightService.calculate_and_upsert(db, prep.recipe_id)
        return rating

    @staticmethod
    def update_rating(
        db: Session,
        prep_id: int,
        rating_id: int,
        user_id: str,
        overall_rating: int,
        liked: bool = False,
        dimensions: Optional[Dict[str, int]] = None,
        what_worked_well: Optional[str] = None,
        what_to_change: Optional[str] = None,
        additional_notes: Optional[str] = None,
    ) -> Optional[PrepRating]:
        """
        Overwrite a user's rating of a prep and refresh the recipe's insight.

        Returns:
            Updated PrepRating, or None if no such rating by this user exists
        """
        rating = (
            db.query(PrepRating)
            .filter(
                PrepRating.id == rating_id,
                PrepRating.prep_id == prep_id,
                PrepRating.user_id == user_id,
            )
            .first()
        )
        if not rating:
            return None

        RatingService._validate_overall(overall_rating)
        RatingService.validate_dimensions(db, dimensions or {})

        rating.liked = liked
        rating.overall_rating = overall_rating
        rating.dimensions = dict(dimensions or {})
        rating.what_worked_well = what_worked_well
        rating.what_to_change = what_to_change
        rating.additional_notes = additional_notes

        db.commit()
        db.refresh(rating)

        InsightService.calculate_and_upsert(db, rating.prep.recipe_id)
        return rating

    @staticmethod
    def get_prep_ratings(db: Session, prep_id: int) -> List[PrepRating]:
        """Get all ratings of a prep, newest first."""
        return (
            db.query(PrepRating)
            .filter(PrepRating.prep_id == prep_id)
            .order_by(PrepRating.created_at.desc(), PrepRating.id.desc())
            .all()
        )
