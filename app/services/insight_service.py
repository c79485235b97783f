"""Recipe insight aggregation: roll every rating of every prep of a recipe into one snapshot."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Protocol, Sequence

from sqlalchemy.orm import Session

from app.models.prep import Prep
from app.models.prep_rating import PrepRating
from app.models.recipe import Recipe
from app.models.recipe_insight import RecipeInsight

logger = logging.getLogger(__name__)


class RatingLike(Protocol):
    overall_rating: int
    dimensions: Mapping[str, int]


@dataclass(frozen=True)
class RatingScore:
    """The parts of a rating the aggregator reads."""

    overall_rating: int
    dimensions: Mapping[str, int] = field(default_factory=dict)


@dataclass
class InsightSnapshot:
    average_overall_rating: float
    total_ratings: int
    total_preparations: int
    dimension_averages: Dict[str, float] = field(default_factory=dict)


def aggregate(
    ratings: Sequence[RatingLike], preparation_count: int
) -> Optional[InsightSnapshot]:
    """
    Compute insight statistics over a recipe's ratings.

    Returns None when there are no ratings, so callers keep whatever insight
    they already stored. Each dimension is averaged only over the ratings
    that include it; a missing dimension does not count as zero.
    """
    if not ratings:
        return None

    dimension_scores: Dict[str, List[int]] = defaultdict(list)
    for rating in ratings:
        for key, score in (rating.dimensions or {}).items():
            dimension_scores[key].append(score)

    return InsightSnapshot(
        average_overall_rating=sum(r.overall_rating for r in ratings) / len(ratings),
        total_ratings=len(ratings),
        total_preparations=preparation_count,
        dimension_averages={
            key: sum(scores) / len(scores) for key, scores in dimension_scores.items()
        },
    )


class InsightService:
    """Service for recipe insight persistence."""

    @staticmethod
    def get_insight(db: Session, recipe_id: int) -> Optional[RecipeInsight]:
        """Get the stored insight for a recipe, if one has been computed."""
        return (
            db.query(RecipeInsight)
            .filter(RecipeInsight.recipe_id == recipe_id)
            .first()
        )

    @staticmethod
    def calculate_and_upsert(db: Session, recipe_id: int) -> Optional[RecipeInsight]:
        """
        Recompute a recipe's insight from all of its ratings and store it.

        Args:
            db: Database session
            recipe_id: Recipe ID

        Returns:
            The created or updated RecipeInsight, or None if the recipe does
            not exist or has no ratings (any stored insight is left as is)
        """
        recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
        if not recipe:
            return None

        preparation_count = db.query(Prep).filter(Prep.recipe_id == recipe_id).count()
        ratings = (
            db.query(PrepRating)
            .join(Prep, PrepRating.prep_id == Prep.id)
            .filter(Prep.recipe_id == recipe_id)
            .all()
        )

        snapshot = aggregate(
            [RatingScore(r.overall_rating, dict(r.dimensions or {})) for r in ratings],
            preparation_count,
        )
        if snapshot is None:
            logger.info("No ratings for recipe %s, insight left unchanged", recipe_id)
            return None

        insight = InsightService.get_insight(db, recipe_id)
        if insight is None:
            insight = RecipeInsight(recipe_id=recipe_id)
            db.add(insight)

        insight.average_overall_rating = snapshot.average_overall_rating
        insight.total_ratings = snapshot.total_ratings
        insight.total_preparations = snapshot.total_preparations
        insight.dimension_averages = snapshot.dimension_averages

        db.commit()
        db.refresh(insight)

        logger.info(
            "Recomputed insight for recipe %s: avg=%.2f ratings=%d preps=%d",
            recipe_id,
            insight.average_overall_rating,
            insight.total_ratings,
            insight.total_preparations,
        )
        return insight

    @staticmethod
    def recompute_all(db: Session) -> List[RecipeInsight]:
        """Recompute insights for every recipe; recipes without ratings are skipped."""
        insights = []
        for (recipe_id,) in db.query(Recipe.id).order_by(Recipe.id).all():
            insight = InsightService.calculate_and_upsert(db, recipe_id)
            if insight is not None:
                insights.append(insight)
        return insights
