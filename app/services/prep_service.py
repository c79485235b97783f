"""Business logic for preps: storing what the cook actually did and why it differs."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from app.models.prep import Prep
from app.models.prep_ingredient import PrepIngredient
from app.models.recipe import Recipe
from app.services.ingredient_service import IngredientService
from app.services.insight_service import InsightService
from app.services.prep_diff import (
    PrepIngredientInput,
    PrepIngredientLine,
    Timing,
    classify,
    summarize,
)
from app.services.recipe_service import RecipeService, validate_quantity_scale

logger = logging.getLogger(__name__)


def _validate_prep_ingredients(
    db: Session, ingredients: Sequence[PrepIngredientInput]
) -> None:
    validate_quantity_scale(ingredients)

    missing = IngredientService.find_missing_ids(db, [i.ingredient_id for i in ingredients])
    if missing:
        logger.warning("Rejected prep with unknown ingredient ids %s", missing)
        raise ValueError(f"Unknown ingredient ids: {missing}")


def _build_prep_ingredients(
    ingredients: Sequence[PrepIngredientInput], recipe: Recipe
) -> List[PrepIngredient]:
    classified = classify(ingredients, RecipeService.to_ingredient_lines(recipe))
    return [
        PrepIngredient(
            ingredient_id=line.ingredient_id,
            quantity=line.quantity,
            unit=line.unit,
            notes=line.notes,
            status=line.status,
        )
        for line in classified
    ]


class PrepService:
    """Service for prep-related operations."""

    @staticmethod
    def build_change_summary(db: Session, prep: Prep, recipe: Recipe) -> str:
        """
        Render the change summary for a prep against its recipe.

        Reads the prep's stored (already classified) ingredient lines and
        resolves display names for both prep and recipe ingredients.
        """
        recipe_lines = RecipeService.to_ingredient_lines(recipe)
        prep_lines = [
            PrepIngredientLine(
                ingredient_id=pi.ingredient_id,
                quantity=pi.quantity,
                unit=pi.unit,
                status=pi.status,
                notes=pi.notes,
            )
            for pi in prep.prep_ingredients
        ]
        names = IngredientService.get_names(
            db,
            [line.ingredient_id for line in prep_lines]
            + [line.ingredient_id for line in recipe_lines],
        )
        return summarize(
            prep_lines,
            recipe_lines,
            Timing(prep.prep_time_minutes, prep.cook_time_minutes),
            RecipeService.to_timing(recipe),
            names,
        )

    @staticmethod
    def create_prep(
        db: Session,
        recipe_id: int,
        user_id: str,
        ingredients: Sequence[PrepIngredientInput],
        steps: Optional[List[Dict[str, Any]]] = None,
        summary_notes: Optional[str] = None,
        prep_time_minutes: Optional[int] = None,
        cook_time_minutes: Optional[int] = None,
    ) -> Optional[Prep]:
        """
        Record a prep of a recipe, classifying its ingredients and storing the change summary.

        Args:
            db: Database session
            recipe_id: Recipe that was prepared
            user_id: Cook who prepared it
            ingredients: Ingredients actually used
            steps: Steps actually followed
            summary_notes: Cook's free-text notes
            prep_time_minutes: Actual prep time (None = as per recipe)
            cook_time_minutes: Actual cook time (None = as per recipe)

        Returns:
            Created Prep, or None if the recipe does not exist

        Raises:
            ValueError: if an ingredient id does not exist or a quantity has
                more decimal places than are stored
        """
        recipe = RecipeService.get_recipe(db, recipe_id)
        if not recipe:
            return None

        _validate_prep_ingredients(db, ingredients)

        prep = Prep(
            recipe_id=recipe.id,
            user_id=user_id,
            summary_notes=summary_notes,
            prep_time_minutes=prep_time_minutes,
            cook_time_minutes=cook_time_minutes,
            steps=steps or [],
            prep_ingredients=_build_prep_ingredients(ingredients, recipe),
        )
        prep.change_summary = PrepService.build_change_summary(db, prep, recipe)

        db.add(prep)
        db.commit()
        db.refresh(prep)
        return prep

    @staticmethod
    def update_prep(
        db: Session,
        prep_id: int,
        ingredients: Sequence[PrepIngredientInput],
        steps: Optional[List[Dict[str, Any]]] = None,
        summary_notes: Optional[str] = None,
        prep_time_minutes: Optional[int] = None,
        cook_time_minutes: Optional[int] = None,
    ) -> Optional[Prep]:
        """
        Replace a prep's details and ingredients, then reclassify and re-summarize.

        Returns:
            Updated Prep, or None if not found
        """
        prep = PrepService.get_prep(db, prep_id)
        if not prep:
            return None

        _validate_prep_ingredients(db, ingredients)

        prep.summary_notes = summary_notes
        prep.prep_time_minutes = prep_time_minutes
        prep.cook_time_minutes = cook_time_minutes
        prep.steps = steps or []

        prep.prep_ingredients.clear()
        db.flush()
        prep.prep_ingredients.extend(_build_prep_ingredients(ingredients, prep.recipe))
        prep.change_summary = PrepService.build_change_summary(db, prep, prep.recipe)

        db.commit()
        db.refresh(prep)
        return prep

    @staticmethod
    def get_prep(db: Session, prep_id: int) -> Optional[Prep]:
        """Get a prep by ID."""
        return db.query(Prep).filter(Prep.id == prep_id).first()

    @staticmethod
    def get_recipe_preps(db: Session, recipe_id: int) -> List[Prep]:
        """Get all preps of a recipe, newest first."""
        return (
            db.query(Prep)
            .filter(Prep.recipe_id == recipe_id)
            .order_by(Prep.created_at.desc(), Prep.id.desc())
            .all()
        )

    @staticmethod
    def delete_prep(db: Session, prep_id: int) -> bool:
        """
        Delete a prep and its ratings, then refresh the recipe's insight.

        Returns:
            True if deleted, False if not found
        """
        prep = PrepService.get_prep(db, prep_id)
        if not prep:
            return False

        recipe_id = prep.recipe_id
        db.delete(prep)
        db.commit()

        InsightService.calculate_and_upsert(db, recipe_id)
        return True
