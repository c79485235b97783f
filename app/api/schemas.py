"""
Pydantic request models and response serializers shared by the API routers.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.models import Ingredient, Prep, PrepRating, Recipe, RecipeInsight, Unit
from app.models.recipe_ingredient import QUANTITY_SCALE
from app.services.prep_diff import PrepIngredientInput, RecipeIngredientLine


# =============================================================================
# Request Models
# =============================================================================


class StepRequest(BaseModel):
    order: int = Field(ge=1)
    description: str = Field(min_length=1, max_length=256)


class RecipeIngredientRequest(BaseModel):
    ingredient_id: int
    quantity: Decimal = Field(gt=0, max_digits=18, decimal_places=QUANTITY_SCALE)
    unit: Unit

    def to_line(self) -> RecipeIngredientLine:
        return RecipeIngredientLine(self.ingredient_id, self.quantity, self.unit)


class PrepIngredientRequest(RecipeIngredientRequest):
    notes: Optional[str] = Field(None, max_length=500)

    def to_input(self) -> PrepIngredientInput:
        return PrepIngredientInput(self.ingredient_id, self.quantity, self.unit, self.notes)


# =============================================================================
# Serializers
# =============================================================================


def _steps(steps) -> List[dict]:
    return sorted(steps or [], key=lambda s: s.get("order", 0))


def ingredient_to_dict(ingredient: Ingredient) -> dict:
    return {"id": ingredient.id, "name": ingredient.name}


def recipe_to_dict(recipe: Recipe) -> dict:
    return {
        "id": recipe.id,
        "user_id": recipe.user_id,
        "name": recipe.name,
        "description": recipe.description,
        "prep_time_minutes": recipe.prep_time_minutes,
        "cook_time_minutes": recipe.cook_time_minutes,
        "yield": recipe.yield_text,
        "steps": _steps(recipe.steps),
        "original_recipe_id": recipe.original_recipe_id,
        "is_favorite_variant": recipe.is_favorite_variant,
        "ingredients": [
            {
                "ingredient_id": ri.ingredient_id,
                "name": ri.ingredient.name if ri.ingredient else None,
                "quantity": float(ri.quantity),
                "unit": ri.unit.value,
            }
            for ri in recipe.recipe_ingredients
        ],
    }


def prep_to_dict(prep: Prep) -> dict:
    return {
        "id": prep.id,
        "recipe_id": prep.recipe_id,
        "recipe_name": prep.recipe.name if prep.recipe else None,
        "user_id": prep.user_id,
        "summary_notes": prep.summary_notes,
        "prep_time_minutes": prep.prep_time_minutes,
        "cook_time_minutes": prep.cook_time_minutes,
        "steps": _steps(prep.steps),
        "change_summary": prep.change_summary,
        "created_new_recipe_id": prep.created_new_recipe_id,
        "prepared_at": prep.created_at.isoformat() if prep.created_at else None,
        "ingredients": [
            {
                "ingredient_id": pi.ingredient_id,
                "name": pi.ingredient.name if pi.ingredient else None,
                "quantity": float(pi.quantity),
                "unit": pi.unit.value,
                "notes": pi.notes,
                "status": pi.status.value,
            }
            for pi in prep.prep_ingredients
        ],
    }


def prep_summary_to_dict(prep: Prep) -> dict:
    return {
        "id": prep.id,
        "recipe_name": prep.recipe.name if prep.recipe else None,
        "summary_notes": prep.summary_notes,
        "prepared_at": prep.created_at.isoformat() if prep.created_at else None,
    }


def rating_to_dict(rating: PrepRating) -> dict:
    return {
        "id": rating.id,
        "prep_id": rating.prep_id,
        "user_id": rating.user_id,
        "liked": rating.liked,
        "overall_rating": rating.overall_rating,
        "dimensions": dict(rating.dimensions or {}),
        "what_worked_well": rating.what_worked_well,
        "what_to_change": rating.what_to_change,
        "additional_notes": rating.additional_notes,
        "rated_at": rating.created_at.isoformat() if rating.created_at else None,
    }


def insight_to_dict(insight: RecipeInsight) -> dict:
    last_updated = insight.updated_at or insight.created_at
    return {
        "recipe_id": insight.recipe_id,
        "average_overall_rating": insight.average_overall_rating,
        "total_ratings": insight.total_ratings,
        "total_preparations": insight.total_preparations,
        "dimension_averages": dict(insight.dimension_averages or {}),
        "last_updated": last_updated.isoformat() if last_updated else None,
    }


DimensionScores = Dict[str, int]
