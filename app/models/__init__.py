"""
Database models for Prep Insights.

Import all models here so Alembic can detect them for migrations.
"""

from app.database import Base
from app.models.ingredient import Ingredient
from app.models.recipe import Recipe
from app.models.recipe_ingredient import RecipeIngredient, Unit
from app.models.prep import Prep
from app.models.prep_ingredient import PrepIngredient, PrepIngredientStatus
from app.models.prep_rating import PrepRating
from app.models.rating_dimension import RatingDimension
from app.models.recipe_insight import RecipeInsight

__all__ = [
    "Base",
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
    "Unit",
    "Prep",
    "PrepIngredient",
    "PrepIngredientStatus",
    "PrepRating",
    "RatingDimension",
    "RecipeInsight",
]
