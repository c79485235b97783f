"""
Factory functions for creating test data.

These factories create model instances with sensible defaults and bypass the
service layer (no classification, no insight recompute) unless stated.
Use db.flush() to get IDs without committing (for transaction rollback).
"""

from decimal import Decimal
from typing import Dict, List, Optional, Tuple
import secrets

from sqlalchemy.orm import Session

from app.models import (
    Ingredient,
    Prep,
    PrepIngredient,
    PrepIngredientStatus,
    PrepRating,
    Recipe,
    RecipeIngredient,
    Unit,
)


# =============================================================================
# Ingredient Factory
# =============================================================================


def create_ingredient(
    db: Session,
    name: Optional[str] = None,
    normalized_name: Optional[str] = None,
    **overrides,
) -> Ingredient:
    """
    Create an ingredient.

    Args:
        db: Database session
        name: Ingredient name (auto-generated if not provided)
        normalized_name: Normalized name (derived from name if not provided)
        **overrides: Additional fields to override

    Returns:
        Created Ingredient object
    """
    if name is None:
        name = f"Ingredient_{secrets.token_hex(4)}"

    if normalized_name is None:
        normalized_name = Ingredient.normalize_name(name)

    defaults = {
        "name": name,
        "normalized_name": normalized_name,
    }
    defaults.update(overrides)

    ingredient = Ingredient(**defaults)
    db.add(ingredient)
    db.flush()
    return ingredient


# =============================================================================
# Recipe Factory
# =============================================================================


def create_recipe(
    db: Session,
    ingredients: Optional[List[Tuple[Ingredient, str, Unit]]] = None,
    name: Optional[str] = None,
    user_id: str = "cook-1",
    prep_time_minutes: int = 10,
    cook_time_minutes: int = 20,
    **overrides,
) -> Recipe:
    """
    Create a recipe.

    Args:
        db: Database session
        ingredients: (ingredient, quantity, unit) triples for the baseline
        name: Recipe name (auto-generated if not provided)
        user_id: Owner
        prep_time_minutes: Baseline prep time
        cook_time_minutes: Baseline cook time
        **overrides: Additional fields to override

    Returns:
        Created Recipe object
    """
    defaults = {
        "user_id": user_id,
        "name": name or f"Recipe_{secrets.token_hex(4)}",
        "description": "A test recipe",
        "prep_time_minutes": prep_time_minutes,
        "cook_time_minutes": cook_time_minutes,
        "steps": [{"order": 1, "description": "Mix everything"}],
    }
    defaults.update(overrides)

    recipe = Recipe(**defaults)
    for ingredient, quantity, unit in ingredients or []:
        recipe.recipe_ingredients.append(
            RecipeIngredient(
                ingredient_id=ingredient.id, quantity=Decimal(quantity), unit=unit
            )
        )
    db.add(recipe)
    db.flush()
    return recipe


# =============================================================================
# Prep Factory
# =============================================================================


def create_prep(
    db: Session,
    recipe: Recipe,
    ingredients: Optional[
        List[Tuple[Ingredient, str, Unit, PrepIngredientStatus]]
    ] = None,
    user_id: str = "cook-1",
    **overrides,
) -> Prep:
    """
    Create a prep row directly, with statuses supplied by the caller.

    Args:
        db: Database session
        recipe: Recipe that was prepared
        ingredients: (ingredient, quantity, unit, status) tuples
        user_id: Cook
        **overrides: Additional fields to override

    Returns:
        Created Prep object
    """
    defaults = {
        "recipe_id": recipe.id,
        "user_id": user_id,
        "steps": [],
        "change_summary": None,
    }
    defaults.update(overrides)

    prep = Prep(**defaults)
    for ingredient, quantity, unit, status in ingredients or []:
        prep.prep_ingredients.append(
            PrepIngredient(
                ingredient_id=ingredient.id,
                quantity=Decimal(quantity),
                unit=unit,
                status=status,
            )
        )
    db.add(prep)
    db.flush()
    return prep


# =============================================================================
# Rating Factory
# =============================================================================


def create_rating(
    db: Session,
    prep: Prep,
    overall_rating: int = 4,
    dimensions: Optional[Dict[str, int]] = None,
    user_id: Optional[str] = None,
    **overrides,
) -> PrepRating:
    """
    Create a prep rating without recomputing the recipe insight.

    Args:
        db: Database session
        prep: Prep being rated
        overall_rating: Overall score
        dimensions: Per-dimension scores
        user_id: Rating author (auto-generated if not provided)
        **overrides: Additional fields to override

    Returns:
        Created PrepRating object
    """
    defaults = {
        "prep_id": prep.id,
        "user_id": user_id or f"rater_{secrets.token_hex(4)}",
        "overall_rating": overall_rating,
        "dimensions": dimensions or {},
        "liked": overall_rating >= 4,
    }
    defaults.update(overrides)

    rating = PrepRating(**defaults)
    db.add(rating)
    db.flush()
    return rating
