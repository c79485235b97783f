"""Business logic for recipes and recipe variants."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from app.models.prep import Prep
from app.models.recipe import Recipe
from app.models.recipe_ingredient import QUANTITY_SCALE, RecipeIngredient
from app.services.ingredient_service import IngredientService
from app.services.prep_diff import RecipeIngredientLine, Timing, find_duplicate_ingredient_ids

logger = logging.getLogger(__name__)


def validate_quantity_scale(lines: Iterable) -> None:
    """
    Reject quantities with more decimal places than the database stores.

    Stored quantities must equal the ones that were classified.

    Raises:
        ValueError: naming the first offending quantity
    """
    for line in lines:
        if -line.quantity.normalize().as_tuple().exponent > QUANTITY_SCALE:
            raise ValueError(
                f"Quantity {line.quantity} for ingredient {line.ingredient_id} "
                f"has more than {QUANTITY_SCALE} decimal places"
            )


def _validate_ingredient_lines(db: Session, lines: Sequence[RecipeIngredientLine]) -> None:
    duplicates = find_duplicate_ingredient_ids(lines)
    if duplicates:
        raise ValueError(f"Duplicate ingredient ids in recipe: {duplicates}")

    validate_quantity_scale(lines)

    missing = IngredientService.find_missing_ids(db, [line.ingredient_id for line in lines])
    if missing:
        raise ValueError(f"Unknown ingredient ids: {missing}")


def _build_recipe_ingredients(lines: Sequence[RecipeIngredientLine]) -> List[RecipeIngredient]:
    return [
        RecipeIngredient(
            ingredient_id=line.ingredient_id,
            quantity=line.quantity,
            unit=line.unit,
        )
        for line in lines
    ]


def _unflag_favorites(db: Session, original_recipe_id: int) -> None:
    """An original recipe has at most one favorite variant."""
    favorites = (
        db.query(Recipe)
        .filter(
            Recipe.original_recipe_id == original_recipe_id,
            Recipe.is_favorite_variant.is_(True),
        )
        .all()
    )
    for favorite in favorites:
        favorite.is_favorite_variant = False


class RecipeService:
    """Service for recipe-related operations."""

    @staticmethod
    def create_recipe(
        db: Session,
        user_id: str,
        name: str,
        ingredients: Sequence[RecipeIngredientLine],
        steps: Optional[List[Dict[str, Any]]] = None,
        description: str = "",
        prep_time_minutes: int = 0,
        cook_time_minutes: int = 0,
        yield_text: Optional[str] = None,
    ) -> Recipe:
        """
        Create a recipe with its baseline ingredient list.

        Args:
            db: Database session
            user_id: Owner of the recipe
            name: Recipe name
            ingredients: Baseline ingredient lines (one per ingredient id)
            steps: Ordered steps, e.g. [{"order": 1, "description": "Mix"}]
            description: Free-text description
            prep_time_minutes: Baseline prep time
            cook_time_minutes: Baseline cook time
            yield_text: Free-text yield, e.g. "4 servings"

        Returns:
            Created Recipe object

        Raises:
            ValueError: if an ingredient id repeats or does not exist, or a quantity
                has more decimal places than are stored
        """
        _validate_ingredient_lines(db, ingredients)

        recipe = Recipe(
            user_id=user_id,
            name=name,
            description=description,
            prep_time_minutes=prep_time_minutes,
            cook_time_minutes=cook_time_minutes,
            yield_text=yield_text,
            steps=steps or [],
            recipe_ingredients=_build_recipe_ingredients(ingredients),
        )
        db.add(recipe)
        db.commit()
        db.refresh(recipe)
        return recipe

    @staticmethod
    def update_recipe(
        db: Session,
        recipe_id: int,
        name: str,
        ingredients: Sequence[RecipeIngredientLine],
        steps: Optional[List[Dict[str, Any]]] = None,
        description: str = "",
        prep_time_minutes: int = 0,
        cook_time_minutes: int = 0,
        yield_text: Optional[str] = None,
    ) -> Optional[Recipe]:
        """Replace a recipe's fields and ingredient list. Returns None if not found."""
        recipe = RecipeService.get_recipe(db, recipe_id)
        if not recipe:
            return None

        _validate_ingredient_lines(db, ingredients)

        recipe.name = name
        recipe.description = description
        recipe.prep_time_minutes = prep_time_minutes
        recipe.cook_time_minutes = cook_time_minutes
        recipe.yield_text = yield_text
        recipe.steps = steps or []

        # Flush deletes first so re-added ingredients don't trip the unique constraint
        recipe.recipe_ingredients.clear()
        db.flush()
        recipe.recipe_ingredients.extend(_build_recipe_ingredients(ingredients))

        db.commit()
        db.refresh(recipe)
        return recipe

    @staticmethod
    def get_recipe(db: Session, recipe_id: int) -> Optional[Recipe]:
        """Get a recipe by ID."""
        return db.query(Recipe).filter(Recipe.id == recipe_id).first()

    @staticmethod
    def delete_recipe(db: Session, recipe_id: int) -> bool:
        """
        Delete a recipe along with its preps, ratings and insight.

        Preps that were saved as this recipe lose their link to it.

        Returns:
            True if deleted, False if not found
        """
        recipe = RecipeService.get_recipe(db, recipe_id)
        if recipe:
            db.query(Prep).filter(Prep.created_new_recipe_id == recipe.id).update(
                {Prep.created_new_recipe_id: None}, synchronize_session="fetch"
            )
            db.delete(recipe)
            db.commit()
            return True
        return False

    @staticmethod
    def to_ingredient_lines(recipe: Recipe) -> List[RecipeIngredientLine]:
        """Materialize a recipe's ingredients as plain lines for prep_diff."""
        return [
            RecipeIngredientLine(
                ingredient_id=ri.ingredient_id,
                quantity=ri.quantity,
                unit=ri.unit,
            )
            for ri in recipe.recipe_ingredients
        ]

    @staticmethod
    def to_timing(recipe: Recipe) -> Timing:
        return Timing(
            prep_time_minutes=recipe.prep_time_minutes,
            cook_time_minutes=recipe.cook_time_minutes,
        )

    @staticmethod
    def create_variant_from_prep(
        db: Session,
        prep_id: int,
        name: str,
        set_as_favorite: bool = False,
        user_id: Optional[str] = None,
    ) -> Optional[Recipe]:
        """
        Turn a prep into a new recipe derived from the prep's recipe.

        The variant takes the prep's ingredients and steps, and the prep's
        timing where recorded (the original recipe's timing otherwise). When
        set_as_favorite is True, any existing favorite variant of the same
        original recipe is unflagged.

        Args:
            db: Database session
            prep_id: Prep to copy from
            name: Name of the new recipe
            set_as_favorite: Mark the variant as the favorite of its original
            user_id: Owner of the variant (defaults to the prep's cook)

        Returns:
            Created Recipe, or None if the prep does not exist

        Raises:
            ValueError: if the prep lists the same ingredient twice
        """
        prep = db.query(Prep).filter(Prep.id == prep_id).first()
        if not prep:
            return None

        duplicates = find_duplicate_ingredient_ids(prep.prep_ingredients)
        if duplicates:
            raise ValueError(
                f"Prep uses ingredient ids more than once, cannot build a recipe: {duplicates}"
            )

        original = prep.recipe
        owner = user_id or prep.user_id

        if set_as_favorite:
            _unflag_favorites(db, original.id)

        variant = Recipe(
            user_id=owner,
            name=name,
            description=original.description,
            prep_time_minutes=(
                prep.prep_time_minutes
                if prep.prep_time_minutes is not None
                else original.prep_time_minutes
            ),
            cook_time_minutes=(
                prep.cook_time_minutes
                if prep.cook_time_minutes is not None
                else original.cook_time_minutes
            ),
            yield_text=original.yield_text,
            steps=list(prep.steps or []),
            original_recipe_id=original.id,
            is_favorite_variant=set_as_favorite,
            recipe_ingredients=[
                RecipeIngredient(
                    ingredient_id=pi.ingredient_id,
                    quantity=pi.quantity,
                    unit=pi.unit,
                )
                for pi in prep.prep_ingredients
            ],
        )
        db.add(variant)
        db.flush()

        prep.created_new_recipe_id = variant.id
        db.commit()
        db.refresh(variant)

        logger.info(
            "Created variant recipe %s from prep %s (original recipe %s)",
            variant.id,
            prep.id,
            original.id,
        )
        return variant

    @staticmethod
    def set_favorite_variant(db: Session, recipe_id: int) -> Optional[Recipe]:
        """
        Mark a variant as the favorite of its original recipe.

        The previous favorite of the same original, if any, is unflagged.

        Returns:
            Updated Recipe, or None if the recipe does not exist or is not a variant
        """
        variant = RecipeService.get_recipe(db, recipe_id)
        if not variant or not variant.is_variant:
            return None

        _unflag_favorites(db, variant.original_recipe_id)
        variant.is_favorite_variant = True

        db.commit()
        db.refresh(variant)

        logger.info(
            "Recipe %s is now the favorite variant of recipe %s",
            variant.id,
            variant.original_recipe_id,
        )
        return variant
