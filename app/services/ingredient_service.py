"""Business logic for the ingredient catalogue."""

from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.models.ingredient import Ingredient


class IngredientService:
    """Service for ingredient lookups and creation."""

    @staticmethod
    def get_or_create(db: Session, name: str) -> Ingredient:
        """
        Find an ingredient by normalized name, creating it if it doesn't exist.

        Args:
            db: Database session
            name: Ingredient display name

        Returns:
            Existing or newly created Ingredient
        """
        if not name or not name.strip():
            raise ValueError("Ingredient name is required")

        normalized_name = Ingredient.normalize_name(name)
        ingredient = (
            db.query(Ingredient)
            .filter(Ingredient.normalized_name == normalized_name)
            .first()
        )
        if ingredient:
            return ingredient

        ingredient = Ingredient(name=name.strip(), normalized_name=normalized_name)
        db.add(ingredient)
        db.commit()
        db.refresh(ingredient)
        return ingredient

    @staticmethod
    def get_ingredient(db: Session, ingredient_id: int) -> Optional[Ingredient]:
        return db.query(Ingredient).filter(Ingredient.id == ingredient_id).first()

    @staticmethod
    def list_ingredients(db: Session, search: Optional[str] = None) -> List[Ingredient]:
        """List ingredients alphabetically, optionally filtered by a name fragment."""
        query = db.query(Ingredient)
        if search:
            query = query.filter(
                Ingredient.normalized_name.contains(Ingredient.normalize_name(search))
            )
        return query.order_by(Ingredient.name).all()

    @staticmethod
    def get_names(db: Session, ingredient_ids: Iterable[int]) -> Dict[int, str]:
        """Map ingredient id -> display name for the given ids (unknown ids are omitted)."""
        ids = set(ingredient_ids)
        if not ids:
            return {}
        rows = db.query(Ingredient.id, Ingredient.name).filter(Ingredient.id.in_(ids)).all()
        return {row.id: row.name for row in rows}

    @staticmethod
    def find_missing_ids(db: Session, ingredient_ids: Iterable[int]) -> List[int]:
        """Return the requested ids that have no ingredient row, sorted."""
        ids = set(ingredient_ids)
        if not ids:
            return []
        found = {
            row.id for row in db.query(Ingredient.id).filter(Ingredient.id.in_(ids)).all()
        }
        return sorted(ids - found)
