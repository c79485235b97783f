from sqlalchemy import Column, Integer, ForeignKey, Enum, Numeric, Index, UniqueConstraint
from sqlalchemy.orm import relationship
import enum

from app.database import Base


QUANTITY_SCALE = 2  # Decimal places stored for every quantity


class Unit(str, enum.Enum):
    """Closed set of measurement units. Quantities are never converted between units."""
    WHOLE = "whole"
    GRAM = "gram"
    KILOGRAM = "kilogram"
    MILLILITER = "milliliter"


class RecipeIngredient(Base):
    """Baseline quantity of one ingredient within a recipe."""
    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True)
    recipe_id = Column(Integer, ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False)
    ingredient_id = Column(Integer, ForeignKey('ingredients.id', ondelete='CASCADE'), nullable=False)
    quantity = Column(Numeric(18, QUANTITY_SCALE), nullable=False)
    unit = Column(Enum(Unit), nullable=False)

    # Relationships
    recipe = relationship("Recipe", back_populates="recipe_ingredients")
    ingredient = relationship("Ingredient")

    __table_args__ = (
        UniqueConstraint('recipe_id', 'ingredient_id', name='uq_recipe_ingredient'),
        Index('idx_recipe_ingredients_recipe_id', 'recipe_id'),
    )
