from sqlalchemy import Column, Integer, String, ForeignKey, Enum, Numeric, Index
from sqlalchemy.orm import relationship
import enum

from app.database import Base
from app.models.recipe_ingredient import QUANTITY_SCALE, Unit


class PrepIngredientStatus(str, enum.Enum):
    """How a prep's ingredient usage relates to the recipe baseline."""
    ADDED = "added"
    KEPT = "kept"
    MODIFIED = "modified"


class PrepIngredient(Base):
    """Ingredient actually used in a prep, tagged with its status against the recipe."""
    __tablename__ = "prep_ingredients"

    id = Column(Integer, primary_key=True)
    prep_id = Column(Integer, ForeignKey('preps.id', ondelete='CASCADE'), nullable=False)
    ingredient_id = Column(Integer, ForeignKey('ingredients.id', ondelete='CASCADE'), nullable=False)
    quantity = Column(Numeric(18, QUANTITY_SCALE), nullable=False)
    unit = Column(Enum(Unit), nullable=False)
    notes = Column(String(500))
    status = Column(Enum(PrepIngredientStatus), nullable=False)  # Always computed by classify()

    # Relationships
    prep = relationship("Prep", back_populates="prep_ingredients")
    ingredient = relationship("Ingredient")

    __table_args__ = (
        Index('idx_prep_ingredients_prep_id', 'prep_id'),
        Index('idx_prep_ingredients_ingredient_id', 'ingredient_id'),
    )
