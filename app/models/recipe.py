from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, Boolean, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class Recipe(Base):
    """Baseline dish definition. Variants point back at the recipe they were derived from."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    prep_time_minutes = Column(Integer, nullable=False, default=0)
    cook_time_minutes = Column(Integer, nullable=False, default=0)
    yield_text = Column(String(100))  # Free text, e.g. "4 servings"
    steps = Column(JSON, nullable=False, default=list)  # [{"order": 1, "description": "..."}]
    original_recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True
    )
    is_favorite_variant = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @property
    def is_variant(self) -> bool:
        """Returns True if this recipe was derived from another recipe's prep."""
        return self.original_recipe_id is not None

    # Relationships
    recipe_ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.id",
    )
    preps = relationship(
        "Prep",
        back_populates="recipe",
        cascade="all, delete-orphan",
        foreign_keys="Prep.recipe_id",
    )
    insight = relationship(
        "RecipeInsight", back_populates="recipe", cascade="all, delete-orphan", uselist=False
    )

    __table_args__ = (
        Index("idx_recipes_user_id", "user_id"),
        Index("idx_recipes_original_recipe_id", "original_recipe_id"),
    )
