from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class Prep(Base):
    """One instance of actually preparing a recipe, with its deviations."""

    __tablename__ = "preps"

    id = Column(Integer, primary_key=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(String(255), nullable=False)
    summary_notes = Column(Text)  # Cook's free-text notes
    prep_time_minutes = Column(Integer)  # None means "same as recipe"
    cook_time_minutes = Column(Integer)
    steps = Column(JSON, nullable=False, default=list)
    change_summary = Column(Text)  # Output of prep_diff.summarize(), recomputed on every update
    created_new_recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True
    )  # Variant recipe created from this prep
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    recipe = relationship("Recipe", back_populates="preps", foreign_keys=[recipe_id])
    created_new_recipe = relationship("Recipe", foreign_keys=[created_new_recipe_id])
    prep_ingredients = relationship(
        "PrepIngredient",
        back_populates="prep",
        cascade="all, delete-orphan",
        order_by="PrepIngredient.id",
    )
    ratings = relationship(
        "PrepRating", back_populates="prep", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_preps_recipe_id", "recipe_id"),
        Index("idx_preps_user_id", "user_id"),
    )
