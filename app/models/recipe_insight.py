from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class RecipeInsight(Base):
    """Aggregated rating statistics for one recipe. Overwritten in full on every recompute."""

    __tablename__ = "recipe_insights"

    id = Column(Integer, primary_key=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    average_overall_rating = Column(Float, nullable=False)
    total_ratings = Column(Integer, nullable=False)
    total_preparations = Column(Integer, nullable=False)
    dimension_averages = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    recipe = relationship("Recipe", back_populates="insight")
