from sqlalchemy import Column, Integer, String, DateTime, Index
from sqlalchemy.sql import func

from app.database import Base


class Ingredient(Base):
    """Ingredient master table; recipes and preps reference rows by id."""
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)  # Display name used in change summaries
    normalized_name = Column(String(255), nullable=False, unique=True)  # Lowercase, underscores for matching
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        Index('idx_ingredients_normalized_name', 'normalized_name'),
    )

    @staticmethod
    def normalize_name(name: str) -> str:
        """Normalize ingredient name for consistent matching."""
        return name.lower().strip().replace(" ", "_").replace("-", "_")
