"""PrepRating model: one user's rating of one prep."""
from sqlalchemy import Column, Integer, String, ForeignKey, Text, DateTime, Boolean, Index, UniqueConstraint, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class PrepRating(Base):
    """Overall score plus per-dimension scores for a prep."""

    __tablename__ = "prep_ratings"

    id = Column(Integer, primary_key=True, index=True)
    prep_id = Column(Integer, ForeignKey("preps.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(255), nullable=False)

    liked = Column(Boolean, nullable=False, default=False)
    overall_rating = Column(Integer, nullable=False, default=1)  # 1-5
    dimensions = Column(JSON, nullable=False, default=dict)  # {"taste": 4, "texture": 5}
    what_worked_well = Column(Text, nullable=True)
    what_to_change = Column(Text, nullable=True)
    additional_notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    prep = relationship("Prep", back_populates="ratings")

    __table_args__ = (
        Index('idx_prep_ratings_prep_id', 'prep_id'),
        UniqueConstraint('prep_id', 'user_id', name='uq_prep_rating_user'),
    )

    def __repr__(self):
        return f"<PrepRating(id={self.id}, prep={self.prep_id}, overall={self.overall_rating})>"
