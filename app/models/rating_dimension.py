from sqlalchemy import Column, Integer, String, Text

from app.database import Base


class RatingDimension(Base):
    """Recognised rating dimension keys (e.g. 'taste'). Ratings may only use these keys."""

    __tablename__ = "rating_dimensions"

    id = Column(Integer, primary_key=True)
    key = Column(String(50), nullable=False, unique=True)
    display_name = Column(String(100), nullable=False)
    description = Column(Text)
    sort_order = Column(Integer, nullable=False, default=0)
