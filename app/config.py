from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Prep Insights"
    database_url: str = "sqlite:///./prep_insights.db"

    log_level: str = "INFO"

    # Overall rating scale (inclusive)
    rating_min: int = 1
    rating_max: int = 5

    # Dimension keys seeded by `cli seed-dimensions`
    default_rating_dimensions: List[str] = [
        "taste",
        "texture",
        "appearance",
        "ease",
    ]

    class Config:
        env_file = ".env"


settings = Settings()
