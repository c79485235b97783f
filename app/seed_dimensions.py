"""Seed the recognised rating dimensions."""
from app.config import settings
from app.database import SessionLocal
from app.models.rating_dimension import RatingDimension

DIMENSION_DESCRIPTIONS = {
    'taste': 'Flavour and seasoning',
    'texture': 'Mouthfeel, doneness and consistency',
    'appearance': 'How the finished dish looks',
    'ease': 'How easy the recipe was to follow',
}


def seed_dimensions():
    """Add any default rating dimension that is not in the database yet."""
    db = SessionLocal()

    try:
        existing = {key for (key,) in db.query(RatingDimension.key).all()}

        added = 0
        for sort_order, key in enumerate(settings.default_rating_dimensions):
            if key in existing:
                continue
            db.add(
                RatingDimension(
                    key=key,
                    display_name=key.replace('_', ' ').title(),
                    description=DIMENSION_DESCRIPTIONS.get(key),
                    sort_order=sort_order,
                )
            )
            added += 1

        if not added:
            print(f"Rating dimensions already seeded ({len(existing)} existing). Skipping.")
            return

        db.commit()
        print(f"Successfully seeded {added} rating dimensions.")

    except Exception as e:
        print(f"Error seeding rating dimensions: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_dimensions()
