"""CLI commands for Prep Insights."""

import argparse
import sys

from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.seed_dimensions import seed_dimensions
from app.services.insight_service import InsightService
from app.services.recipe_service import RecipeService


def _print_insight(insight) -> None:
    dims = ", ".join(
        f"{key}={value:.2f}" for key, value in sorted(insight.dimension_averages.items())
    )
    print(
        f"Recipe {insight.recipe_id}: avg={insight.average_overall_rating:.2f} "
        f"ratings={insight.total_ratings} preps={insight.total_preparations}"
        + (f" [{dims}]" if dims else "")
    )


def recompute_insights(recipe_id: int | None = None) -> None:
    """Recompute insights for one recipe, or for every recipe when no id is given."""
    db: Session = SessionLocal()

    try:
        if recipe_id is None:
            insights = InsightService.recompute_all(db)
            for insight in insights:
                _print_insight(insight)
            print(f"Recomputed insights for {len(insights)} recipes.")
            return

        if not RecipeService.get_recipe(db, recipe_id):
            print(f"Error: Recipe {recipe_id} not found.")
            sys.exit(1)

        insight = InsightService.calculate_and_upsert(db, recipe_id)
        if insight is None:
            print(f"Recipe {recipe_id} has no ratings. Insight left unchanged.")
            return

        _print_insight(insight)

    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Prep Insights CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "seed-dimensions", help="Insert the default rating dimensions"
    )

    recompute_parser = subparsers.add_parser(
        "recompute-insights", help="Recompute recipe rating insights"
    )
    recompute_parser.add_argument(
        "--recipe-id", type=int, help="Only recompute this recipe (default: all)"
    )

    args = parser.parse_args()

    if args.command == "seed-dimensions":
        seed_dimensions()
    elif args.command == "recompute-insights":
        recompute_insights(args.recipe_id)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
