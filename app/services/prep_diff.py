"""
Prep diffing: classify a prep's ingredients against its recipe and render
a human-readable change summary.

Everything here is pure. Callers load recipes/preps from the database and
pass plain dataclasses in; nothing in this module touches a Session.
"""

from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Union

from app.models.prep_ingredient import PrepIngredientStatus
from app.models.recipe_ingredient import Unit

NO_CHANGES_SUMMARY = "No changes made from original recipe."
UNKNOWN_INGREDIENT_NAME = "ingredient"

UNIT_ABBREVIATIONS = {
    Unit.WHOLE: "whole",
    Unit.GRAM: "g",
    Unit.KILOGRAM: "kg",
    Unit.MILLILITER: "ml",
}

Quantity = Union[Decimal, int, float]


@dataclass(frozen=True)
class RecipeIngredientLine:
    """Baseline quantity of one ingredient in a recipe."""

    ingredient_id: int
    quantity: Quantity
    unit: Unit


@dataclass(frozen=True)
class PrepIngredientInput:
    """What the cook says they used, before classification."""

    ingredient_id: int
    quantity: Quantity
    unit: Unit
    notes: Optional[str] = None


@dataclass(frozen=True)
class PrepIngredientLine:
    ingredient_id: int
    quantity: Quantity
    unit: Unit
    status: PrepIngredientStatus
    notes: Optional[str] = None


@dataclass(frozen=True)
class Timing:
    """Prep and cook minutes. On a prep either may be None (unchanged)."""

    prep_time_minutes: Optional[int] = None
    cook_time_minutes: Optional[int] = None


def find_duplicate_ingredient_ids(
    lines: Iterable[Union[RecipeIngredientLine, PrepIngredientInput]]
) -> List[int]:
    """Return ingredient ids that appear more than once, in first-seen order."""
    counts = Counter(line.ingredient_id for line in lines)
    return [ingredient_id for ingredient_id, count in counts.items() if count > 1]


def classify(
    prep_lines: Iterable[PrepIngredientInput],
    recipe_lines: Iterable[RecipeIngredientLine],
) -> List[PrepIngredientLine]:
    """
    Tag each prep ingredient as added, kept or modified.

    A prep line whose ingredient is not in the recipe is ADDED. If it is in
    the recipe, it is KEPT when both quantity and unit are exactly equal,
    otherwise MODIFIED. Output order and length match ``prep_lines``.
    """
    # Last line wins on duplicate ids; RecipeService rejects them before they get here
    recipe_lookup = {line.ingredient_id: line for line in recipe_lines}

    classified = []
    for line in prep_lines:
        baseline = recipe_lookup.get(line.ingredient_id)
        if baseline is None:
            status = PrepIngredientStatus.ADDED
        elif baseline.quantity == line.quantity and baseline.unit == line.unit:
            status = PrepIngredientStatus.KEPT
        else:
            status = PrepIngredientStatus.MODIFIED

        classified.append(
            PrepIngredientLine(
                ingredient_id=line.ingredient_id,
                quantity=line.quantity,
                unit=line.unit,
                status=status,
                notes=line.notes,
            )
        )
    return classified


def unit_abbreviation(unit: Unit) -> str:
    """Short display form of a unit ("g", "ml"...), falling back to its lowercase name."""
    if unit in UNIT_ABBREVIATIONS:
        return UNIT_ABBREVIATIONS[unit]
    return getattr(unit, "name", str(unit)).lower()


def format_quantity(quantity: Quantity) -> str:
    """Render a quantity without trailing zeros or exponent notation (100.00 -> "100")."""
    value = quantity if isinstance(quantity, Decimal) else Decimal(str(quantity))
    return format(value.normalize(), "f")


def _format_amount(quantity: Quantity, unit: Unit) -> str:
    return f"{format_quantity(quantity)} {unit_abbreviation(unit)}"


def _name_for(ingredient_id: int, ingredient_names: Mapping[int, str]) -> str:
    return ingredient_names.get(ingredient_id, UNKNOWN_INGREDIENT_NAME)


def _ingredient_changes(
    classified_lines: Iterable[PrepIngredientLine],
    recipe_lines: List[RecipeIngredientLine],
    ingredient_names: Mapping[int, str],
) -> List[str]:
    changes = []
    recipe_lookup: Dict[int, RecipeIngredientLine] = {
        line.ingredient_id: line for line in recipe_lines
    }
    matched = set()

    for line in classified_lines:
        original = recipe_lookup.get(line.ingredient_id)
        if original is not None:
            matched.add(line.ingredient_id)

            # Kept lines are not surfaced, even with notes attached
            if line.status != PrepIngredientStatus.MODIFIED:
                continue

            if original.quantity != line.quantity or original.unit != line.unit:
                name = _name_for(line.ingredient_id, ingredient_names)
                changes.append(
                    f"Modified: {name} "
                    f"({_format_amount(original.quantity, original.unit)} → "
                    f"{_format_amount(line.quantity, line.unit)})"
                )
        elif line.status == PrepIngredientStatus.ADDED:
            changes.append(
                f"Addition: added {_name_for(line.ingredient_id, ingredient_names)}"
            )

    omitted = [
        ingredient_id for ingredient_id in recipe_lookup if ingredient_id not in matched
    ]
    for ingredient_id in omitted:
        changes.append(f"Omission: removed {_name_for(ingredient_id, ingredient_names)}")

    return changes


def _timing_part(label: str, prep_value: Optional[int], recipe_value: Optional[int]) -> Optional[str]:
    if prep_value is None or prep_value == recipe_value:
        return None
    difference = prep_value - (recipe_value or 0)
    action = "increased" if difference > 0 else "decreased"
    return f"{label} time {action} by {abs(difference)} min"


def _timing_change(prep_timing: Timing, recipe_timing: Timing) -> Optional[str]:
    parts = [
        part
        for part in (
            _timing_part("prep", prep_timing.prep_time_minutes, recipe_timing.prep_time_minutes),
            _timing_part("cook", prep_timing.cook_time_minutes, recipe_timing.cook_time_minutes),
        )
        if part
    ]
    if not parts:
        return None
    return "Timing: " + ", ".join(parts)


def summarize(
    classified_lines: Iterable[PrepIngredientLine],
    recipe_lines: Iterable[RecipeIngredientLine],
    prep_timing: Timing,
    recipe_timing: Timing,
    ingredient_names: Mapping[int, str],
) -> str:
    """
    Build the change summary stored on a prep.

    Statements come in a fixed order: modifications and additions (in prep
    order), omissions (in recipe order), then a single timing statement.
    Returns NO_CHANGES_SUMMARY when there is nothing to report.

    Args:
        classified_lines: Output of classify()
        recipe_lines: The recipe's baseline ingredients
        prep_timing: Timing recorded on the prep
        recipe_timing: The recipe's baseline timing
        ingredient_names: ingredient id -> display name; unknown ids render as "ingredient"

    Returns:
        Summary text
    """
    changes = _ingredient_changes(classified_lines, list(recipe_lines), ingredient_names)

    timing_change = _timing_change(prep_timing, recipe_timing)
    if timing_change:
        changes.append(timing_change)

    if not changes:
        return NO_CHANGES_SUMMARY
    return "Changes made:\n" + "\n".join(f"- {change}" for change in changes)
