"""Turning a catalog combination into the plan document that gets persisted."""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from budgetmeal.domain.MealCombination import MealCombination
from budgetmeal.domain.Plan import GeneratedPlan, PlannedMeal
from budgetmeal.domain.errors import ValidationError
from budgetmeal.utilities.constants import MEAL_SLOTS, SLOT_CALORIES, SLOT_INSTRUCTIONS

__all__ = ["format_plan", "recompute_after_meal_removal"]


def _iso_now(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_plan(combo: MealCombination, now: Optional[datetime] = None,
                catalog_backed: bool = True) -> GeneratedPlan:
    """Build the three-meal plan for `combo`.

    Calories are fixed per slot (SLOT_CALORIES), not derived from the dishes.
    The ingredient list holds a single stub entry naming the dish and its price.
    """
    meals = tuple(
        PlannedMeal(
            type=slot,
            name=item.name,
            cost=item.price,
            calories=SLOT_CALORIES[slot],
            ingredients=({"name": item.name, "cost": item.price},),
            instructions=SLOT_INSTRUCTIONS[slot],
        )
        for slot, item in zip(MEAL_SLOTS, combo.items)
    )
    return GeneratedPlan(
        date=_iso_now(now),
        total_estimated_cost=sum(m.cost for m in meals),
        total_calories=sum(m.calories for m in meals),
        meals=meals,
        meal_id=combo.id if catalog_backed else None,
    )


def recompute_after_meal_removal(plan: GeneratedPlan, removed_meal_index: int) -> GeneratedPlan:
    """Return a copy of `plan` without one meal, totals summed again from what remains.

    Refuses (ValidationError) to remove the last meal or an index that does not exist.
    The input plan is never modified.
    """
    count = len(plan.meals)
    if isinstance(removed_meal_index, bool) or not isinstance(removed_meal_index, int):
        raise ValidationError(f"Meal index must be an integer, got {removed_meal_index!r}")
    if not 0 <= removed_meal_index < count:
        raise ValidationError(f"Meal index {removed_meal_index} out of range (plan has {count} meals)")
    if count <= 1:
        raise ValidationError("Cannot remove the last meal of a plan")
    remaining = plan.meals[:removed_meal_index] + plan.meals[removed_meal_index + 1:]
    return GeneratedPlan(
        date=plan.date,
        total_estimated_cost=sum(m.cost for m in remaining),
        total_calories=sum(m.calories for m in remaining),
        meals=remaining,
        meal_id=plan.meal_id,
    )
