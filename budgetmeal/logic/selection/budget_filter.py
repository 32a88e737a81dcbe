"""Affordability filtering against a monthly budget."""
from __future__ import annotations
from typing import Iterable, List, Optional

from budgetmeal.domain.MealCombination import MealCombination, id_sort_key
from budgetmeal.utilities.config import BUDGET_TOLERANCE
from budgetmeal.utilities.constants import DAYS_PER_MONTH

__all__ = ["daily_ceiling", "filter_affordable", "fallback_cheapest"]


def daily_ceiling(monthly_budget: float | None) -> float:
    """Per-day spending ceiling; a missing or non-positive budget gives 0."""
    if not monthly_budget or monthly_budget <= 0:
        return 0.0
    return monthly_budget / DAYS_PER_MONTH


def filter_affordable(catalog: Iterable[MealCombination], monthly_budget: float | None,
                      tolerance: float = BUDGET_TOLERANCE) -> List[MealCombination]:
    """Return combinations whose total is <= daily ceiling * tolerance, in catalog order.

    With a zero ceiling only combinations that cost exactly 0 pass.
    """
    limit = daily_ceiling(monthly_budget) * tolerance
    return [c for c in catalog if c.total <= limit]


def fallback_cheapest(catalog: Iterable[MealCombination]) -> Optional[MealCombination]:
    """Cheapest combination (ties -> lowest id), or None when the catalog is empty."""
    combos = list(catalog)
    if not combos:
        return None
    return min(combos, key=lambda c: (c.total, id_sort_key(c.id)))
