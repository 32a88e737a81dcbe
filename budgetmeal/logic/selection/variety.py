"""Variety: steer away from recently served combinations without starving the pool."""
from __future__ import annotations
from typing import Iterable, List, Sequence

from budgetmeal.domain.MealCombination import MealCombination, MealId
from budgetmeal.utilities.config import VARIETY_WINDOW

__all__ = ["exclude_recent"]


def exclude_recent(candidates: Sequence[MealCombination], recent_ids: Iterable[MealId] | None,
                   window: int = VARIETY_WINDOW) -> List[MealCombination]:
    """Drop candidates served within the last `window` plans.

    `recent_ids` is ordered most-recent-first. If every candidate was served
    recently the original list comes back unchanged.
    """
    candidates = list(candidates)
    if window <= 0 or not recent_ids:
        return candidates
    recent = []
    for meal_id in recent_ids:
        if len(recent) >= window:
            break
        recent.append(meal_id)
    blocked = {str(i) for i in recent if i is not None}
    kept = [c for c in candidates if str(c.id) not in blocked]
    return kept or candidates
