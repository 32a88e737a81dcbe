"""Plan generation pipeline: catalog -> budget filter -> variety -> selection -> formatting.

Everything the pipeline needs comes in as arguments (catalog, strategy, random
source, clock), nothing is read from module state.
"""
from __future__ import annotations
import logging
import random
from datetime import datetime
from typing import Optional, Sequence

from budgetmeal.domain.Catalog import Catalog, classify_tier
from budgetmeal.domain.MealCombination import MealCombination, MealId
from budgetmeal.domain.Plan import GeneratedPlan
from budgetmeal.domain.UserProfile import UserProfile
from budgetmeal.logic.planning.formatter import format_plan
from budgetmeal.logic.selection.budget_filter import daily_ceiling, fallback_cheapest, filter_affordable
from budgetmeal.logic.selection.selector import LocalStrategy, PlanSelector
from budgetmeal.logic.selection.variety import exclude_recent
from budgetmeal.utilities.config import BUDGET_TOLERANCE, VARIETY_WINDOW
from budgetmeal.utilities.constants import FALLBACK_COMBINATION

logger = logging.getLogger(__name__)

__all__ = ["candidate_pool", "generate_plan"]


def _staple_combination() -> MealCombination:
    return MealCombination.from_dict(FALLBACK_COMBINATION, classify_tier(FALLBACK_COMBINATION["total"]))


def candidate_pool(catalog: Catalog, profile: UserProfile, recent_ids: Sequence[MealId] = (),
                   tolerance: float = BUDGET_TOLERANCE, window: int = VARIETY_WINDOW):
    """Affordable, variety-filtered candidates. Non-empty for any non-empty catalog."""
    affordable = filter_affordable(catalog, profile.monthly_budget, tolerance)
    if not affordable:
        cheapest = fallback_cheapest(catalog)
        if cheapest is None:
            return []
        logger.warning(
            "No combination fits a daily ceiling of %.2f; falling back to cheapest #%s (%.2f)",
            daily_ceiling(profile.monthly_budget), cheapest.id, cheapest.total,
        )
        return [cheapest]
    return exclude_recent(affordable, recent_ids, window)


def generate_plan(catalog: Catalog, profile: Optional[UserProfile] = None,
                  recent_ids: Sequence[MealId] = (), strategy=None,
                  rng: Optional[random.Random] = None, now: Optional[datetime] = None,
                  tolerance: float = BUDGET_TOLERANCE, window: int = VARIETY_WINDOW) -> GeneratedPlan:
    """Generate one day's plan for `profile`.

    An empty catalog still yields a plan built from the staple combination;
    that plan carries no mealId because it is not catalog-backed.
    """
    profile = profile or UserProfile()
    recent_ids = list(recent_ids or [])
    candidates = candidate_pool(catalog, profile, recent_ids, tolerance, window)
    if not candidates:
        logger.warning("Meal catalog is empty; using the staple combination")
        return format_plan(_staple_combination(), now=now, catalog_backed=False)

    selector = PlanSelector(strategy or LocalStrategy(rng))
    chosen = selector.select(candidates, profile, recent_ids)
    plan = format_plan(chosen, now=now)
    logger.info("Generated plan from combination #%s (%.2f ETB)", chosen.id, plan.total_estimated_cost)
    return plan
