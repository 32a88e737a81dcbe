"""Day analysis: a 1-10 nutritional value score with a short rationale.

The local heuristic only looks at total calories and total cost. When a
text-generation callable is supplied it is asked first; anything unusable in
its reply falls back to the heuristic, so `analyze` never raises.
"""
from __future__ import annotations
import json
import logging
from typing import Callable, Optional

from budgetmeal.domain.Plan import AnalysisResult, GeneratedPlan
from budgetmeal.domain.errors import ExternalServiceFailure
from budgetmeal.utilities.config import LOW_COST_THRESHOLD
from budgetmeal.utilities.constants import (
    ACCEPTABLE_CALORIES, ANALYSIS_PROMPT_TEMPLATE, BASE_SCORE, GENERIC_SUMMARY,
    HEALTHY_CALORIES, MAX_SCORE, MIN_SCORE,
)
from budgetmeal.utilities.json_reply import parse_json_object

logger = logging.getLogger(__name__)

__all__ = ["analyze_locally", "parse_analysis", "build_analysis_prompt", "DayAnalyzer"]


def _totals(plan: GeneratedPlan):
    calories = sum(m.calories or 0 for m in plan.meals)
    cost = sum(m.cost or 0 for m in plan.meals)
    return calories, cost


def analyze_locally(plan: GeneratedPlan, low_cost_threshold: float = LOW_COST_THRESHOLD) -> AnalysisResult:
    if not plan.meals:
        return AnalysisResult(score=BASE_SCORE, summary=GENERIC_SUMMARY)
    calories, cost = _totals(plan)
    score = BASE_SCORE
    if HEALTHY_CALORIES[0] <= calories <= HEALTHY_CALORIES[1]:
        score += 1
    elif calories < ACCEPTABLE_CALORIES[0] or calories > ACCEPTABLE_CALORIES[1]:
        score -= 1
    if cost < low_cost_threshold:
        score += 1
    score = max(MIN_SCORE, min(MAX_SCORE, score))
    summary = (f"This meal plan provides {calories} kcal for only {cost:.0f} ETB. "
               f"A combination of traditional dishes balancing nutrition and affordability.")
    return AnalysisResult(score=score, summary=summary)


def build_analysis_prompt(plan: GeneratedPlan) -> str:
    calories, cost = _totals(plan)
    meals = [{"type": m.type, "name": m.name, "cost": m.cost, "calories": m.calories} for m in plan.meals]
    return ANALYSIS_PROMPT_TEMPLATE.format(
        meals=json.dumps(meals, ensure_ascii=False, indent=2),
        calories=calories,
        cost=f"{cost:.2f}",
    )


def parse_analysis(reply) -> AnalysisResult:
    """Validate a {score, summary} reply; raise ExternalServiceFailure when unusable."""
    data = parse_json_object(reply)
    score = data.get("score")
    summary = data.get("summary")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ExternalServiceFailure(f"Reply score is not a number: {score!r}")
    if isinstance(score, float):
        if not score.is_integer():
            raise ExternalServiceFailure(f"Reply score is not an integer: {score!r}")
        score = int(score)
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ExternalServiceFailure(f"Reply score out of range: {score}")
    if not isinstance(summary, str) or not summary.strip():
        raise ExternalServiceFailure("Reply summary is empty")
    return AnalysisResult(score=score, summary=summary.strip())


class DayAnalyzer:
    def __init__(self, scoring_fn: Optional[Callable[[str], str]] = None):
        self.scoring_fn = scoring_fn

    def analyze(self, plan: GeneratedPlan) -> AnalysisResult:
        if self.scoring_fn is None or not plan.meals:
            return analyze_locally(plan)
        try:
            reply = self.scoring_fn(build_analysis_prompt(plan))
            return parse_analysis(reply)
        except Exception as e:
            logger.warning("Delegated day analysis failed, using local heuristic: %s", e)
            return analyze_locally(plan)
