"""Choosing one combination from a non-empty candidate list.

Two strategies:
- LocalStrategy: uniform random pick, no external dependency.
- DelegatedStrategy: asks a text-generation callable to pick from a bounded,
  randomly sampled shortlist; any failure falls back to a local pick over the
  same shortlist.

Both take an injectable random source (anything with `choice` and `sample`,
e.g. random.Random) so outcomes can be pinned in tests.
"""
from __future__ import annotations
import json
import logging
import random
from typing import Callable, Iterable, List, Optional, Sequence

from budgetmeal.domain.MealCombination import MealCombination, MealId, same_id
from budgetmeal.domain.UserProfile import UserProfile
from budgetmeal.domain.errors import ExternalServiceFailure, InvariantViolation
from budgetmeal.utilities.config import SHORTLIST_SIZE
from budgetmeal.utilities.constants import SELECTION_PROMPT_TEMPLATE
from budgetmeal.utilities.json_reply import parse_json_object

logger = logging.getLogger(__name__)

ScoringFn = Callable[[str], str]

__all__ = [
    "ScoringFn", "LocalStrategy", "DelegatedStrategy", "PlanSelector",
    "build_strategy", "build_selection_prompt", "parse_selected_id",
]


class LocalStrategy:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def choose(self, candidates: Sequence[MealCombination], profile: UserProfile,
               recent_ids: Sequence[MealId] = ()) -> MealCombination:
        if len(candidates) == 1:
            return candidates[0]
        return self.rng.choice(list(candidates))


class DelegatedStrategy:
    def __init__(self, scoring_fn: ScoringFn, rng: Optional[random.Random] = None,
                 shortlist_size: int = SHORTLIST_SIZE):
        self.scoring_fn = scoring_fn
        self.rng = rng or random.Random()
        self.shortlist_size = max(1, shortlist_size)
        self.local = LocalStrategy(self.rng)

    def shortlist(self, candidates: Sequence[MealCombination]) -> List[MealCombination]:
        """Random sample without replacement, at most `shortlist_size` long."""
        pool = list(candidates)
        return self.rng.sample(pool, min(self.shortlist_size, len(pool)))

    def choose(self, candidates: Sequence[MealCombination], profile: UserProfile,
               recent_ids: Sequence[MealId] = ()) -> MealCombination:
        shortlist = self.shortlist(candidates)
        try:
            return self._ask(shortlist, profile, recent_ids)
        except Exception as e:
            # any delegation failure degrades to a local pick over the same shortlist
            logger.warning("Delegated meal selection failed, picking locally: %s", e)
            return self.local.choose(shortlist, profile, recent_ids)

    def _ask(self, shortlist: List[MealCombination], profile: UserProfile,
             recent_ids: Sequence[MealId]) -> MealCombination:
        prompt = build_selection_prompt(shortlist, profile, recent_ids)
        try:
            reply = self.scoring_fn(prompt)
        except Exception as e:
            raise ExternalServiceFailure(f"Text-generation call failed: {e}") from e
        selected = parse_selected_id(reply)
        for combo in shortlist:
            if same_id(selected, combo.id):
                logger.info("Delegated selection picked combination %s", combo.id)
                return combo
        raise ExternalServiceFailure(f"Selected id {selected!r} is not in the shortlist")


def build_selection_prompt(shortlist: Iterable[MealCombination], profile: UserProfile,
                           recent_ids: Sequence[MealId] = ()) -> str:
    candidates = [
        {
            "id": c.id,
            "breakfast": c.breakfast.name,
            "lunch": c.lunch.name,
            "dinner": c.dinner.name,
            "total": c.total,
        }
        for c in shortlist
    ]
    return SELECTION_PROMPT_TEMPLATE.format(
        profile=json.dumps(profile.to_dict(), ensure_ascii=False),
        recent=json.dumps(list(recent_ids or []), ensure_ascii=False),
        candidates=json.dumps(candidates, ensure_ascii=False, indent=2),
    )


def parse_selected_id(reply) -> MealId:
    """Extract `selectedId` from a reply or raise ExternalServiceFailure."""
    data = parse_json_object(reply)
    selected = data.get("selectedId")
    if selected is None or isinstance(selected, (bool, dict, list)):
        raise ExternalServiceFailure(f"Reply has no usable selectedId: {data!r}")
    return selected


class PlanSelector:
    def __init__(self, strategy=None):
        self.strategy = strategy or LocalStrategy()

    def select(self, candidates: Sequence[MealCombination], profile: Optional[UserProfile] = None,
               recent_ids: Sequence[MealId] = ()) -> MealCombination:
        """Return exactly one member of `candidates`.

        An empty list means the budget/variety fallbacks were skipped upstream,
        so it fails fast with InvariantViolation instead of yielding nothing.
        """
        if not candidates:
            raise InvariantViolation("PlanSelector.select called with no candidates")
        return self.strategy.choose(list(candidates), profile or UserProfile(), list(recent_ids or []))


def build_strategy(scoring_fn: Optional[ScoringFn] = None, rng: Optional[random.Random] = None,
                   shortlist_size: int = SHORTLIST_SIZE):
    """Delegated when a scoring callable is available, local otherwise."""
    if scoring_fn is None:
        return LocalStrategy(rng)
    return DelegatedStrategy(scoring_fn, rng, shortlist_size)
