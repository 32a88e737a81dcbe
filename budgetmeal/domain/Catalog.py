"""Catalog aggregate: the fixed, load-ordered set of meal combinations, partitioned by price tier."""
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from budgetmeal.domain.MealCombination import MealCombination, MealId, SMALL, MEDIUM, LARGE, TIERS
from budgetmeal.domain.errors import DataIntegrityError
from budgetmeal.utilities.config import TIER_THRESHOLDS


def classify_tier(total: float, thresholds: Optional[Dict[str, float]] = None) -> str:
    th = thresholds or TIER_THRESHOLDS
    if total < th[SMALL]:
        return SMALL
    if total < th[MEDIUM]:
        return MEDIUM
    return LARGE


class Catalog:
    def __init__(self, combinations: Optional[List[MealCombination]] = None):
        self._combinations = tuple(combinations or ())
        self._by_id = {str(c.id): c for c in self._combinations}

    @classmethod
    def load(cls, raw_entries: Iterable[dict], thresholds: Optional[Dict[str, float]] = None) -> "Catalog":
        """Validate raw records and build the catalog.

        Any stated tier label in the records is ignored; tiers come from the
        configured thresholds.
        Raises DataIntegrityError on a bad total, a bad price or a duplicate id.
        """
        combinations: List[MealCombination] = []
        seen = set()
        for entry in raw_entries or []:
            if not isinstance(entry, dict):
                raise DataIntegrityError(f"Catalog entry is not a record: {entry!r}")
            combo = MealCombination.from_dict(entry, LARGE)
            combo = replace(combo, tier=classify_tier(combo.total, thresholds))
            key = str(combo.id)
            if key in seen:
                raise DataIntegrityError(f"Duplicate catalog id: {combo.id}")
            seen.add(key)
            combinations.append(combo)
        return cls(combinations)

    def all(self) -> List[MealCombination]:
        return list(self._combinations)

    def by_tier(self, tier: str) -> List[MealCombination]:
        if tier not in TIERS:
            return []
        return [c for c in self._combinations if c.tier == tier]

    def get(self, meal_id: MealId) -> Optional[MealCombination]:
        if meal_id is None:
            return None
        return self._by_id.get(str(meal_id))

    def __len__(self) -> int:
        return len(self._combinations)

    def __iter__(self):
        return iter(self._combinations)

    def __str__(self) -> str:
        counts = ", ".join(f"{t}: {len(self.by_tier(t))}" for t in TIERS)
        return f"Catalog({len(self)} combinations; {counts})"

    __repr__ = __str__
