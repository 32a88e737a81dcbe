"""MealCombination domain entity: a priced breakfast + lunch + dinner triple from the catalog."""
import math
from dataclasses import dataclass
from typing import Any, Dict, Union

from budgetmeal.domain.errors import DataIntegrityError

MealId = Union[int, str]

SMALL = "Small"
MEDIUM = "Medium"
LARGE = "Large"
TIERS = (SMALL, MEDIUM, LARGE)


@dataclass(frozen=True)
class MealItem:
    name: str
    price: float

    @staticmethod
    def from_dict(data, slot: str = "") -> "MealItem":
        if not isinstance(data, dict):
            raise DataIntegrityError(f"Missing {slot or 'meal'} entry")
        name = str(data.get("name") or "").strip()
        price = data.get("price")
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise DataIntegrityError(f"{slot or 'meal'} '{name}' has no numeric price")
        if price < 0:
            raise DataIntegrityError(f"{slot or 'meal'} '{name}' has a negative price: {price}")
        return MealItem(name=name, price=price)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "price": self.price}


@dataclass(frozen=True)
class MealCombination:
    id: MealId
    tier: str
    breakfast: MealItem
    lunch: MealItem
    dinner: MealItem
    total: float

    @property
    def items(self):
        return (self.breakfast, self.lunch, self.dinner)

    @staticmethod
    def from_dict(data: Dict[str, Any], tier: str) -> "MealCombination":
        '''Builds a combination from a raw catalog record, checking its total against its prices.'''
        meal_id = data.get("id")
        if meal_id is None or isinstance(meal_id, bool) or meal_id == "":
            raise DataIntegrityError(f"Catalog entry without id: {data!r}")
        breakfast = MealItem.from_dict(data.get("breakfast"), "breakfast")
        lunch = MealItem.from_dict(data.get("lunch"), "lunch")
        dinner = MealItem.from_dict(data.get("dinner"), "dinner")
        expected = breakfast.price + lunch.price + dinner.price
        total = data.get("total", expected)
        if isinstance(total, bool) or not isinstance(total, (int, float)):
            raise DataIntegrityError(f"Catalog entry {meal_id} has no numeric total")
        # half a cent absorbs float representation error only
        if not math.isclose(total, expected, abs_tol=0.005):
            raise DataIntegrityError(
                f"Catalog entry {meal_id}: total {total} != {expected} (sum of meal prices)"
            )
        return MealCombination(id=meal_id, tier=tier, breakfast=breakfast,
                               lunch=lunch, dinner=dinner, total=total)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "breakfast": self.breakfast.to_dict(),
            "lunch": self.lunch.to_dict(),
            "dinner": self.dinner.to_dict(),
            "total": self.total,
            "category": self.tier,
        }

    def __str__(self) -> str:
        return (f"#{self.id} [{self.tier}] {self.breakfast.name} / {self.lunch.name} / "
                f"{self.dinner.name} - {self.total} ETB")


def id_sort_key(meal_id: MealId):
    """Orders mixed int/str ids: integers numerically first, then strings."""
    if isinstance(meal_id, int):
        return (0, meal_id, "")
    return (1, 0, str(meal_id))


def same_id(a: Any, b: MealId) -> bool:
    """Compares ids across the JSON boundary where 7, 7.0 and "7" mean the same entry."""
    if a is None or isinstance(a, bool):
        return False
    if isinstance(a, float) and a.is_integer():
        a = int(a)
    return str(a).strip() == str(b)
