"""Plan domain entities: a generated day of meals and its analysis."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from budgetmeal.domain.MealCombination import MealId


@dataclass(frozen=True)
class PlannedMeal:
    type: str
    name: str
    cost: float
    calories: int
    ingredients: Tuple[Dict[str, Any], ...] = ()
    instructions: str = ""

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "PlannedMeal":
        d = dict(data) if isinstance(data, dict) else {}
        return PlannedMeal(
            type=d.get("type", ""),
            name=d.get("name", ""),
            cost=d.get("cost", 0) or 0,
            calories=d.get("calories", 0) or 0,
            ingredients=tuple(dict(i) if isinstance(i, dict) else {"name": str(i)}
                              for i in d.get("ingredients") or []),
            instructions=d.get("instructions", "") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "cost": self.cost,
            "calories": self.calories,
            "ingredients": [dict(i) for i in self.ingredients],
            "instructions": self.instructions,
        }


@dataclass(frozen=True)
class AnalysisResult:
    score: int
    summary: str

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "summary": self.summary}


@dataclass(frozen=True)
class GeneratedPlan:
    date: str
    total_estimated_cost: float
    total_calories: int
    meals: Tuple[PlannedMeal, ...] = field(default_factory=tuple)
    meal_id: Optional[MealId] = None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "GeneratedPlan":
        '''Rebuilds a plan from a stored document; store-only keys (id, notes, aiAnalysis) are ignored.'''
        d = dict(data) if isinstance(data, dict) else {}
        meals = tuple(PlannedMeal.from_dict(m) for m in d.get("meals") or [])
        total_calories = d.get("total_calories")
        if total_calories is None:
            total_calories = sum(m.calories for m in meals)
        return GeneratedPlan(
            date=d.get("date", ""),
            total_estimated_cost=d.get("total_estimated_cost", sum(m.cost for m in meals)),
            total_calories=total_calories,
            meals=meals,
            meal_id=d.get("mealId", d.get("meal_id")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "total_estimated_cost": self.total_estimated_cost,
            "total_calories": self.total_calories,
            "mealId": self.meal_id,
            "meals": [m.to_dict() for m in self.meals],
        }

    def meal_names(self) -> List[str]:
        return [m.name for m in self.meals]
