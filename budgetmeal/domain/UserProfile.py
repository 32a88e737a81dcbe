"""UserProfile domain entity: the read-only inputs a generation request brings along.

Dietary restrictions and allergies are carried for the external scoring call
only. The catalog has no tagging, so they never narrow the local candidate set.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List


def _as_budget(value) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        budget = float(value)
    except (TypeError, ValueError):
        return 0.0
    if budget != budget or budget < 0:  # NaN or negative
        return 0.0
    return budget


def _as_list(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return [str(v).strip() for v in value if str(v).strip()]


@dataclass(frozen=True)
class UserProfile:
    monthly_budget: float = 0.0
    goals: str = ""
    dietary_restrictions: List[str] = field(default_factory=list)
    allergies: List[str] = field(default_factory=list)
    activity_level: str = ""

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "UserProfile":
        '''Accepts camelCase or snake_case keys; "weeklyBudget" is the legacy name of the monthly budget.'''
        d = dict(data) if isinstance(data, dict) else {}
        budget = d.get("monthlyBudget", d.get("monthly_budget", d.get("weeklyBudget")))
        return UserProfile(
            monthly_budget=_as_budget(budget),
            goals=str(d.get("goals") or ""),
            dietary_restrictions=_as_list(d.get("dietaryRestrictions", d.get("dietary_restrictions"))),
            allergies=_as_list(d.get("allergies")),
            activity_level=str(d.get("activityLevel", d.get("activity_level")) or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "monthlyBudget": self.monthly_budget,
            "goals": self.goals,
            "dietaryRestrictions": list(self.dietary_restrictions),
            "allergies": list(self.allergies),
            "activityLevel": self.activity_level,
        }
