"""Month-to-date spending against the monthly budget (dashboard figures)."""
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional


def _plan_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def monthly_spend_summary(plans: Iterable[Dict[str, Any]], monthly_budget: float,
                          today: Optional[date] = None) -> Dict[str, Any]:
    """Aggregate the cost of stored plans dated in the current month.

    Returns:
      {
        'spent': float, 'budget': float, 'remaining': float,
        'percent': 0-100, 'plan_count': int,
        'daily_costs': {day_of_month: cost}
      }
    """
    today = today or date.today()
    budget = monthly_budget if monthly_budget and monthly_budget > 0 else 0.0
    daily = defaultdict(float)
    spent = 0.0
    count = 0
    for plan in plans or []:
        d = _plan_date(plan.get("date"))
        if d is None or (d.year, d.month) != (today.year, today.month):
            continue
        cost = plan.get("total_estimated_cost") or 0
        spent += cost
        daily[d.day] += cost
        count += 1

    if budget > 0:
        percent = min(spent / budget * 100, 100.0)
    else:
        percent = 100.0 if spent > 0 else 0.0

    return {
        "spent": round(spent, 2),
        "budget": budget,
        "remaining": round(budget - spent, 2),
        "percent": round(percent, 1),
        "plan_count": count,
        "daily_costs": {day: round(cost, 2) for day, cost in sorted(daily.items())},
    }


__all__ = ["monthly_spend_summary"]
