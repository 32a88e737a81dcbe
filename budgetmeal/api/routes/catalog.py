from typing import Optional
from fastapi import APIRouter, HTTPException, Query, Request

from budgetmeal.domain.MealCombination import TIERS

router = APIRouter()


@router.get("/api/catalog")
def list_catalog(request: Request, tier: Optional[str] = Query(default=None)):
    """Return the meal catalog in load order, optionally narrowed to one price tier."""
    catalog = request.app.state.catalog
    if tier is None:
        combos = catalog.all()
    else:
        if tier not in TIERS:
            raise HTTPException(status_code=400, detail=f"Unknown tier '{tier}'. Use one of: {', '.join(TIERS)}")
        combos = catalog.by_tier(tier)
    return {"count": len(combos), "meals": [c.to_dict() for c in combos]}
